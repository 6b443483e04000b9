"""
Application configuration
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Repo Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database (MongoDB)
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "bitbridge"
    MONGODB_REPO_COLLECTION: str = "repos"
    MONGODB_ENSURE_INDEXES: bool = True

    # RPC transport
    RPC_HOST: str = "0.0.0.0"
    RPC_PORT: int = 50051
    # Deadline applied to store calls when the caller sends none
    RPC_DEFAULT_TIMEOUT_SECONDS: Optional[float] = None

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
