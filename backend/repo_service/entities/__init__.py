"""Database entity models - represents the actual structure stored in MongoDB"""

from .base import BaseEntity, PyObjectId, is_object_id_hex
from .repo import Repo

__all__ = [
    "BaseEntity",
    "PyObjectId",
    "Repo",
    "is_object_id_hex",
]
