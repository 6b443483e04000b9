"""Base entity and ObjectId helpers shared by all stored documents."""

import re
from datetime import datetime
from typing import Annotated, Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from repo_service.utils.datetime import ensure_utc, utc_now


_OBJECT_ID_HEX = re.compile(r"[0-9a-fA-F]{24}")


def is_object_id_hex(value: Any) -> bool:
    """True only for exactly 24 hex characters; no whitespace, no raw bytes."""
    return isinstance(value, str) and _OBJECT_ID_HEX.fullmatch(value) is not None


def _to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if is_object_id_hex(value):
        return ObjectId(value)
    raise ValueError(f"Invalid ObjectId: {value!r}")


PyObjectId = Annotated[ObjectId, BeforeValidator(_to_object_id)]
UtcDatetime = Annotated[datetime, BeforeValidator(lambda v: ensure_utc(v) if isinstance(v, datetime) else v)]


class BaseEntity(BaseModel):
    """Common fields for documents stored in MongoDB."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: UtcDatetime = Field(default_factory=utc_now)
    updated_at: UtcDatetime = Field(default_factory=utc_now)

    def to_mongo(self) -> Dict[str, Any]:
        """Dump to a document ready for insertion."""
        doc = self.model_dump(by_alias=True)
        if doc.get("_id") is None:
            doc.pop("_id", None)
        return doc
