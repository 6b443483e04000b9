"""Generic MongoDB repository shared by entity-specific repositories."""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from repo_service.entities.base import BaseEntity, is_object_id_hex
from repo_service.exceptions import InvalidArgumentError

T = TypeVar("T", bound=BaseEntity)


class BaseRepository(Generic[T]):
    """Thin CRUD layer mapping documents of one collection to an entity type."""

    def __init__(self, db: Database, collection_name: str, model_cls: Type[T]):
        self.db = db
        self.collection: Collection = db[collection_name]
        self.model_cls = model_cls

    @staticmethod
    def _to_object_id(value: str | ObjectId) -> ObjectId:
        if isinstance(value, ObjectId):
            return value
        if not is_object_id_hex(value):
            raise InvalidArgumentError(f"Invalid id: {value!r}")
        return ObjectId(value)

    def _to_entity(self, doc: Optional[Dict[str, Any]]) -> Optional[T]:
        return self.model_cls.model_validate(doc) if doc else None

    def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        return self._to_entity(self.collection.find_one(query))

    def find_many(
        self,
        query: Dict[str, Any],
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        cursor = self.collection.find(query)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self.model_cls.model_validate(doc) for doc in cursor]

    def insert_one(self, entity: T) -> T:
        result = self.collection.insert_one(entity.to_mongo())
        entity.id = result.inserted_id
        return entity

    def update_one(self, entity_id: str | ObjectId, updates: Dict[str, Any]) -> Optional[T]:
        """Apply ``$set`` updates and return the document after the change."""
        doc = self.collection.find_one_and_update(
            {"_id": self._to_object_id(entity_id)},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        return self._to_entity(doc)

    def delete_one(self, entity_id: str | ObjectId) -> int:
        result = self.collection.delete_one({"_id": self._to_object_id(entity_id)})
        return result.deleted_count
