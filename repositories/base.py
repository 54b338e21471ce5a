"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Generic, Iterable, List, Mapping, Optional, Type, TypeVar
from abc import ABC
import uuid

from pymongo.collection import Collection as MongoCollection
from pymongo.database import Database

from adapters.mongo_adapter import Collection, collection as get_collection
from app.config import settings
from core.utils.helpers import chunked, unique_ids
from domain.models import Document

ModelType = TypeVar("ModelType", bound=Document)


def new_document_id() -> str:
    """Generate an id for a document that has not been written yet."""
    return uuid.uuid4().hex


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations over one collection.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Database, model: Type[ModelType], name: Collection):
        self.db = db
        self.model = model
        self.collection: MongoCollection = get_collection(name, db)

    # ------------------ Mapping ------------------
    def _to_model(self, doc: Optional[Mapping[str, Any]]) -> Optional[ModelType]:
        return self.model.from_document(doc)

    def _to_models(self, docs: Iterable[Mapping[str, Any]]) -> List[ModelType]:
        return [self.model.from_document(d) for d in docs]

    def _find(self, query: Mapping[str, Any], sort=None, limit: int = 0) -> List[ModelType]:
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return self._to_models(cursor)

    def _find_in(self, field: str, values: Iterable[str]) -> List[ModelType]:
        """Run one ``$in`` query per chunk of values and concatenate the results."""
        ids = unique_ids(values)
        if not ids:
            return []
        results: List[ModelType] = []
        for chunk in chunked(ids, settings.in_query_chunk_size):
            results.extend(self._find({field: {"$in": chunk}}))
        return results

    # ------------------ CRUD ------------------
    def new_id(self) -> str:
        return new_document_id()

    def get(self, entity_id: str) -> Optional[ModelType]:
        """Get entity by ID, or None if it does not exist"""
        return self._to_model(self.collection.find_one({"_id": entity_id}))

    def get_many(self, entity_ids: Iterable[str]) -> List[ModelType]:
        """Get several entities by ID; unknown ids are skipped"""
        return self._find_in("_id", entity_ids)

    def create(self, entity: ModelType) -> ModelType:
        """Insert a new entity, assigning an id when it has none"""
        if entity.id is None:
            entity.id = self.new_id()
        self.collection.insert_one(entity.to_document())
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Merge the entity's fields into the stored document"""
        if entity.id is None:
            raise ValueError(f"{self.model.__name__} must have an id to be updated")
        self.collection.update_one(
            {"_id": entity.id},
            {"$set": entity.to_document(include_id=False)},
            upsert=True,
        )
        return entity

    def update_fields(self, entity_id: str, fields: Mapping[str, Any]) -> Optional[ModelType]:
        """Set only the given fields and return the stored result"""
        if fields:
            self.collection.update_one({"_id": entity_id}, {"$set": dict(fields)})
        return self.get(entity_id)

    def delete(self, entity_id: str) -> bool:
        """Delete entity by ID"""
        result = self.collection.delete_one({"_id": entity_id})
        return result.deleted_count > 0

    def exists(self, entity_id: str) -> bool:
        """Check if entity exists"""
        return self.collection.find_one({"_id": entity_id}, {"_id": 1}) is not None
