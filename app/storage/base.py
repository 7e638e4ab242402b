# app/storage/base.py
"""Base storage interface over a MongoDB collection."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Dict, Any, Tuple

from pymongo import ReturnDocument, DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.models.base import utcnow
from app.core.exceptions import ConflictError
from app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class BaseStore(ABC, Generic[T]):
    """Abstract base class for all collection-backed stores."""

    collection_name: str = ""
    id_field: str = "id"

    def __init__(self, db: Database):
        self.db = db
        self.collection: Collection = db[self.collection_name]

    @abstractmethod
    def _serialize(self, entity: T) -> Dict[str, Any]:
        """Serialize entity to a document."""
        pass

    @abstractmethod
    def _deserialize(self, data: Dict[str, Any]) -> T:
        """Deserialize a document to an entity."""
        pass

    @abstractmethod
    def _get_id(self, entity: T) -> str:
        """Get entity ID."""
        pass

    def _load(self, document: Optional[Dict[str, Any]]) -> Optional[T]:
        if document is None:
            return None
        document.pop("_id", None)
        return self._deserialize(document)

    def _load_many(self, documents) -> List[T]:
        """Deserialize a cursor, skipping documents that do not fit the model."""
        results = []
        for document in documents:
            try:
                results.append(self._load(document))
            except ValueError as e:
                logger.error(f"Failed to deserialize {self.collection_name} document {document.get(self.id_field)}: {e}")
        return results

    def insert(self, entity: T) -> T:
        """Insert a new entity."""
        try:
            self.collection.insert_one(self._serialize(entity))
        except DuplicateKeyError:
            raise ConflictError(
                message=f"Duplicate {self.collection_name} entity: {self._get_id(entity)}",
                error_code="DUPLICATE_ENTITY",
                details={self.id_field: self._get_id(entity)}
            )
        logger.info(f"Inserted {self.collection_name} entity: {self._get_id(entity)}")
        return entity

    def get(self, entity_id: str) -> Optional[T]:
        """Get entity by ID."""
        return self._load(self.collection.find_one({self.id_field: entity_id}))

    def get_all(self) -> List[T]:
        """Get all entities, newest first."""
        return self.find({})

    def find(
        self,
        filters: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0
    ) -> List[T]:
        """Query entities with a MongoDB filter."""
        cursor = self.collection.find(filters)
        cursor = cursor.sort(sort or [("createdAt", DESCENDING)])
        if limit:
            cursor = cursor.limit(limit)
        return self._load_many(cursor)

    def find_one(self, filters: Dict[str, Any]) -> Optional[T]:
        return self._load(self.collection.find_one(filters))

    def update(self, entity_id: str, changes: Dict[str, Any]) -> Optional[T]:
        """Set fields on an entity and return the updated version."""
        changes = {**changes, "updatedAt": utcnow()}
        document = self.collection.find_one_and_update(
            {self.id_field: entity_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
        if document is None:
            logger.warning(f"Update skipped, {self.collection_name} entity not found: {entity_id}")
            return None
        logger.info(f"Updated {self.collection_name} entity: {entity_id} ({', '.join(changes)})")
        return self._load(document)

    def exists(self, entity_id: str) -> bool:
        """Check if entity exists."""
        return self.collection.count_documents({self.id_field: entity_id}, limit=1) > 0

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count entities."""
        return self.collection.count_documents(filters or {})

    def delete_all(self) -> int:
        """Delete every document in the collection."""
        result = self.collection.delete_many({})
        logger.info(f"Deleted {result.deleted_count} {self.collection_name} documents")
        return result.deleted_count

    def insert_many(self, entities: List[T]) -> int:
        if not entities:
            return 0
        result = self.collection.insert_many([self._serialize(e) for e in entities])
        logger.info(f"Inserted {len(result.inserted_ids)} {self.collection_name} documents")
        return len(result.inserted_ids)
