# app/database/mongo_client.py
from typing import Dict, Optional

from pymongo import MongoClient, ASCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.constants import COLLECTION_INDEXES
from app.core.exceptions import MongoConnectionError
from app.core.logging import get_logger

logger = get_logger(__name__)


class MongoDBClient:
    """Shared MongoDB connection for the process."""

    def __init__(self, client: Optional[MongoClient] = None, db_name: Optional[str] = None):
        self.client = client or MongoClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS
        )
        self.db: Database = self.client[db_name or settings.MONGODB_DB_NAME]

    def close(self):
        self.client.close()

    def ping(self) -> bool:
        """Check the server is reachable."""
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    def ensure_indexes(self):
        """Create the indexes every collection relies on."""
        try:
            for collection, indexes in COLLECTION_INDEXES.items():
                for field, unique in indexes:
                    self.db[collection].create_index([(field, ASCENDING)], unique=unique)
        except PyMongoError as e:
            raise MongoConnectionError(str(e))
        logger.info(f"Indexes ensured on {len(COLLECTION_INDEXES)} collections")

    def collection_counts(self) -> Dict[str, int]:
        return {
            name: self.db[name].count_documents({})
            for name in COLLECTION_INDEXES
        }
