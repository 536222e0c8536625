"""
MongoDB database wrapper
Owns the client connection, the collections and their indexes
"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from daybook.config.loader import get_config
from daybook.core.logger import get_logger

logger = get_logger(__name__)

CATEGORIES = "categories"
ACTIVITIES = "activities"
CACHE_ENTRIES = "cache_entries"

DEFAULT_URI = "mongodb://localhost:27017/daybook"
DEFAULT_DB_NAME = "daybook"


class DatabaseManager:
    """Database manager"""

    def __init__(
        self,
        uri: Optional[str] = None,
        db_name: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        config = get_config()
        self.uri = uri or config.get("database.uri") or DEFAULT_URI
        default_name = db_name or config.get("database.name") or DEFAULT_DB_NAME

        # An injected client (mongomock in tests) skips the network connection
        self.client = client if client is not None else MongoClient(self.uri, tz_aware=True)
        self.db: Database = self.client.get_default_database(default=default_name)
        self._init_database()

    def _init_database(self):
        """Create indexes (idempotent)"""
        self.categories.create_index([("name", ASCENDING)], unique=True)
        self.categories.create_index([("subcategories.name", ASCENDING)])
        self.activities.create_index([("date", ASCENDING)])
        self.activities.create_index([("categoryId", ASCENDING)])
        self.cache_entries.create_index([("timestamp", DESCENDING)])
        logger.info(f"Database initialization completed: {self.db.name}")

    @property
    def categories(self) -> Collection:
        return self.db[CATEGORIES]

    @property
    def activities(self) -> Collection:
        return self.db[ACTIVITIES]

    @property
    def cache_entries(self) -> Collection:
        return self.db[CACHE_ENTRIES]

    def ping(self) -> bool:
        """Check the connection with a single round trip"""
        try:
            self.db.command("ping")
            return True
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False

    def close(self) -> None:
        self.client.close()


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id string, returning None for anything that is not an ObjectId"""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# Global database instance
_db_instance: Optional[DatabaseManager] = None


def get_db() -> DatabaseManager:
    """Get global database instance"""
    global _db_instance
    if _db_instance is None:
        _db_instance = DatabaseManager()
    return _db_instance


def init_db(
    uri: Optional[str] = None,
    db_name: Optional[str] = None,
    client: Optional[Any] = None,
) -> DatabaseManager:
    """Replace the global database instance"""
    global _db_instance
    if _db_instance is not None and _db_instance.client is not client:
        _db_instance.close()
    _db_instance = DatabaseManager(uri=uri, db_name=db_name, client=client)
    return _db_instance
