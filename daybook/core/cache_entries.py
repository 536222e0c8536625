"""
Cache entry store
Free-form notes positioned on the cache board
"""

from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from daybook.models import CacheEntryInfo, Position

from .db import DatabaseManager, get_db, to_object_id
from .exceptions import NotFoundError
from .logger import get_logger
from .timeutils import utcnow

logger = get_logger(__name__)

DEFAULT_POSITION = {"x": 300, "y": 300}


def cache_entry_info(doc: Dict[str, Any]) -> CacheEntryInfo:
    position = doc.get("position") or DEFAULT_POSITION
    return CacheEntryInfo(
        id=str(doc["_id"]),
        title=doc.get("title") or "",
        body=doc.get("body") or "",
        timestamp=doc["timestamp"],
        position=Position(x=position.get("x", 300), y=position.get("y", 300)),
    )


class CacheEntryStore:
    """Cache entry persistence"""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db_manager = db or get_db()

    @property
    def collection(self):
        return self.db_manager.cache_entries

    def create(
        self,
        title: str = "",
        body: str = "",
        position: Optional[Dict[str, float]] = None,
    ) -> CacheEntryInfo:
        doc = {
            "timestamp": utcnow(),
            "title": (title or "").strip(),
            "body": (body or "").strip(),
            "position": dict(position or DEFAULT_POSITION),
        }
        doc["_id"] = self.collection.insert_one(doc).inserted_id
        logger.debug(f"Cache entry created: {doc['_id']}")
        return cache_entry_info(doc)

    def list(self) -> List[CacheEntryInfo]:
        """Newest first"""
        return [
            cache_entry_info(doc)
            for doc in self.collection.find({}).sort([("timestamp", -1), ("_id", -1)])
        ]

    def update(
        self,
        entry_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
        position: Optional[Dict[str, float]] = None,
    ) -> CacheEntryInfo:
        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = title.strip()
        if body is not None:
            changes["body"] = body.strip()
        if position is not None:
            changes["position"] = dict(position)

        oid = to_object_id(entry_id)
        doc = None
        if oid is not None:
            if changes:
                doc = self.collection.find_one_and_update(
                    {"_id": oid}, {"$set": changes}, return_document=ReturnDocument.AFTER
                )
            else:
                doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError("Cache entry not found")
        return cache_entry_info(doc)

    def delete(self, entry_id: str) -> CacheEntryInfo:
        oid = to_object_id(entry_id)
        doc = self.collection.find_one_and_delete({"_id": oid}) if oid is not None else None
        if doc is None:
            raise NotFoundError("Cache entry not found")
        logger.debug(f"Cache entry deleted: {entry_id}")
        return cache_entry_info(doc)
