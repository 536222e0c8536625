"""
Legacy activity import
Converts activities that store category/subcategory as free-text strings into
category/subcategory id references
"""

from datetime import datetime
from typing import Any, Dict, Optional

from .categories import CategoryStore, find_subcategory
from .db import DatabaseManager, get_db
from .logger import get_logger
from .normalize import normalize
from .timeutils import utcnow

logger = get_logger(__name__)


def _legacy_timestamp(doc: Dict[str, Any]) -> Optional[Any]:
    value = doc.get("timestamp")
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def import_legacy_activities(db: Optional[DatabaseManager] = None) -> Dict[str, int]:
    """Migrate string-based activities in place.

    Missing categories and subcategories are created on the fly (with a unique
    color). Returns counts of updated, skipped and failed documents.
    """
    db = db or get_db()
    categories = CategoryStore(db)

    legacy = list(db.activities.find({"category": {"$type": "string"}}))
    logger.info(f"Found {len(legacy)} legacy activities to migrate")

    updated = skipped = errors = 0
    for doc in legacy:
        try:
            name = normalize(doc.get("category"))
            if not name:
                logger.warning(f"Skipping activity {doc['_id']}: no category name")
                skipped += 1
                continue

            category = categories.ensure_category(doc["category"])
            changes: Dict[str, Any] = {"categoryId": category["_id"]}
            unset: Dict[str, str] = {"category": ""}

            sub_name = doc.get("subcategory")
            if isinstance(sub_name, str):
                unset["subcategory"] = ""
                if normalize(sub_name):
                    sub = find_subcategory(category, name=sub_name)
                    if sub is None:
                        sub = categories.ensure_subcategory(category, sub_name)
                    changes["subcategoryId"] = sub["_id"]

            if not doc.get("createdAt"):
                created = _legacy_timestamp(doc) or utcnow()
                changes["createdAt"] = created
                changes.setdefault("updatedAt", doc.get("updatedAt") or created)
            if "timestamp" in doc:
                unset["timestamp"] = ""

            db.activities.update_one({"_id": doc["_id"]}, {"$set": changes, "$unset": unset})
            updated += 1
        except Exception as e:
            logger.error(f"Error migrating activity {doc.get('_id')}: {e}", exc_info=True)
            errors += 1

    summary = {"updated": updated, "skipped": skipped, "errors": errors, "total": len(legacy)}
    logger.info(f"Legacy migration summary: {summary}")
    return summary
