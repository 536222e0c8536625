"""
Category store
Categories with embedded subcategories, find-or-describe creation and usage counters
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from daybook.models import CategoryInfo, SubcategoryInfo

from .colors import assign_color
from .db import DatabaseManager, get_db, to_object_id
from .exceptions import NotFoundError
from .logger import get_logger
from .normalize import normalize, require_name
from .suggestions import suggest_categories, suggest_subcategories
from .timeutils import utcnow

logger = get_logger(__name__)


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a find-or-create call.

    ``kind`` is ``"created"`` for a fresh record and ``"conflict"`` when the
    normalized name already existed, in which case ``value`` is the existing
    record.
    """

    kind: Literal["created", "conflict"]
    value: Any

    @property
    def created(self) -> bool:
        return self.kind == "created"


def subcategory_info(sub: Dict[str, Any]) -> SubcategoryInfo:
    return SubcategoryInfo(
        id=str(sub.get("_id", "")),
        name=sub.get("name", ""),
        display_name=sub.get("displayName") or sub.get("name", ""),
        usage_count=int(sub.get("usageCount", 0) or 0),
    )


def category_info(doc: Dict[str, Any]) -> CategoryInfo:
    return CategoryInfo(
        id=str(doc["_id"]),
        name=doc.get("name", ""),
        display_name=doc.get("displayName") or doc.get("name", ""),
        color=doc.get("color", ""),
        usage_count=int(doc.get("usageCount", 0) or 0),
        subcategories=[subcategory_info(s) for s in doc.get("subcategories") or []],
    )


def find_subcategory(
    category: Dict[str, Any],
    name: Optional[str] = None,
    sub_id: Optional[Any] = None,
) -> Optional[Dict[str, Any]]:
    """Look up an embedded subcategory by normalized name or by id"""
    oid = to_object_id(sub_id) if sub_id is not None else None
    key = normalize(name) if name is not None else None
    for sub in category.get("subcategories") or []:
        if oid is not None and sub.get("_id") == oid:
            return sub
        if key is not None and sub.get("name") == key:
            return sub
    return None


class CategoryStore:
    """Category persistence"""

    def __init__(
        self,
        db: Optional[DatabaseManager] = None,
        rng: Optional[random.Random] = None,
    ):
        self.db_manager = db or get_db()
        self._rng = rng

    @property
    def collection(self):
        return self.db_manager.categories

    # ============ Lookups ============

    def get_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        key = normalize(name)
        if not key:
            return None
        return self.collection.find_one({"name": key})

    def get_by_id(self, category_id: Any) -> Optional[Dict[str, Any]]:
        oid = to_object_id(category_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid})

    def list_categories(self) -> List[Dict[str, Any]]:
        return list(self.collection.find({}).sort("name", 1))

    def used_colors(self) -> List[str]:
        return [
            doc["color"]
            for doc in self.collection.find({}, {"color": 1})
            if doc.get("color")
        ]

    # ============ Creation ============

    def create_category(self, name: Optional[str]) -> CreateResult:
        """Create a category, or describe the existing one with the same normalized name"""
        key, display = require_name(name, "Category")

        existing = self.collection.find_one({"name": key})
        if existing:
            logger.debug(f"Category already exists: {key}")
            return CreateResult("conflict", category_info(existing))

        now = utcnow()
        doc = {
            "name": key,
            "displayName": display,
            "color": assign_color(self.used_colors(), self._rng),
            "usageCount": 0,
            "subcategories": [],
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost the race against a concurrent create of the same name
            existing = self.collection.find_one({"name": key})
            return CreateResult("conflict", category_info(existing))

        doc["_id"] = result.inserted_id
        logger.info(f"Category created: {key} ({doc['color']})")
        return CreateResult("created", category_info(doc))

    def create_subcategory(
        self, category_name: Optional[str], sub_name: Optional[str]
    ) -> CreateResult:
        """Append a subcategory, or describe the existing one with the same normalized name"""
        key, display = require_name(sub_name, "Subcategory")

        category = self.get_by_name(category_name or "")
        if not category:
            raise NotFoundError("Category not found")

        existing = find_subcategory(category, name=key)
        if existing:
            return CreateResult("conflict", subcategory_info(existing))

        sub = {
            "_id": ObjectId(),
            "name": key,
            "displayName": display,
            "usageCount": 0,
        }

        # Conditional push: no-op when another request added the same name meanwhile
        updated = self.collection.find_one_and_update(
            {"_id": category["_id"], "subcategories.name": {"$ne": key}},
            {"$push": {"subcategories": sub}, "$set": {"updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            category = self.collection.find_one({"_id": category["_id"]})
            if category is None:
                raise NotFoundError("Category not found")
            existing = find_subcategory(category, name=key)
            return CreateResult("conflict", subcategory_info(existing or sub))

        logger.info(f"Subcategory created: {category['name']}/{key}")
        return CreateResult("created", subcategory_info(sub))

    def ensure_category(self, name: str) -> Dict[str, Any]:
        """Find-or-create returning the raw document"""
        result = self.create_category(name)
        return self.collection.find_one({"_id": ObjectId(result.value.id)})

    def ensure_subcategory(self, category: Dict[str, Any], name: str) -> Dict[str, Any]:
        result = self.create_subcategory(category["name"], name)
        return {
            "_id": ObjectId(result.value.id),
            "name": result.value.name,
            "displayName": result.value.display_name,
            "usageCount": result.value.usage_count,
        }

    # ============ Usage ============

    def increment_usage(
        self, category_id: ObjectId, subcategory_id: Optional[ObjectId] = None
    ) -> None:
        """Bump usage counters when an activity references the category"""
        self.collection.update_one(
            {"_id": category_id},
            {"$inc": {"usageCount": 1}, "$set": {"updatedAt": utcnow()}},
        )
        if subcategory_id is not None:
            self.collection.update_one(
                {"_id": category_id, "subcategories._id": subcategory_id},
                {"$inc": {"subcategories.$.usageCount": 1}},
            )

    # ============ Suggestions ============

    def suggest_categories(self, query: Optional[str] = None) -> List[CategoryInfo]:
        docs = list(self.collection.find({}))
        return [category_info(doc) for doc in suggest_categories(docs, query)]

    def suggest_subcategories(
        self, category_name: Optional[str], query: Optional[str] = None
    ) -> List[str]:
        if not normalize(category_name):
            return []
        category = self.get_by_name(category_name or "")
        return suggest_subcategories(category, query)
