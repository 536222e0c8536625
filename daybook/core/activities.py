"""
Activity store
Daily activity records referencing categories and subcategories by id
"""

from typing import Any, Dict, List, Optional, Tuple

from daybook.config.loader import get_config
from daybook.models import ActivityInfo, DailyActivities

from .categories import CategoryStore, find_subcategory
from .db import DatabaseManager, get_db, to_object_id
from .exceptions import NotFoundError, ValidationError
from .logger import get_logger
from .timeutils import IST, parse_hhmm, span_minutes, today_in, utcnow, validate_date

logger = get_logger(__name__)

TODAY_ONLY_MESSAGE = "You can only add activities for today"


def activity_info(doc: Dict[str, Any], category: Optional[Dict[str, Any]]) -> ActivityInfo:
    """Public projection with the category references resolved"""
    sub = None
    if category is not None and doc.get("subcategoryId") is not None:
        sub = find_subcategory(category, sub_id=doc["subcategoryId"])

    return ActivityInfo(
        id=str(doc["_id"]),
        date=doc.get("date", ""),
        category_id=str(doc.get("categoryId", "")),
        category=category.get("name") if category else None,
        category_display_name=category.get("displayName") if category else None,
        category_color=category.get("color") if category else None,
        subcategory_id=str(doc["subcategoryId"]) if doc.get("subcategoryId") else None,
        subcategory=sub.get("name") if sub else None,
        subcategory_display_name=sub.get("displayName") if sub else None,
        title=doc.get("title", ""),
        description=doc.get("description") or "",
        duration=int(doc.get("duration", 0) or 0),
        start_time=doc.get("startTime"),
        end_time=doc.get("endTime"),
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
    )


class ActivityStore:
    """Activity persistence"""

    def __init__(
        self,
        db: Optional[DatabaseManager] = None,
        categories: Optional[CategoryStore] = None,
        timezone: Optional[str] = None,
    ):
        self.db_manager = db or get_db()
        self.categories = categories or CategoryStore(self.db_manager)
        self.timezone = timezone or get_config().get("activities.timezone", IST)

    @property
    def collection(self):
        return self.db_manager.activities

    # ============ Reads ============

    def list_by_date(self, date_str: str) -> DailyActivities:
        """All activities of a day with count and total duration"""
        validate_date(date_str)
        docs = list(
            self.collection.find({"date": date_str}).sort([("createdAt", 1), ("_id", 1)])
        )
        activities = self._project(docs)
        return DailyActivities(
            date=date_str,
            activities=activities,
            total_activities=len(activities),
            total_duration=sum(a.duration for a in activities),
        )

    def get(self, activity_id: str) -> ActivityInfo:
        doc = self._find(activity_id)
        category = self.categories.get_by_id(doc.get("categoryId"))
        return activity_info(doc, category)

    def _project(self, docs: List[Dict[str, Any]]) -> List[ActivityInfo]:
        ids = list({d["categoryId"] for d in docs if d.get("categoryId") is not None})
        categories = {
            c["_id"]: c for c in self.categories.collection.find({"_id": {"$in": ids}})
        } if ids else {}
        return [activity_info(d, categories.get(d.get("categoryId"))) for d in docs]

    def _find(self, activity_id: str) -> Dict[str, Any]:
        oid = to_object_id(activity_id)
        doc = self.collection.find_one({"_id": oid}) if oid is not None else None
        if not doc:
            raise NotFoundError("Activity not found")
        return doc

    # ============ Writes ============

    def create(self, payload: Dict[str, Any], today: Optional[str] = None) -> ActivityInfo:
        """Validate and insert a new activity for today.

        ``payload`` uses snake_case keys. The category's (and subcategory's)
        usage counter is incremented on success.
        """
        date_str = payload.get("date")
        if not date_str:
            raise ValidationError("Date is required")
        validate_date(date_str)
        if date_str != (today or today_in(self.timezone)):
            raise ValidationError(TODAY_ONLY_MESSAGE)

        title = (payload.get("title") or "").strip()
        duration = payload.get("duration")
        if not title or duration is None:
            raise ValidationError("Title and duration are required")
        duration = self._check_duration(duration)

        category, sub = self._resolve_category(payload)
        start_time, end_time = self._check_times(
            payload.get("start_time") or None, payload.get("end_time") or None, duration
        )

        now = utcnow()
        doc: Dict[str, Any] = {
            "date": date_str,
            "categoryId": category["_id"],
            "title": title,
            "description": (payload.get("description") or "").strip(),
            "duration": duration,
            "createdAt": now,
            "updatedAt": now,
        }
        if sub is not None:
            doc["subcategoryId"] = sub["_id"]
        if start_time:
            doc["startTime"] = start_time
        if end_time:
            doc["endTime"] = end_time

        doc["_id"] = self.collection.insert_one(doc).inserted_id
        self.categories.increment_usage(category["_id"], sub["_id"] if sub else None)
        logger.info(f"Activity created: {doc['_id']} on {date_str} ({category['name']})")

        category = self.categories.get_by_id(category["_id"])
        return activity_info(doc, category)

    def update(self, activity_id: str, payload: Dict[str, Any]) -> ActivityInfo:
        """Partial update, only keys present in ``payload`` are touched"""
        doc = self._find(activity_id)
        changes: Dict[str, Any] = {}
        unset: Dict[str, str] = {}

        if payload.get("date") is not None:
            changes["date"] = validate_date(payload["date"])

        if "title" in payload and payload["title"] is not None:
            title = payload["title"].strip()
            if not title:
                raise ValidationError("Title is required")
            changes["title"] = title

        if "description" in payload and payload["description"] is not None:
            changes["description"] = payload["description"].strip()

        if payload.get("duration") is not None:
            changes["duration"] = self._check_duration(payload["duration"])

        category_keys = ("category_id", "category", "subcategory_id", "subcategory")
        if any(payload.get(k) is not None for k in category_keys):
            merged = {
                "category_id": payload.get("category_id"),
                "category": payload.get("category"),
                "subcategory_id": payload.get("subcategory_id"),
                "subcategory": payload.get("subcategory"),
            }
            if not merged["category_id"] and not merged["category"]:
                merged["category_id"] = doc.get("categoryId")
            category, sub = self._resolve_category(merged)
            changes["categoryId"] = category["_id"]
            if sub is not None:
                changes["subcategoryId"] = sub["_id"]
            elif doc.get("subcategoryId") is not None:
                keep = (
                    category["_id"] == doc.get("categoryId")
                    and merged["subcategory_id"] is None
                    and merged["subcategory"] is None
                )
                if not keep:
                    unset["subcategoryId"] = ""

        for field, key in (("start_time", "startTime"), ("end_time", "endTime")):
            if field in payload and payload[field] is not None:
                if payload[field] == "":
                    unset[key] = ""
                else:
                    parse_hhmm(payload[field])
                    changes[key] = payload[field]

        # stored rows may predate the range rule, only re-check when the edit touches it
        if any(payload.get(k) is not None for k in ("start_time", "end_time", "duration")):
            start = None if "startTime" in unset else changes.get("startTime", doc.get("startTime"))
            end = None if "endTime" in unset else changes.get("endTime", doc.get("endTime"))
            self._check_times(start, end, changes.get("duration", doc.get("duration")))

        if not changes and not unset:
            return self.get(activity_id)

        changes["updatedAt"] = utcnow()
        update: Dict[str, Any] = {"$set": changes}
        if unset:
            update["$unset"] = unset
        self.collection.update_one({"_id": doc["_id"]}, update)
        logger.info(f"Activity updated: {doc['_id']}")
        return self.get(activity_id)

    def delete(self, activity_id: str) -> ActivityInfo:
        doc = self._find(activity_id)
        category = self.categories.get_by_id(doc.get("categoryId"))
        self.collection.delete_one({"_id": doc["_id"]})
        logger.info(f"Activity deleted: {doc['_id']}")
        return activity_info(doc, category)

    # ============ Validation helpers ============

    @staticmethod
    def _check_duration(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError("Duration must be a positive number of minutes")
        return value

    @staticmethod
    def _check_times(
        start_time: Optional[str], end_time: Optional[str], duration: Optional[int]
    ) -> Tuple[Optional[str], Optional[str]]:
        if start_time:
            parse_hhmm(start_time)
        if end_time:
            parse_hhmm(end_time)
        if start_time and end_time and duration is not None:
            if span_minutes(start_time, end_time) != duration:
                raise ValidationError("Duration must match the time range")
        return start_time, end_time

    def _resolve_category(
        self, payload: Dict[str, Any]
    ) -> Tuple[Dict[str, Any], Optional[Dict[str, Any]]]:
        """Resolve category and optional subcategory references from a payload"""
        category = None
        if payload.get("category_id"):
            category = self.categories.get_by_id(payload["category_id"])
        elif payload.get("category"):
            category = self.categories.get_by_name(payload["category"])
        if category is None:
            raise ValidationError("Invalid category")

        sub = None
        if payload.get("subcategory_id"):
            sub = find_subcategory(category, sub_id=payload["subcategory_id"])
            if sub is None:
                raise ValidationError("Invalid subcategory for category")
        elif payload.get("subcategory"):
            sub = find_subcategory(category, name=payload["subcategory"])
            if sub is None:
                raise ValidationError("Invalid subcategory for category")
        return category, sub
