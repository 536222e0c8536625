"""
Activity module handlers
"""

from datetime import datetime
from typing import Any, Dict

from daybook.core.activities import ActivityStore
from daybook.core.builtin_categories import builtin_category_meta
from daybook.models import CreateActivityRequest, UpdateActivityRequest

from . import api_handler


def _get_store() -> ActivityStore:
    return ActivityStore()


@api_handler(
    method="GET",
    path="/activities/meta/categories",
    tags=["activities"],
    summary="Get built-in categories",
    description="Static built-in category and subcategory list, independent of the category store",
)
def get_builtin_categories() -> Dict[str, Any]:
    """Get the static built-in category list"""
    return {
        "success": True,
        "data": builtin_category_meta(),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(method="GET", path="/activities/{date}", tags=["activities"])
def get_activities_by_date(date: str) -> Dict[str, Any]:
    """Get all activities for a date

    @param date - Date string (YYYY-MM-DD)
    @returns Activities with count and total duration
    """
    daily = _get_store().list_by_date(date)
    return {
        "success": True,
        "data": daily.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(
    body=CreateActivityRequest,
    method="POST",
    path="/activities",
    tags=["activities"],
    status_code=201,
)
def create_activity(body: CreateActivityRequest) -> Dict[str, Any]:
    """Create an activity for today

    @param body - Activity fields, category referenced by id or name
    @returns Created activity
    """
    activity = _get_store().create(body.model_dump(by_alias=False, exclude_unset=True))
    return {
        "success": True,
        "data": activity.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(
    body=UpdateActivityRequest,
    method="PUT",
    path="/activities/{activity_id}",
    tags=["activities"],
)
def update_activity(activity_id: str, body: UpdateActivityRequest) -> Dict[str, Any]:
    """Partially update an activity"""
    activity = _get_store().update(
        activity_id, body.model_dump(by_alias=False, exclude_unset=True)
    )
    return {
        "success": True,
        "data": activity.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(method="DELETE", path="/activities/{activity_id}", tags=["activities"])
def delete_activity(activity_id: str) -> Dict[str, Any]:
    """Delete an activity"""
    activity = _get_store().delete(activity_id)
    return {
        "success": True,
        "message": "Activity deleted",
        "data": activity.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }
