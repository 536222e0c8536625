"""
Statistics handlers
Drill-down pie data for one day
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Query

from daybook.core.activities import ActivityStore
from daybook.core.drilldown import Drilldown, SubcategoryLevel
from daybook.core.normalize import normalize

from . import api_handler


def _split(value: Optional[str]) -> List[str]:
    return [normalize(v) for v in (value or "").split(",") if normalize(v)]


@api_handler(
    method="GET",
    path="/stats/{date}",
    tags=["stats"],
    summary="Get drill-down statistics",
    description="Aggregated duration slices for a date at the category, subcategory or activity level",
)
def get_daily_stats(
    date: str,
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    hidden_categories: Optional[str] = Query(None, alias="hiddenCategories"),
    hidden_subcategories: Optional[str] = Query(None, alias="hiddenSubcategories"),
) -> Dict[str, Any]:
    """Get pie slices for a date

    @param date - Date string (YYYY-MM-DD)
    @param category - Drilled-down category name, any case
    @param subcategory - Drilled-down subcategory name, any case
    @param hiddenCategories - Comma-separated categories hidden at the category level
    @param hiddenSubcategories - Comma-separated subcategories hidden at the subcategory level
    """
    store = ActivityStore()
    daily = store.list_by_date(date)
    known = [c["name"] for c in store.categories.list_categories()]

    drilldown = Drilldown(daily.activities, known_categories=known)
    for key in _split(hidden_categories):
        drilldown.hide(key)

    if category:
        drilldown.zoom_in(normalize(category))
        if isinstance(drilldown.state, SubcategoryLevel):
            for key in _split(hidden_subcategories):
                drilldown.hide(key)
            if subcategory:
                drilldown.zoom_in(normalize(subcategory))

    return {
        "success": True,
        "data": drilldown.snapshot(),
        "timestamp": datetime.now().isoformat(),
    }
