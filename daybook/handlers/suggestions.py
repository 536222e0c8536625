"""
Suggestion module handlers
Autocomplete for category and subcategory inputs
"""

from datetime import datetime
from typing import Any, Dict

from daybook.core.categories import CategoryStore

from . import api_handler


@api_handler(method="GET", path="/suggestions/categories", tags=["suggestions"])
def suggest_categories(q: str = "") -> Dict[str, Any]:
    """Categories starting with q, most used first

    @param q - Name prefix, empty for all categories
    """
    suggestions = CategoryStore().suggest_categories(q)
    return {
        "success": True,
        "data": [s.model_dump(mode="json") for s in suggestions],
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(method="GET", path="/suggestions/subcategories", tags=["suggestions"])
def suggest_subcategories(category: str = "", q: str = "") -> Dict[str, Any]:
    """Display names of subcategories of a category starting with q (at most 10)"""
    suggestions = CategoryStore().suggest_subcategories(category, q)
    return {
        "success": True,
        "data": suggestions,
        "timestamp": datetime.now().isoformat(),
    }
