"""
Autocomplete ranking for categories and subcategories
Pure functions over stored category documents
"""

from typing import Any, Dict, Iterable, List, Optional

from .normalize import normalize

SUBCATEGORY_SUGGESTION_LIMIT = 10


def _rank_key(doc: Dict[str, Any]):
    # usage descending, then name ascending
    return (-int(doc.get("usageCount", 0) or 0), doc.get("name", ""))


def suggest_categories(
    categories: Iterable[Dict[str, Any]], prefix: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Categories whose normalized name starts with ``prefix``, best first.

    An empty prefix matches every category.
    """
    query = normalize(prefix)
    matches = [c for c in categories if not query or c.get("name", "").startswith(query)]
    return sorted(matches, key=_rank_key)


def suggest_subcategories(
    category: Optional[Dict[str, Any]],
    prefix: Optional[str] = None,
    limit: int = SUBCATEGORY_SUGGESTION_LIMIT,
) -> List[str]:
    """Display names of the best matching subcategories of ``category``."""
    if not category or not category.get("subcategories"):
        return []

    query = normalize(prefix)
    matches = [
        sub
        for sub in category["subcategories"]
        if not query or sub.get("name", "").startswith(query)
    ]
    matches.sort(key=_rank_key)
    return [sub.get("displayName") or sub.get("name", "") for sub in matches[:limit]]
