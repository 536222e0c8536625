"""Static built-in category list served by the legacy meta endpoint.

Independent of the dynamic category store.
"""

from typing import Dict, List

BUILTIN_CATEGORIES: List[str] = [
    "meal",
    "sleep",
    "japa",
    "exercise",
    "commute",
    "cinema",
    "reading",
    "research",
    "writing",
    "project",
    "recreation",
    "chores",
]

BUILTIN_SUBCATEGORIES: Dict[str, List[str]] = {
    "meal": ["breakfast", "lunch", "snacks", "dinner"],
    "exercise": ["calisthenics", "walk", "cycle", "run", "swim"],
    "commute": ["metro", "bus", "auto", "bike", "car"],
    "cinema": ["watching", "reviewing", "analysing"],
}


def builtin_category_meta() -> Dict[str, object]:
    return {
        "categories": list(BUILTIN_CATEGORIES),
        "subcategories": {k: list(v) for k, v in BUILTIN_SUBCATEGORIES.items()},
    }
