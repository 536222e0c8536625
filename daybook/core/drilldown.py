"""
Aggregation and drill-down over a day's activities

Three levels: category -> subcategory -> activity. Each level aggregates
activity durations into slices; hidden slices are filtered per level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .colors import DEFAULT_CATEGORY_COLOR

UNCATEGORIZED = "uncategorized"
BREADCRUMB_SEPARATOR = " → "


# ============ Drill state ============


@dataclass(frozen=True)
class CategoryLevel:
    level: str = field(default="category", init=False)


@dataclass(frozen=True)
class SubcategoryLevel:
    category: str
    level: str = field(default="subcategory", init=False)


@dataclass(frozen=True)
class ActivityLevel:
    category: str
    subcategory: Optional[str] = None
    level: str = field(default="activity", init=False)


DrillState = Union[CategoryLevel, SubcategoryLevel, ActivityLevel]


@dataclass(frozen=True)
class Slice:
    """One pie wedge"""

    name: str
    value: int
    hours: str
    color: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    activity_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "hours": self.hours,
            "color": self.color,
        }
        if self.category is not None:
            data["category"] = self.category
        if self.subcategory is not None:
            data["subcategory"] = self.subcategory
        if self.activity_id is not None:
            data["activityId"] = self.activity_id
        return data


@dataclass(frozen=True)
class _Row:
    id: Optional[str]
    title: str
    category: Optional[str]
    subcategory: Optional[str]
    duration: int
    color: Optional[str]


# ============ Formatting helpers ============


def format_duration(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"


def _title(name: str) -> str:
    return name[:1].upper() + name[1:]


def vary_color(base: str, index: int, step: int, span: int) -> str:
    """Deterministic variation of ``base`` for the ``index``-th child slice.

    The third byte channel is shifted by ``(index*step) % span - span//2`` and
    clamped to [50, 200]; the first two channels are kept.
    """
    base = base if _is_hex(base) else DEFAULT_CATEGORY_COLOR
    c1 = int(base[1:3], 16)
    c2 = int(base[3:5], 16)
    c3 = int(base[5:7], 16)
    offset = (index * step) % span - span // 2
    c3 = max(50, min(200, c3 + offset))
    return f"#{c1:02x}{c2:02x}{c3:02x}"


def _is_hex(value: Optional[str]) -> bool:
    if not isinstance(value, str) or len(value) != 7 or not value.startswith("#"):
        return False
    try:
        int(value[1:], 16)
    except ValueError:
        return False
    return True


def legend(slices: Sequence[Slice]) -> List[Tuple[Slice, float]]:
    """Each slice with its share of the visible total, one decimal place"""
    total = sum(s.value for s in slices)
    if total <= 0:
        return [(s, 0.0) for s in slices]
    return [(s, round(s.value / total * 100, 1)) for s in slices]


def _get(activity: Any, *names: str) -> Any:
    for name in names:
        if isinstance(activity, Mapping):
            if name in activity:
                return activity[name]
        elif hasattr(activity, name):
            return getattr(activity, name)
    return None


def _to_row(activity: Any) -> _Row:
    return _Row(
        id=_get(activity, "id", "_id"),
        title=_get(activity, "title") or "",
        category=_get(activity, "category") or None,
        subcategory=_get(activity, "subcategory") or None,
        duration=int(_get(activity, "duration") or 0),
        color=_get(activity, "category_color", "categoryColor"),
    )


# ============ Engine ============


class Drilldown:
    """Drill-down view state over an already-fetched activity list.

    ``known_categories`` supplies the fallback category for activities that
    carry none (display only, the activity is not changed). ``category_colors``
    maps category names to base colors; otherwise the color carried by the
    activities is used.
    """

    def __init__(
        self,
        activities: Iterable[Any],
        known_categories: Optional[Sequence[str]] = None,
        category_colors: Optional[Mapping[str, str]] = None,
    ):
        self.known_categories = list(known_categories or [])
        fallback = self.known_categories[0] if self.known_categories else UNCATEGORIZED

        self._rows: List[_Row] = []
        colors: Dict[str, str] = {}
        for activity in activities:
            row = _to_row(activity)
            if row.category is None:
                row = _Row(row.id, row.title, fallback, row.subcategory, row.duration, row.color)
            if row.color and row.category not in colors:
                colors[row.category] = row.color
            self._rows.append(row)
        colors.update(category_colors or {})
        self._colors = colors

        self.state: DrillState = CategoryLevel()
        self.hidden_categories: Set[str] = set()
        self.hidden_subcategories: Set[str] = set()

    @property
    def level(self) -> str:
        return self.state.level

    def color_for(self, category: str) -> str:
        return self._colors.get(category) or DEFAULT_CATEGORY_COLOR

    def has_subcategories(self, category: str) -> bool:
        return any(r.category == category and r.subcategory for r in self._rows)

    # ============ Slices ============

    def category_data(self) -> List[Slice]:
        totals: Dict[str, int] = {}
        for row in self._rows:
            if row.category in self.hidden_categories:
                continue
            totals[row.category] = totals.get(row.category, 0) + row.duration

        return [
            Slice(
                name=_title(category),
                value=minutes,
                hours=format_duration(minutes),
                color=self.color_for(category),
                category=category,
            )
            for category, minutes in totals.items()
        ]

    def subcategory_data(self, category: str) -> List[Slice]:
        totals: Dict[str, int] = {}
        for row in self._rows:
            if row.category != category or not row.subcategory:
                continue
            if row.subcategory in self.hidden_subcategories:
                continue
            totals[row.subcategory] = totals.get(row.subcategory, 0) + row.duration

        base = self.color_for(category)
        return [
            Slice(
                name=_title(subcategory),
                value=minutes,
                hours=format_duration(minutes),
                color=vary_color(base, index, step=40, span=80),
                category=category,
                subcategory=subcategory,
            )
            for index, (subcategory, minutes) in enumerate(totals.items())
        ]

    def activity_data(self, category: str, subcategory: Optional[str] = None) -> List[Slice]:
        rows = [
            r
            for r in self._rows
            if r.category == category and (subcategory is None or r.subcategory == subcategory)
        ]
        base = self.color_for(category)
        return [
            Slice(
                name=row.title,
                value=row.duration,
                hours=format_duration(row.duration),
                color=vary_color(base, index, step=30, span=100),
                category=category,
                subcategory=row.subcategory,
                activity_id=str(row.id) if row.id is not None else f"{category}-{index}",
            )
            for index, row in enumerate(rows)
        ]

    def display_data(self) -> List[Slice]:
        state = self.state
        if isinstance(state, SubcategoryLevel):
            return self.subcategory_data(state.category)
        if isinstance(state, ActivityLevel):
            return self.activity_data(state.category, state.subcategory)
        return self.category_data()

    # ============ Transitions ============

    def zoom_in(self, target: Union[Slice, str]) -> DrillState:
        """Drill into a category or subcategory slice; no-op at activity level"""
        state = self.state
        if isinstance(state, CategoryLevel):
            category = target.category if isinstance(target, Slice) else target
            if category is None:
                return state
            self.hidden_subcategories = set()
            if self.has_subcategories(category):
                self.state = SubcategoryLevel(category)
            else:
                self.state = ActivityLevel(category)
        elif isinstance(state, SubcategoryLevel):
            subcategory = target.subcategory if isinstance(target, Slice) else target
            if subcategory is None:
                return state
            self.state = ActivityLevel(state.category, subcategory)
        return self.state

    def back(self) -> DrillState:
        state = self.state
        if isinstance(state, ActivityLevel) and state.subcategory is not None:
            self.state = SubcategoryLevel(state.category)
            self.hidden_subcategories = set()
            return self.state
        return self.reset()

    def reset(self) -> DrillState:
        self.state = CategoryLevel()
        self.hidden_categories = set()
        self.hidden_subcategories = set()
        return self.state

    # ============ Hide / show ============

    def hide(self, target: Union[Slice, str]) -> bool:
        """Hide a slice at the current level.

        Returns False without changing anything when it is the last visible
        slice or when the current level has no hidden-set (activity level).
        """
        if isinstance(self.state, ActivityLevel):
            return False
        visible = self.display_data()
        if len(visible) <= 1:
            return False

        if isinstance(self.state, CategoryLevel):
            key = target.category if isinstance(target, Slice) else target
            if key is None or key not in {s.category for s in visible}:
                return False
            self.hidden_categories.add(key)
        else:
            key = target.subcategory if isinstance(target, Slice) else target
            if key is None or key not in {s.subcategory for s in visible}:
                return False
            self.hidden_subcategories.add(key)
        return True

    def show(self, key: str) -> None:
        """Un-hide one key at the current level.

        Engine-only: the stats route rebuilds the view from query parameters, so
        un-hiding there is just omitting the key. In-process callers that keep a
        Drilldown alive between interactions use this.
        """
        if isinstance(self.state, CategoryLevel):
            self.hidden_categories.discard(key)
        elif isinstance(self.state, SubcategoryLevel):
            self.hidden_subcategories.discard(key)

    def show_all(self) -> None:
        """Clear the hidden-set of the current level (engine-only, see ``show``)"""
        if isinstance(self.state, CategoryLevel):
            self.hidden_categories = set()
        elif isinstance(self.state, SubcategoryLevel):
            self.hidden_subcategories = set()

    # ============ Labels ============

    def breadcrumb(self) -> str:
        state = self.state
        parts: List[str] = []
        if isinstance(state, (SubcategoryLevel, ActivityLevel)):
            parts.append(_title(state.category))
        if isinstance(state, ActivityLevel) and state.subcategory:
            parts.append(_title(state.subcategory))
        return BREADCRUMB_SEPARATOR.join(parts)

    def snapshot(self) -> Dict[str, Any]:
        """Current view as a JSON-ready dict"""
        slices = self.display_data()
        state = self.state
        return {
            "level": state.level,
            "category": getattr(state, "category", None),
            "subcategory": getattr(state, "subcategory", None),
            "breadcrumb": self.breadcrumb(),
            "hiddenCategories": sorted(self.hidden_categories),
            "hiddenSubcategories": sorted(self.hidden_subcategories),
            "total": sum(s.value for s in slices),
            "slices": [
                {**s.to_dict(), "percentage": pct} for s, pct in legend(slices)
            ],
        }
