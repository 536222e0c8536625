"""
Data entity model definitions
Public projections of the stored documents
"""

from datetime import datetime
from typing import List, Optional

from .base import BaseModel

# ============ Category Models ============


class SubcategoryInfo(BaseModel):
    """Subcategory owned by exactly one category"""

    id: str
    name: str  # normalized
    display_name: str
    usage_count: int = 0


class CategoryInfo(BaseModel):
    """Category with its embedded subcategories"""

    id: str
    name: str  # normalized, unique
    display_name: str
    color: str
    usage_count: int = 0
    subcategories: List[SubcategoryInfo] = []


# ============ Activity Models ============


class ActivityInfo(BaseModel):
    """Activity with its category references resolved for display"""

    id: str
    date: str  # YYYY-MM-DD
    category_id: str
    category: Optional[str] = None
    category_display_name: Optional[str] = None
    category_color: Optional[str] = None
    subcategory_id: Optional[str] = None
    subcategory: Optional[str] = None
    subcategory_display_name: Optional[str] = None
    title: str
    description: str = ""
    duration: int  # minutes
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None  # HH:MM
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DailyActivities(BaseModel):
    """All activities of one calendar day"""

    date: str
    activities: List[ActivityInfo]
    total_activities: int
    total_duration: int


# ============ Cache Models ============


class Position(BaseModel):
    x: float = 300
    y: float = 300


class CacheEntryInfo(BaseModel):
    """Free-form note on the cache board"""

    id: str
    title: str = ""
    body: str = ""
    timestamp: datetime
    position: Position = Position()
