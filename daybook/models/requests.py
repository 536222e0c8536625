"""
Request models for API handlers
"""

from typing import Optional

from .base import BaseModel
from .entities import Position

# ============================================================================
# Auth Request Models
# ============================================================================


class LoginRequest(BaseModel):
    """Request body for logging in.

    @property password - The shared admin password.
    """

    password: str = ""


# ============================================================================
# Category Request Models
# ============================================================================


class CreateCategoryRequest(BaseModel):
    """Request body for creating a category.

    @property name - Category name as typed by the user.
    """

    name: Optional[str] = None


class CreateSubcategoryRequest(BaseModel):
    """Request body for creating a subcategory under an existing category.

    @property name - Subcategory name as typed by the user.
    """

    name: Optional[str] = None


# ============================================================================
# Activity Request Models
# ============================================================================


class CreateActivityRequest(BaseModel):
    """Request body for creating an activity.

    The category is referenced either by id or by name, same for the subcategory.

    @property date - Calendar date (YYYY-MM-DD), must be today in IST.
    @property categoryId - Category id.
    @property category - Category name, used when categoryId is absent.
    @property subcategoryId - Optional subcategory id.
    @property subcategory - Optional subcategory name.
    @property title - Activity title.
    @property description - Optional free text.
    @property duration - Duration in minutes (> 0).
    @property startTime - Optional HH:MM.
    @property endTime - Optional HH:MM.
    """

    date: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[str] = None
    subcategory_id: Optional[str] = None
    subcategory: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class UpdateActivityRequest(BaseModel):
    """Partial update of an activity, only the fields sent are changed."""

    date: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[str] = None
    subcategory_id: Optional[str] = None
    subcategory: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


# ============================================================================
# Cache Request Models
# ============================================================================


class CreateCacheEntryRequest(BaseModel):
    """Request body for creating a cache entry."""

    title: str = ""
    body: str = ""
    position: Optional[Position] = None


class UpdateCacheEntryRequest(BaseModel):
    """Request body for editing a cache entry in place."""

    title: Optional[str] = None
    body: Optional[str] = None
    position: Optional[Position] = None
