"""
Models for API communication
"""

from .base import BaseModel
from .entities import (
    ActivityInfo,
    CacheEntryInfo,
    CategoryInfo,
    DailyActivities,
    Position,
    SubcategoryInfo,
)
from .requests import (
    CreateActivityRequest,
    CreateCacheEntryRequest,
    CreateCategoryRequest,
    CreateSubcategoryRequest,
    LoginRequest,
    UpdateActivityRequest,
    UpdateCacheEntryRequest,
)

__all__ = [
    # Base
    "BaseModel",
    # Entities
    "ActivityInfo",
    "CacheEntryInfo",
    "CategoryInfo",
    "DailyActivities",
    "Position",
    "SubcategoryInfo",
    # Requests
    "LoginRequest",
    "CreateCategoryRequest",
    "CreateSubcategoryRequest",
    "CreateActivityRequest",
    "UpdateActivityRequest",
    "CreateCacheEntryRequest",
    "UpdateCacheEntryRequest",
]
