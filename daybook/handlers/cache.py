"""
Cache board handlers
"""

from datetime import datetime
from typing import Any, Dict

from daybook.core.cache_entries import CacheEntryStore
from daybook.models import CreateCacheEntryRequest, UpdateCacheEntryRequest

from . import api_handler


@api_handler(
    body=CreateCacheEntryRequest,
    method="POST",
    path="/cache/cache-entries",
    tags=["cache"],
    status_code=201,
)
def create_cache_entry(body: CreateCacheEntryRequest) -> Dict[str, Any]:
    """Create a note on the cache board"""
    entry = CacheEntryStore().create(
        title=body.title,
        body=body.body,
        position=body.position.model_dump(by_alias=False) if body.position else None,
    )
    return {
        "success": True,
        "data": entry.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(method="GET", path="/cache/cache-entries", tags=["cache"])
def list_cache_entries() -> Dict[str, Any]:
    """List notes, newest first"""
    entries = CacheEntryStore().list()
    return {
        "success": True,
        "data": [e.model_dump(mode="json") for e in entries],
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(
    body=UpdateCacheEntryRequest,
    method="PUT",
    path="/cache/cache-entries/{entry_id}",
    tags=["cache"],
)
def update_cache_entry(entry_id: str, body: UpdateCacheEntryRequest) -> Dict[str, Any]:
    """Edit a note in place"""
    entry = CacheEntryStore().update(
        entry_id,
        title=body.title,
        body=body.body,
        position=body.position.model_dump(by_alias=False) if body.position else None,
    )
    return {
        "success": True,
        "data": entry.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(method="DELETE", path="/cache/cache-entries/{entry_id}", tags=["cache"])
def delete_cache_entry(entry_id: str) -> Dict[str, Any]:
    """Delete a note"""
    entry = CacheEntryStore().delete(entry_id)
    return {
        "success": True,
        "message": "Cache entry deleted successfully",
        "data": entry.model_dump(mode="json"),
        "timestamp": datetime.now().isoformat(),
    }
