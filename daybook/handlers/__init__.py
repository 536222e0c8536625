"""
Route handlers
Each module declares its endpoints with @api_handler; create_app mounts them via register_fastapi_routes
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type, TypeVar

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from daybook.core.exceptions import AuthError
from daybook.core.sessions import get_session_store

if TYPE_CHECKING:
    from fastapi import FastAPI

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

# handler name -> route metadata, filled at import time
_handler_registry: Dict[str, Dict[str, Any]] = {}

_bearer = HTTPBearer(auto_error=False)


def bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[str]:
    """Token from ``Authorization: Bearer ...``, None when absent"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


def require_token(token: Optional[str] = Depends(bearer_token)) -> str:
    if not token:
        raise AuthError("Authentication required")
    if not get_session_store().validate(token):
        raise AuthError("Invalid or expired token")
    return token


def api_handler(
    body: Optional[Type] = None,
    method: str = "POST",
    path: Optional[str] = None,
    tags: Optional[List[str]] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    status_code: int = 200,
    auth: bool = True,
):
    """
    Register a function as an API endpoint

    @param body - Request model, documentation only (FastAPI reads the signature)
    @param method - HTTP method
    @param path - Route path below the API prefix, defaults to /<function name>
    @param tags - OpenAPI tags, defaults to the module name
    @param summary - OpenAPI summary, defaults to the first docstring line
    @param description - OpenAPI description, defaults to the docstring
    @param status_code - Status of a successful response
    @param auth - Require a valid session token
    """
    method = method.upper()
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")

    def decorator(func: F) -> F:
        name = func.__name__
        module = func.__module__.rsplit(".", 1)[-1]
        doc = inspect.getdoc(func) or ""

        _handler_registry[name] = {
            "func": func,
            "body": body,
            "method": method,
            "path": path or f"/{name}",
            "tags": tags or [module],
            "module": module,
            "summary": summary or (doc.splitlines()[0] if doc else name),
            "description": description or doc,
            "status_code": status_code,
            "auth": auth,
        }
        return func

    return decorator


def get_registered_handlers() -> Dict[str, Dict[str, Any]]:
    return dict(_handler_registry)


def register_fastapi_routes(app: "FastAPI", prefix: str = "/api") -> None:
    """Mount every registered handler on ``app`` below ``prefix``"""
    for name, info in _handler_registry.items():
        full_path = f"{prefix}{info['path']}"
        app.add_api_route(
            full_path,
            info["func"],
            methods=[info["method"]],
            name=name,
            tags=info["tags"],
            summary=info["summary"],
            description=info["description"],
            status_code=info["status_code"],
            response_model=None,
            dependencies=[Depends(require_token)] if info["auth"] else None,
        )
        logger.debug(f"Route {info['method']} {full_path} -> {info['module']}.{name}")

    logger.info(f"Registered {len(_handler_registry)} API routes under {prefix}")


# Handler modules register themselves on import, after the decorator exists
# ruff: noqa: E402
from . import activities, auth, cache, categories, stats, suggestions

__all__ = [
    "api_handler",
    "bearer_token",
    "require_token",
    "register_fastapi_routes",
    "get_registered_handlers",
    "activities",
    "auth",
    "cache",
    "categories",
    "stats",
    "suggestions",
]
