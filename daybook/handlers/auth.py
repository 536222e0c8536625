"""
Auth module handlers
Password login issuing bearer tokens
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Depends

from daybook.core.logger import get_logger
from daybook.core.sessions import check_password, get_session_store
from daybook.models import LoginRequest

from . import api_handler, bearer_token

logger = get_logger(__name__)


@api_handler(
    body=LoginRequest,
    method="POST",
    path="/auth/login",
    tags=["auth"],
    auth=False,
)
async def login(body: LoginRequest) -> Dict[str, Any]:
    """Log in with the admin password

    @param body - Password
    @returns Session token
    """
    check_password(body.password)
    token = get_session_store().issue()
    logger.info("Login succeeded, session issued")

    return {"success": True, "token": token, "timestamp": datetime.now().isoformat()}


@api_handler(method="GET", path="/auth/verify", tags=["auth"], auth=False)
async def verify(token: Optional[str] = Depends(bearer_token)) -> Dict[str, Any]:
    """Check whether the bearer token is still valid"""
    return {
        "success": True,
        "valid": get_session_store().validate(token),
        "timestamp": datetime.now().isoformat(),
    }


@api_handler(method="POST", path="/auth/logout", tags=["auth"], auth=False)
async def logout(token: Optional[str] = Depends(bearer_token)) -> Dict[str, Any]:
    """Revoke the bearer token"""
    get_session_store().revoke(token)
    return {
        "success": True,
        "message": "Logged out",
        "timestamp": datetime.now().isoformat(),
    }
