"""
Session tokens for the single admin user

Tokens live for the lifetime of the store; the in-memory store loses them on
process restart.
"""

import hmac
import secrets
from typing import Optional, Protocol, Set

from daybook.config.loader import get_config

from .exceptions import AuthError
from .logger import get_logger

logger = get_logger(__name__)


class SessionStore(Protocol):
    """Protocol for session token storage"""

    def issue(self) -> str:
        """Create and remember a new token"""
        ...

    def validate(self, token: Optional[str]) -> bool:
        """Whether the token is currently valid"""
        ...

    def revoke(self, token: Optional[str]) -> None:
        """Forget the token, unknown tokens are ignored"""
        ...


class InMemorySessionStore:
    """Process-wide token set"""

    def __init__(self):
        self._tokens: Set[str] = set()

    def issue(self) -> str:
        token = secrets.token_hex(32)
        self._tokens.add(token)
        return token

    def validate(self, token: Optional[str]) -> bool:
        return bool(token) and token in self._tokens

    def revoke(self, token: Optional[str]) -> None:
        if token:
            self._tokens.discard(token)

    def __len__(self) -> int:
        return len(self._tokens)


def check_password(password: Optional[str], expected: Optional[str] = None) -> None:
    """Raise AuthError unless ``password`` matches the configured admin password"""
    if expected is None:
        expected = get_config().get("auth.admin_password", "")
    if not expected:
        logger.warning("Login attempted but no admin password is configured")
        raise AuthError("Invalid password")
    if not hmac.compare_digest((password or "").encode("utf-8"), expected.encode("utf-8")):
        raise AuthError("Invalid password")


# Global session store instance
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


def set_session_store(store: SessionStore) -> None:
    global _session_store
    _session_store = store
