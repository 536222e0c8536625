"""Name normalization for categories and subcategories."""

from typing import Optional, Tuple

from .exceptions import ValidationError


def normalize(raw: Optional[str]) -> str:
    """Uniqueness key: trimmed and lower-cased."""
    return (raw or "").strip().lower()


def display_name(raw: Optional[str]) -> str:
    return (raw or "").strip()


def require_name(raw: Optional[str], label: str = "Category") -> Tuple[str, str]:
    """Return ``(normalized, display)`` or raise when nothing is left after trimming."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(f"{label} name is required")
    return normalize(raw), display_name(raw)
