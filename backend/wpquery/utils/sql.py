"""
SQL utilities for consistent handling of stored values.

WordPress keeps ids inside meta_value as strings ("42"), sometimes padded or
empty. Use meta_int() to coerce them everywhere.
"""
from typing import Any, Optional

from wpquery.errors import QueryValidationError


def meta_int(value: Any) -> Optional[int]:
    """Convert a stored meta value to int, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def require_int(value: Any, name: str) -> int:
    """Argument guard for ids; bool is rejected even though it is an int."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise QueryValidationError(f"{name} must be an integer, got {type(value).__name__}")
    return value


def require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise QueryValidationError(f"{name} must be a string, got {type(value).__name__}")
    return value
