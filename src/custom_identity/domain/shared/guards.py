"""Argument guards used at the store boundary."""

from typing import TypeVar

T = TypeVar("T")


def require_argument(value: T | None, name: str) -> T:
    """Return ``value`` or raise ``ValueError`` naming the missing argument."""
    if value is None:
        msg = f"Argument '{name}' must not be None"
        raise ValueError(msg)
    return value
