"""Errors raised when a consent record or one of its containers rejects a write."""

from typing import Any, Optional


class ConsentModelError(Exception):
    """Base class for consent model errors."""
    pass


class InvalidFieldError(ConsentModelError):
    """Raised when a value fails the constraints of the field it targets."""

    def __init__(self, field: str, value: Any, detail: Optional[str] = None):
        self.field = field
        self.value = value
        self.detail = detail
        message = f"invalid value {value!r} passed for {field}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AlreadyBoundError(InvalidFieldError):
    """Raised when a catalog is attached to a record that already has one."""

    def __init__(self, value: Any):
        super().__init__("gvl", value, "can be set only once")
