"""
Failure normalization for calendar sync operations.

Collapses provider errors (carrying code/message) and plain exceptions
into the single OperationError shape returned to callers.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional, Union

from src.calendar_sync.types import OperationError


class Operation(str, Enum):
    """Remote mutations supported by the sync client."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def fallback_code(self) -> str:
        return f"{self.name}_FAILED"

    @property
    def fallback_message(self) -> str:
        return f"Failed to {self.value} calendar event"


NOT_FOUND_STATUS = 404
UNAUTHORIZED_STATUS = 401


def _attribute(error: Any, name: str) -> Optional[Any]:
    """Read a field from an error object or mapping, treating empty values as absent."""
    if isinstance(error, Mapping):
        value = error.get(name)
    else:
        value = getattr(error, name, None)
    if value is None or value == "":
        return None
    return value


def _has_status(error: Any, status: int) -> bool:
    for name in ("code", "status"):
        value = _attribute(error, name)
        if value is not None and str(value) == str(status):
            return True
    return False


def error_code(error: Any) -> Optional[Union[int, str]]:
    """Provider code of an error, if it exposes one."""
    return _attribute(error, "code")


def error_message(error: Any) -> Optional[str]:
    """Human-readable message of an error, if it exposes one."""
    message = _attribute(error, "message")
    if message is not None:
        return str(message)
    if isinstance(error, BaseException) and str(error):
        return str(error)
    return None


def is_already_gone(error: Any) -> bool:
    """
    Check whether a delete failure means the event no longer exists.

    Deleting an absent event leaves the calendar in the desired state, so
    callers treat this as success.
    """
    return _has_status(error, NOT_FOUND_STATUS)


def is_authorization_failure(error: Any) -> bool:
    """Check whether the provider rejected the access token."""
    return _has_status(error, UNAUTHORIZED_STATUS)


def normalize_error(error: Any, operation: Operation) -> OperationError:
    """
    Convert any failure into an OperationError.

    Args:
        error: Exception raised by a collaborator
        operation: Operation that failed (selects fallback code and message)

    Returns:
        OperationError preserving the provider code/message where present
    """
    code = error_code(error)
    message = error_message(error)
    return OperationError(
        code=code if code is not None else operation.fallback_code,
        message=message if message is not None else operation.fallback_message,
    )
