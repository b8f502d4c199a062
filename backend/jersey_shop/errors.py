"""Domain exceptions raised by the service layer.

The API layer maps each exception to an HTTP status and a JSON error
envelope (see ``exception_handlers``), so callers can tell "not found" from
"cannot delete, still in use" from a generic failure.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base class for every error the services raise on purpose."""

    error_type = "application_error"

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": True,
            "error_type": self.error_type,
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details or None,
        }


class InvalidInputError(AppException):
    """Malformed or inconsistent input detected before touching the store."""

    error_type = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(message, ErrorCode.VALIDATION_ERROR, 422, details)


class NotFoundError(AppException):
    """A referenced entity id does not resolve."""

    error_type = "not_found"

    def __init__(self, entity: str, entity_id: Optional[int] = None, message: Optional[str] = None):
        if message is None:
            message = f"{entity} not found" if entity_id is None else f"{entity} with id {entity_id} not found"
        super().__init__(message, ErrorCode.NOT_FOUND, 404, {"entity": entity, "id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(AppException):
    """The operation would violate a guard, e.g. deleting a row still in use."""

    error_type = "conflict"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFLICT, 409, details)
