"""
Custom exceptions for the parcel store.

Every failure surfaced by the store carries a stable error code so callers
can tell "no such parcel" apart from "wrong state" and "bad input".
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ParcelNotFoundError(AppException):
    """Raised when no parcel has the requested number."""
    
    def __init__(self, number: int):
        super().__init__(
            message=f"Parcel with number {number} not found",
            error_code="ERR_NOT_FOUND_001",
            details={"resource": "parcel", "number": number}
        )
        self.number = number


class InvalidParcelStateError(AppException):
    """Raised when the parcel's current status forbids the operation."""
    
    def __init__(self, number: int, operation: str, current_status: Any, target_status: Any = None):
        message = f"Cannot {operation} parcel {number} in status '{_status_value(current_status)}'"
        details = {
            "number": number,
            "operation": operation,
            "current_status": _status_value(current_status),
        }
        if target_status is not None:
            message = (
                f"Cannot move parcel {number} from '{_status_value(current_status)}' "
                f"to '{_status_value(target_status)}'"
            )
            details["target_status"] = _status_value(target_status)
        super().__init__(message=message, error_code="ERR_STATE_001", details=details)
        self.number = number
        self.operation = operation


class ParcelValidationError(AppException):
    """Raised for malformed input (empty required field, unknown status)."""
    
    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            error_code="ERR_VALIDATION",
            details={"field": field}
        )
        self.field = field


class StorageError(AppException):
    """Raised when the underlying database call fails. The cause is chained."""
    
    def __init__(self, operation: str, cause: Exception):
        super().__init__(
            message=f"Storage failure during {operation}: {cause}",
            error_code="ERR_STORAGE_001",
            details={"operation": operation, "cause": type(cause).__name__}
        )
        self.operation = operation


def _status_value(status: Any) -> Any:
    return getattr(status, "value", status)
