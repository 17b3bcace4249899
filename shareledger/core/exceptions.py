"""Custom exception classes"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for application errors.

    Subclasses fix the HTTP status and error type; only the message and
    optional details vary per raise.
    """

    status_code: int = 500
    error_type: str = "AppError"
    default_message: str = "Application error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Error body for JSON responses"""
        body: Dict[str, Any] = {"message": self.message, "type": self.error_type}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppException):
    """Request could not be turned into an expense (e.g. empty allocation)"""

    status_code = 400
    error_type = "ValidationError"
    default_message = "Invalid request"


class NotFoundError(AppException):
    """Expense does not exist"""

    status_code = 404
    error_type = "NotFoundError"
    default_message = "Resource not found"


class AuthorizationError(AppException):
    """Member is not allowed to perform the requested settlement"""

    status_code = 403
    error_type = "AuthorizationError"
    default_message = "Permission denied"


class ConflictError(AppException):
    """Resource conflict exception (e.g., duplicate expense id)"""

    status_code = 409
    error_type = "ConflictError"
    default_message = "Resource already exists"
