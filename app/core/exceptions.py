from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class InvalidInputError(AppException):
    """Malformed date, bad enum value, missing field or out-of-bounds value."""
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "INVALID_INPUT"
    ):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )

class RangeTooLongError(InvalidInputError):
    def __init__(self, days: int, max_days: int):
        super().__init__(
            message=f"Vacation period too long ({days} days, max {max_days} days)",
            details={"days": days, "max_days": max_days},
            error_code="RANGE_TOO_LONG"
        )

class NotFoundError(AppException):
    def __init__(self, message: str = "Not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class PersistenceError(AppException):
    """Store error; the transaction that raised it has already been rolled back."""
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=500,
            error_code="PERSISTENCE_FAILURE"
        )

class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )
