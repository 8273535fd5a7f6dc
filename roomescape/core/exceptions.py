"""
Custom application exceptions
"""

from typing import Optional, Dict, Any


class RoomEscapeException(Exception):
    """Base exception for the room escape application"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(RoomEscapeException):
    """Authentication related errors"""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="AUTH_ERROR",
            status_code=401,
            details=details
        )


class AuthorizationError(RoomEscapeException):
    """Authorization related errors"""

    def __init__(self, message: str = "Not authorized", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="AUTH_FORBIDDEN",
            status_code=403,
            details=details
        )


class NotFoundError(RoomEscapeException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with id {identifier} not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404
        )


class ValidationError(RoomEscapeException):
    """Validation errors"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class WaitingError(RoomEscapeException):
    """Waiting creation errors"""

    def __init__(
        self,
        message: str,
        code: str = "WAITING_ERROR",
        status_code: int = 400,
        details: Optional[Dict] = None
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=details
        )


class SlotNotFoundError(WaitingError):
    """No reservation exists for the requested slot"""

    def __init__(self, details: Optional[Dict] = None):
        super().__init__(
            message="Cannot wait on a date, time and theme that has no reservation",
            code="SLOT_NOT_FOUND",
            details=details
        )


class SelfConflictError(WaitingError):
    """Requester already holds the reservation for the slot"""

    def __init__(self, details: Optional[Dict] = None):
        super().__init__(
            message="Cannot wait on a date, time and theme you have reserved yourself",
            code="SELF_CONFLICT",
            details=details
        )


class DuplicateWaitingError(WaitingError):
    """Requester is already waiting on the slot"""

    def __init__(self, details: Optional[Dict] = None):
        super().__init__(
            message="Duplicate waiting for the same member and slot",
            code="DUPLICATE_WAITING",
            status_code=409,
            details=details
        )


class PastSlotError(WaitingError):
    """Slot has already elapsed"""

    def __init__(self, details: Optional[Dict] = None):
        super().__init__(
            message="Cannot wait on a past date and time",
            code="PAST_SLOT",
            details=details
        )
