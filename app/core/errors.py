"""
Domain errors raised by the check-in services.

Each error carries an ``ErrorCode`` and the HTTP status it maps to; the
exception handlers in ``app.utils.responses`` turn them into the standard
``{success: false, ...}`` body at the request boundary.
"""

from enum import Enum
from typing import Any, List, Optional

from starlette import status


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CHECKIN_DISABLED = "CHECKIN_DISABLED"
    RSVP_DISABLED = "RSVP_DISABLED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORAGE_FAILURE = "STORAGE_FAILURE"


class CheckinError(Exception):
    """Base class for all domain errors"""

    code: ErrorCode = ErrorCode.STORAGE_FAILURE
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class GuestNotFoundError(CheckinError):
    code = ErrorCode.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Guest not found"

    def __init__(self, guest_id: str):
        self.guest_id = guest_id
        super().__init__(f"Guest '{guest_id}' not found")


class CheckinDisabledError(CheckinError):
    code = ErrorCode.CHECKIN_DISABLED
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Check-in is not open yet"


class RsvpDisabledError(CheckinError):
    code = ErrorCode.RSVP_DISABLED
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "RSVP is closed"


class IncompleteProfileError(CheckinError):
    code = ErrorCode.VALIDATION_FAILED
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Guest profile is incomplete"

    def __init__(self, errors: List[Any]):
        self.errors = errors
        super().__init__()


class StorageError(CheckinError):
    """Any failure of the underlying persistence backend"""

    code = ErrorCode.STORAGE_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "A system error occurred, please try again"
