"""
Pydantic schemas package
"""

from .common import *
from .guest import *
from .rsvp import *
from .settings import *
from .checkin import *

__all__ = [
    "Record",
    "StandardResponse",
    "ErrorResponse",
    "Guest",
    "GuestUpdate",
    "PROFILE_FIELDS",
    "Rsvp",
    "RsvpStatus",
    "Attendance",
    "RsvpRequest",
    "EventSettings",
    "EventSettingsUpdate",
    "SETTINGS_ID",
    "Checkin",
    "CheckinOutcome",
    "CheckinResult",
    "FieldError",
]
