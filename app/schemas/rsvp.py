"""
RSVP Pydantic schemas
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from .common import Record

class RsvpStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"

class Attendance(str, Enum):
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"

class Rsvp(Record):
    guest_id: str
    status: RsvpStatus = RsvpStatus.PENDING
    attendance: Optional[Attendance] = None
    confirmed_at: Optional[datetime] = None
    notes: Optional[str] = None
    dietary_requirements: Optional[str] = None
    plus_one: Optional[bool] = None
    plus_one_name: Optional[str] = None

class RsvpRequest(Record):
    """Attendance submitted by a guest"""
    attendance: Attendance
    notes: Optional[str] = None
    dietary_requirements: Optional[str] = None
    plus_one: Optional[bool] = None
    plus_one_name: Optional[str] = None
