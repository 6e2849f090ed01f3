"""
Check-in Pydantic schemas
"""

from enum import Enum
from pydantic import BaseModel

from .common import Record

class Checkin(Record):
    """One ledger entry; id is the guest id"""
    id: str
    name: str
    checkin_time: str
    timestamp: int

class CheckinOutcome(str, Enum):
    RECORDED = "recorded"
    ALREADY_CHECKED_IN = "already_checked_in"

class CheckinResult(BaseModel):
    outcome: CheckinOutcome
    checkin: Checkin

    @property
    def already_checked_in(self) -> bool:
        return self.outcome is CheckinOutcome.ALREADY_CHECKED_IN

class FieldError(BaseModel):
    """A required profile field that is missing"""
    field: str
    message: str
