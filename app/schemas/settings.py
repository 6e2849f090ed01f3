"""
Event settings Pydantic schemas
"""

from typing import Optional

from .common import Record

SETTINGS_ID = "main"

class EventSettings(Record):
    """The single global settings record"""
    id: str = SETTINGS_ID
    checkin_enabled: bool = False
    rsvp_enabled: bool = True
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    event_location: Optional[str] = None
    require_confirmation: bool = True
    allow_walk_in: bool = False

class EventSettingsUpdate(Record):
    """Admin update of event metadata; only supplied fields are merged"""
    checkin_enabled: Optional[bool] = None
    rsvp_enabled: Optional[bool] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    event_location: Optional[str] = None
    require_confirmation: Optional[bool] = None
    allow_walk_in: Optional[bool] = None
