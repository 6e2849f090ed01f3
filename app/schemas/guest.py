"""
Guest-related Pydantic schemas
"""

from typing import Optional
from pydantic import BaseModel

from .common import Record

PROFILE_FIELDS = ("salutation", "name", "position", "company")

class Guest(Record):
    """A guest as held by the guest directory"""
    id: str
    salutation: str = ""
    name: str = ""
    position: str = ""
    company: str = ""

class GuestUpdate(BaseModel):
    """Partial profile update; fields left as None are not written"""
    salutation: Optional[str] = None
    name: Optional[str] = None
    position: Optional[str] = None
    company: Optional[str] = None
