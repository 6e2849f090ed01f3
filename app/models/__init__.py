"""
Database models package
"""

from .guest import Guest
from .rsvp import Rsvp
from .event_settings import EventSettings
from .checkin import Checkin

__all__ = ["Guest", "Rsvp", "EventSettings", "Checkin"]
