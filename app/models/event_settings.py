"""
Event settings model (single row keyed by "main")
"""

from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime

from app.core.db import Base, DocumentMixin

class EventSettings(DocumentMixin, Base):
    __tablename__ = "event_settings"

    id = Column(String(16), primary_key=True, default="main")
    checkin_enabled = Column(Boolean, nullable=False, default=False)
    rsvp_enabled = Column(Boolean, nullable=False, default=True)
    event_date = Column(String(32))
    event_time = Column(String(32))
    event_location = Column(String(255))
    require_confirmation = Column(Boolean, nullable=False, default=True)
    allow_walk_in = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __document_fields__ = {
        "id": "id",
        "checkinEnabled": "checkin_enabled",
        "rsvpEnabled": "rsvp_enabled",
        "eventDate": "event_date",
        "eventTime": "event_time",
        "eventLocation": "event_location",
        "requireConfirmation": "require_confirmation",
        "allowWalkIn": "allow_walk_in",
    }
