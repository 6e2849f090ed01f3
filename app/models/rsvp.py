"""
RSVP model
"""

from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text

from app.core.db import Base, DocumentMixin

class Rsvp(DocumentMixin, Base):
    __tablename__ = "rsvps"

    guest_id = Column(String(64), primary_key=True)
    status = Column(String(16), nullable=False, default="pending")  # pending, confirmed, declined
    attendance = Column(String(8))  # yes, no, maybe
    confirmed_at = Column(String(40))
    notes = Column(Text)
    dietary_requirements = Column(String(255))
    plus_one = Column(Boolean)
    plus_one_name = Column(String(255))
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __document_fields__ = {
        "guestId": "guest_id",
        "status": "status",
        "attendance": "attendance",
        "confirmedAt": "confirmed_at",
        "notes": "notes",
        "dietaryRequirements": "dietary_requirements",
        "plusOne": "plus_one",
        "plusOneName": "plus_one_name",
    }
