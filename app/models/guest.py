"""
Guest model
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime

from app.core.db import Base, DocumentMixin

class Guest(DocumentMixin, Base):
    __tablename__ = "guests"

    # The external code printed in the guest's QR link
    id = Column(String(64), primary_key=True)
    salutation = Column(String(32), nullable=False, default="")
    name = Column(String(255), nullable=False, default="")
    position = Column(String(255), nullable=False, default="")
    company = Column(String(255), nullable=False, default="")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __document_fields__ = {
        "id": "id",
        "salutation": "salutation",
        "name": "name",
        "position": "position",
        "company": "company",
    }
