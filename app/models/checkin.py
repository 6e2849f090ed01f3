"""
Check-in ledger model
"""

from sqlalchemy import Column, String, BigInteger

from app.core.db import Base, DocumentMixin

class Checkin(DocumentMixin, Base):
    __tablename__ = "checkins"

    # Primary key on the guest id is what makes a second check-in impossible
    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    checkin_time = Column(String(40), nullable=False)
    timestamp = Column(BigInteger, nullable=False, index=True)

    __document_fields__ = {
        "id": "id",
        "name": "name",
        "checkinTime": "checkin_time",
        "timestamp": "timestamp",
    }
