"""
Repository layer: typed records on top of the injected document store.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from app.schemas.checkin import Checkin
from app.schemas.guest import PROFILE_FIELDS, Guest, GuestUpdate
from app.schemas.rsvp import Attendance, Rsvp, RsvpStatus
from app.schemas.settings import SETTINGS_ID, EventSettings
from app.services.storage import CHECKINS, EVENT_SETTINGS, GUESTS, RSVPS, DocumentStore

logger = logging.getLogger(__name__)


def normalize_guest_id(guest_id: Any) -> str:
    """Guest codes are case-sensitive; only surrounding whitespace is ignored"""
    return str(guest_id or "").strip()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -------- Guest directory --------

class GuestRepo:
    def __init__(self, store: DocumentStore):
        self.store = store

    def lookup(self, guest_id: str) -> Optional[Guest]:
        key = normalize_guest_id(guest_id)
        if not key:
            return None
        doc = self.store.find_one(GUESTS, key)
        return Guest.model_validate(doc) if doc else None

    def update_profile(self, guest_id: str, update: GuestUpdate) -> Optional[Guest]:
        """Write only the supplied profile fields; None if the guest does not exist"""
        key = normalize_guest_id(guest_id)
        fields = {
            name: value
            for name, value in update.model_dump(exclude_none=True).items()
            if name in PROFILE_FIELDS
        }
        if not key:
            return None
        if not fields:
            return self.lookup(key)
        doc = self.store.update(GUESTS, key, fields)
        return Guest.model_validate(doc) if doc else None

    def save(self, guest: Guest) -> Guest:
        doc = self.store.upsert(GUESTS, guest.id, guest.to_document())
        return Guest.model_validate(doc)

    def list_all(self) -> List[Guest]:
        return [Guest.model_validate(d) for d in self.store.list_all(GUESTS)]

    def count(self) -> int:
        return self.store.count(GUESTS)


# -------- RSVP tracker --------

class RsvpRepo:
    def __init__(self, store: DocumentStore):
        self.store = store

    def get(self, guest_id: str) -> Optional[Rsvp]:
        doc = self.store.find_one(RSVPS, normalize_guest_id(guest_id))
        return Rsvp.model_validate(doc) if doc else None

    def record_attendance(
        self,
        guest_id: str,
        attendance: Attendance,
        notes: Optional[str] = None,
        dietary_requirements: Optional[str] = None,
        plus_one: Optional[bool] = None,
        plus_one_name: Optional[str] = None,
    ) -> Rsvp:
        """Upsert the guest's RSVP. Only "yes" confirms; anything else declines."""
        key = normalize_guest_id(guest_id)
        attendance = Attendance(attendance)
        status = RsvpStatus.CONFIRMED if attendance is Attendance.YES else RsvpStatus.DECLINED
        fields: Dict[str, Any] = {
            "status": status.value,
            "attendance": attendance.value,
            "confirmedAt": utcnow().isoformat(),
        }
        optional = {
            "notes": notes,
            "dietaryRequirements": dietary_requirements,
            "plusOne": plus_one,
            "plusOneName": plus_one_name,
        }
        fields.update({k: v for k, v in optional.items() if v is not None})
        doc = self.store.upsert(RSVPS, key, fields)
        return Rsvp.model_validate(doc)

    def stats(self) -> Dict[str, int]:
        result = {"total": 0, "confirmed": 0, "declined": 0, "pending": 0}
        for doc in self.store.list_all(RSVPS):
            status = doc.get("status") or RsvpStatus.PENDING.value
            result["total"] += 1
            result[status] = result.get(status, 0) + 1
        return result


# -------- Event settings --------

class EventSettingsRepo:
    def __init__(self, store: DocumentStore):
        self.store = store

    def get(self) -> EventSettings:
        doc = self.store.find_one(EVENT_SETTINGS, SETTINGS_ID)
        return EventSettings.model_validate(doc) if doc else EventSettings()

    def update(self, fields: Dict[str, Any]) -> EventSettings:
        """Merge camelCase ``fields`` over the stored settings"""
        current = self.get().to_document()
        merged = EventSettings.model_validate({**current, **fields, "id": SETTINGS_ID})
        doc = self.store.upsert(EVENT_SETTINGS, SETTINGS_ID, merged.to_document())
        return EventSettings.model_validate(doc)

    def toggle_checkin(self) -> EventSettings:
        # Read-modify-write; concurrent toggles are last-write-wins
        current = self.get()
        updated = self.update({"checkinEnabled": not current.checkin_enabled})
        logger.info(f"Check-in {'enabled' if updated.checkin_enabled else 'disabled'}")
        return updated


# -------- Check-in ledger --------

class CheckinRepo:
    def __init__(self, store: DocumentStore):
        self.store = store

    def find(self, guest_id: str) -> Optional[Checkin]:
        doc = self.store.find_one(CHECKINS, normalize_guest_id(guest_id))
        return Checkin.model_validate(doc) if doc else None

    def append(self, guest_id: str, name: str) -> Tuple[Checkin, bool]:
        """Record a check-in unless one exists. Returns (record, created)."""
        key = normalize_guest_id(guest_id)
        now = utcnow()
        record = Checkin(
            id=key,
            name=name,
            checkin_time=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            timestamp=int(now.timestamp() * 1000),
        )
        doc, created = self.store.insert_unique(CHECKINS, key, record.to_document())
        return Checkin.model_validate(doc), created

    def list_all(self) -> List[Checkin]:
        """All check-ins, newest first"""
        return [Checkin.model_validate(d) for d in self.store.list_sorted(CHECKINS, "timestamp", descending=True)]

    def recent(self, limit: int = 10) -> List[Checkin]:
        return self.list_all()[:limit]

    def count(self) -> int:
        return self.store.count(CHECKINS)
