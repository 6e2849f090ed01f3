"""
Guest check-in service with real-time broadcasting
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from app.core.errors import CheckinDisabledError, GuestNotFoundError, IncompleteProfileError
from app.schemas.checkin import Checkin, CheckinOutcome, CheckinResult, FieldError
from app.schemas.guest import PROFILE_FIELDS, Guest
from app.services.repositories import CheckinRepo, EventSettingsRepo, GuestRepo

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "salutation": "Salutation",
    "name": "Full name",
    "position": "Position",
    "company": "Company",
}


def validate_profile(guest: Guest) -> List[FieldError]:
    """Return one error per required profile field that is empty after trimming"""
    errors = []
    for field in PROFILE_FIELDS:
        value = getattr(guest, field, None) or ""
        if not value.strip():
            errors.append(FieldError(field=field, message=f"{FIELD_LABELS[field]} is required"))
    return errors


class CheckInService:
    """Service for handling guest check-ins"""

    def __init__(
        self,
        guests: GuestRepo,
        event_settings: EventSettingsRepo,
        checkins: CheckinRepo,
        websocket_manager=None,
    ):
        self.guests = guests
        self.event_settings = event_settings
        self.checkins = checkins
        self.websocket_manager = websocket_manager

    def process_checkin(self, guest_id: str) -> CheckinResult:
        """Run the check-in for one guest.

        Gates are evaluated in order: check-in open, guest exists, profile
        complete. Only then is the ledger consulted, so a guest who already
        checked in but whose profile was later emptied gets
        ``IncompleteProfileError`` rather than the already-checked-in outcome.

        Raises:
            CheckinDisabledError, GuestNotFoundError, IncompleteProfileError
        """
        settings = self.event_settings.get()
        if not settings.checkin_enabled:
            logger.warning(f"Check-in rejected for {guest_id!r}: check-in disabled")
            raise CheckinDisabledError()

        guest = self.guests.lookup(guest_id)
        if guest is None:
            logger.warning(f"Check-in rejected for {guest_id!r}: guest not found")
            raise GuestNotFoundError(guest_id)

        errors = validate_profile(guest)
        if errors:
            logger.warning(f"Check-in rejected for {guest.id}: missing {[e.field for e in errors]}")
            raise IncompleteProfileError(errors)

        existing = self.checkins.find(guest.id)
        if existing is not None:
            return CheckinResult(outcome=CheckinOutcome.ALREADY_CHECKED_IN, checkin=existing)

        record, created = self.checkins.append(guest.id, guest.name)
        if not created:
            # A concurrent request won the insert
            return CheckinResult(outcome=CheckinOutcome.ALREADY_CHECKED_IN, checkin=record)

        logger.info(f"Guest {guest.id} ({guest.name}) checked in at {record.checkin_time}")
        return CheckinResult(outcome=CheckinOutcome.RECORDED, checkin=record)

    async def broadcast_checkin(self, checkin: Checkin, total: Optional[int] = None):
        """Broadcast a newly recorded check-in to connected dashboards"""
        if self.websocket_manager is None:
            return

        message = {
            "type": "checkin",
            "checkin": checkin.to_document(),
            "total": total,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        await self.websocket_manager.broadcast(message)
