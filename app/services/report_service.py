"""
Check-in reports: export rows, Excel export and dashboard counters
"""

import io
from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo
import pandas as pd

from app.core.config import settings
from app.services.repositories import CheckinRepo, EventSettingsRepo, GuestRepo, RsvpRepo

class ReportService:
    """Service for check-in reporting"""

    def __init__(self, checkins: CheckinRepo, tz_name: Optional[str] = None):
        self.checkins = checkins
        self.tz = ZoneInfo(tz_name or settings.EVENT_TIMEZONE)

    def export_rows(self) -> List[Dict[str, Any]]:
        """One row per check-in, newest first, with local date and time columns"""
        rows = []
        for checkin in self.checkins.list_all():
            local = datetime.fromtimestamp(checkin.timestamp / 1000, tz=self.tz)
            rows.append({
                "id": checkin.id,
                "name": checkin.name,
                "checkinTime": checkin.checkin_time,
                "checkinDate": local.strftime("%d/%m/%Y"),
                "checkinTimeOnly": local.strftime("%H:%M:%S"),
            })
        return rows

    def export_excel(self) -> bytes:
        df = pd.DataFrame(self.export_rows(), columns=["id", "name", "checkinTime", "checkinDate", "checkinTimeOnly"])
        df = df.rename(columns={
            "id": "Code",
            "name": "Full Name",
            "checkinTime": "Check-in Time (UTC)",
            "checkinDate": "Date",
            "checkinTimeOnly": "Time",
        })

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Check-ins')

        return buffer.getvalue()

    @staticmethod
    def stats(guests: GuestRepo, checkins: CheckinRepo, rsvps: RsvpRepo, event_settings: EventSettingsRepo) -> Dict[str, Any]:
        return {
            "totalGuests": guests.count(),
            "checkedIn": checkins.count(),
            "rsvp": rsvps.stats(),
            "checkinEnabled": event_settings.get().checkin_enabled,
        }
