"""
Public pages and read-only reporting API
"""

import os

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from app.api.dependencies import get_checkin_repo, get_guest_repo, get_rsvp_repo, get_settings_repo
from app.core.config import settings
from app.services.qr_service import QRService
from app.services.report_service import ReportService
from app.services.repositories import CheckinRepo, EventSettingsRepo, GuestRepo, RsvpRepo

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request, checkins: CheckinRepo = Depends(get_checkin_repo)):
    """Check-in totals and the most recent arrivals"""
    return templates.TemplateResponse(request, "index.html", {
        "title": settings.EVENT_TITLE,
        "total": checkins.count(),
        "recent": checkins.recent(10),
    })

@router.get("/checkin/{guest_id}", response_class=HTMLResponse)
async def checkin_page(
    request: Request,
    guest_id: str,
    guests: GuestRepo = Depends(get_guest_repo),
    checkins: CheckinRepo = Depends(get_checkin_repo),
    event_settings: EventSettingsRepo = Depends(get_settings_repo),
):
    """Personalized page opened from the guest's QR code"""
    guest = guests.lookup(guest_id)
    if guest is None:
        return templates.TemplateResponse(
            request,
            "guest_not_found.html",
            {"title": settings.EVENT_TITLE, "guest_id": guest_id},
            status_code=404,
        )

    return templates.TemplateResponse(request, "checkin.html", {
        "title": settings.EVENT_TITLE,
        "guest": guest,
        "checkin": checkins.find(guest.id),
        "settings": event_settings.get(),
        "checkin_url": QRService.checkin_url(guest.id),
    })

@router.get("/api/checkins")
async def list_checkins(checkins: CheckinRepo = Depends(get_checkin_repo)):
    """All check-ins, newest first"""
    records = checkins.list_all()
    return {
        "total": len(records),
        "checkins": [c.to_document() for c in records],
    }

@router.get("/api/export")
async def export_checkins(checkins: CheckinRepo = Depends(get_checkin_repo)):
    """Check-in report rows"""
    rows = ReportService(checkins).export_rows()
    return {"total": len(rows), "data": rows}

@router.get("/api/export/checkins.xlsx")
async def export_checkins_excel(checkins: CheckinRepo = Depends(get_checkin_repo)):
    """Check-in report as an Excel workbook"""
    return Response(
        content=ReportService(checkins).export_excel(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=checkins.xlsx"}
    )

@router.get("/api/stats")
async def stats(
    guests: GuestRepo = Depends(get_guest_repo),
    checkins: CheckinRepo = Depends(get_checkin_repo),
    rsvps: RsvpRepo = Depends(get_rsvp_repo),
    event_settings: EventSettingsRepo = Depends(get_settings_repo),
):
    return ReportService.stats(guests, checkins, rsvps, event_settings)
