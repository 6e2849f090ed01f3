"""
Guest-facing API routes
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.api.dependencies import (
    enforce_rate_limit,
    get_checkin_repo,
    get_checkin_service,
    get_guest_repo,
    get_rsvp_repo,
    get_settings_repo,
)
from app.core.errors import GuestNotFoundError, RsvpDisabledError
from app.schemas.checkin import CheckinOutcome
from app.schemas.guest import GuestUpdate
from app.schemas.rsvp import Rsvp, RsvpRequest
from app.services.checkin_service import CheckInService
from app.services.qr_service import QRService
from app.services.repositories import CheckinRepo, EventSettingsRepo, GuestRepo, RsvpRepo
from app.utils.responses import success_response

router = APIRouter()

@router.post("/checkin/{guest_id}", dependencies=[Depends(enforce_rate_limit)])
async def check_in_guest(
    guest_id: str,
    checkin_service: CheckInService = Depends(get_checkin_service),
    checkins: CheckinRepo = Depends(get_checkin_repo),
):
    """Check in a guest and broadcast the arrival"""
    result = checkin_service.process_checkin(guest_id)

    if result.outcome is CheckinOutcome.RECORDED:
        await checkin_service.broadcast_checkin(result.checkin, total=checkins.count())
        message = "Check-in successful"
    else:
        message = "Guest already checked in"

    return success_response(
        message=message,
        data=result.checkin.to_document(),
        alreadyCheckedIn=result.already_checked_in
    )

@router.get("/guest/{guest_id}")
async def get_guest(guest_id: str, guests: GuestRepo = Depends(get_guest_repo)):
    guest = guests.lookup(guest_id)
    if guest is None:
        raise GuestNotFoundError(guest_id)
    return success_response(message="Guest found", data=guest.to_document())

@router.post("/guest/{guest_id}", dependencies=[Depends(enforce_rate_limit)])
async def update_guest(
    guest_id: str,
    update: GuestUpdate,
    guests: GuestRepo = Depends(get_guest_repo),
):
    """Partial profile update; omitted fields keep their values"""
    guest = guests.update_profile(guest_id, update)
    if guest is None:
        raise GuestNotFoundError(guest_id)
    return success_response(message="Guest updated", data=guest.to_document())

@router.get("/guest/{guest_id}/qr.png")
async def guest_qr(guest_id: str, guests: GuestRepo = Depends(get_guest_repo)):
    guest = guests.lookup(guest_id)
    if guest is None:
        raise GuestNotFoundError(guest_id)
    return Response(
        content=QRService.generate_guest_qr(guest.id),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename={guest.id}.png"}
    )

@router.get("/rsvp/{guest_id}")
async def get_rsvp(
    guest_id: str,
    guests: GuestRepo = Depends(get_guest_repo),
    rsvps: RsvpRepo = Depends(get_rsvp_repo),
):
    guest = guests.lookup(guest_id)
    if guest is None:
        raise GuestNotFoundError(guest_id)
    rsvp = rsvps.get(guest.id) or Rsvp(guest_id=guest.id)
    return success_response(message="RSVP found", data=rsvp.to_document())

@router.post("/rsvp/{guest_id}", dependencies=[Depends(enforce_rate_limit)])
async def record_rsvp(
    guest_id: str,
    rsvp_data: RsvpRequest,
    guests: GuestRepo = Depends(get_guest_repo),
    rsvps: RsvpRepo = Depends(get_rsvp_repo),
    event_settings: EventSettingsRepo = Depends(get_settings_repo),
):
    """Record the guest's attendance intent"""
    if not event_settings.get().rsvp_enabled:
        raise RsvpDisabledError()

    guest = guests.lookup(guest_id)
    if guest is None:
        raise GuestNotFoundError(guest_id)

    rsvp = rsvps.record_attendance(
        guest.id,
        rsvp_data.attendance,
        notes=rsvp_data.notes,
        dietary_requirements=rsvp_data.dietary_requirements,
        plus_one=rsvp_data.plus_one,
        plus_one_name=rsvp_data.plus_one_name,
    )
    return success_response(message="RSVP recorded", data=rsvp.to_document())
