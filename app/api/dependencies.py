"""
FastAPI dependencies wiring repositories and services to the configured store
"""

from fastapi import Depends, Request

from app.api.ws import websocket_manager
from app.services.checkin_service import CheckInService
from app.services.repositories import CheckinRepo, EventSettingsRepo, GuestRepo, RsvpRepo
from app.services.storage import DocumentStore, get_store
from app.utils.security import get_client_ip, rate_limit_check
from app.utils.responses import rate_limit_error


def get_guest_repo(store: DocumentStore = Depends(get_store)) -> GuestRepo:
    return GuestRepo(store)


def get_rsvp_repo(store: DocumentStore = Depends(get_store)) -> RsvpRepo:
    return RsvpRepo(store)


def get_settings_repo(store: DocumentStore = Depends(get_store)) -> EventSettingsRepo:
    return EventSettingsRepo(store)


def get_checkin_repo(store: DocumentStore = Depends(get_store)) -> CheckinRepo:
    return CheckinRepo(store)


def get_checkin_service(store: DocumentStore = Depends(get_store)) -> CheckInService:
    return CheckInService(
        guests=GuestRepo(store),
        event_settings=EventSettingsRepo(store),
        checkins=CheckinRepo(store),
        websocket_manager=websocket_manager,
    )


def enforce_rate_limit(request: Request) -> None:
    """Per-IP request budget for public write endpoints"""
    if not rate_limit_check(get_client_ip(request)):
        rate_limit_error()
