"""
Admin API routes: check-in gate, event metadata and guest import
"""

import logging

from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import Response

from app.api.dependencies import get_guest_repo, get_settings_repo
from app.core.config import settings
from app.schemas.settings import EventSettingsUpdate
from app.services.import_service import ImportService
from app.services.repositories import EventSettingsRepo, GuestRepo
from app.utils.responses import success_response, error_response

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/event-settings")
async def get_event_settings(event_settings: EventSettingsRepo = Depends(get_settings_repo)):
    return success_response(message="Event settings", data=event_settings.get().to_document())

@router.post("/event-settings")
async def update_event_settings(
    update: EventSettingsUpdate,
    event_settings: EventSettingsRepo = Depends(get_settings_repo),
):
    """Merge the supplied event metadata over the stored settings"""
    fields = update.model_dump(exclude_none=True, by_alias=True)
    updated = event_settings.update(fields)
    logger.info(f"Event settings updated: {sorted(fields)}")
    return success_response(message="Event settings updated", data=updated.to_document())

@router.post("/toggle-checkin")
async def toggle_checkin(event_settings: EventSettingsRepo = Depends(get_settings_repo)):
    """Open or close check-in"""
    updated = event_settings.toggle_checkin()
    state = "enabled" if updated.checkin_enabled else "disabled"
    return success_response(
        message=f"Check-in {state}",
        data=updated.to_document(),
        checkinEnabled=updated.checkin_enabled
    )

@router.post("/import")
async def import_guests(
    file: UploadFile = File(...),
    guests: GuestRepo = Depends(get_guest_repo),
):
    """Upload a CSV or Excel guest list"""
    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        return error_response(
            message="File too large",
            status_code=413
        )

    success, errors, processed_count = ImportService.process_upload(
        file_content=file_content,
        filename=file.filename or "",
        guests=guests
    )

    if not success:
        return error_response(
            message="Guest list validation failed",
            details=errors,
            status_code=422
        )

    return success_response(
        message=f"Guest list processed successfully. {processed_count} guests imported.",
        data={
            "processed_count": processed_count,
            "filename": file.filename
        }
    )

@router.get("/import/template.csv")
async def download_import_template():
    return Response(
        content=ImportService.create_template(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=guest_list_template.csv"}
    )
