"""Admin endpoints: granting the admin tier, user listing, file broadcasts."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status

from src.api.deps import get_core, require_admin, require_main_admin
from src.api.schemas import AddAdminBody, FileNotificationBody, MessageResponse, UserProfile
from src.config import settings
from src.core.broadcasts import notify_new_file
from src.core.portal import AuthenticatedUser, PortalCore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin")


@router.post("/add", response_model=MessageResponse)
async def add_admin(
    payload: AddAdminBody,
    user: AuthenticatedUser = Depends(require_main_admin),
    core: PortalCore = Depends(get_core),
) -> MessageResponse:
    if not core.privileges.promote(user.platform_id, payload.telegram_id):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Failed to add admin")
    return MessageResponse(message="Admin added successfully")


@router.get("/users", response_model=List[UserProfile])
async def list_users(
    user: AuthenticatedUser = Depends(require_admin),
    core: PortalCore = Depends(get_core),
) -> List[UserProfile]:
    return [UserProfile.from_record(r) for r in core.directory.list_users()]


@router.post(
    "/notify-file",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def notify_file(
    payload: FileNotificationBody,
    request: Request,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(require_admin),
    core: PortalCore = Depends(get_core),
) -> MessageResponse:
    """Announce a newly uploaded file to every user, after responding."""
    notifier = request.app.state.notifier
    if notifier is None:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail="Notifications unavailable")

    background_tasks.add_task(
        notify_new_file,
        notifier,
        core.directory,
        payload.file_name,
        payload.subject,
        settings.NOTIFICATION_TIMEOUT_SECONDS,
    )
    logger.info("File notification for '%s' queued by %d", payload.file_name, user.platform_id)
    return MessageResponse(message="Notification queued")
