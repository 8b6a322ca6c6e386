"""The caller's own study schedule."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import current_user, get_core
from src.api.schemas import MessageResponse, StudySessionSchema
from src.core.portal import AuthenticatedUser, PortalCore

router = APIRouter(prefix="/api/study-sessions")


@router.get("", response_model=List[StudySessionSchema])
async def get_sessions(
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> List[StudySessionSchema]:
    return [StudySessionSchema.from_model(s) for s in core.sessions.get(user.uid)]


@router.post("", response_model=MessageResponse)
async def replace_sessions(
    sessions: List[StudySessionSchema],
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> MessageResponse:
    if not core.sessions.replace_all(user.uid, [s.to_model() for s in sessions]):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Failed to update study sessions")
    return MessageResponse(message="Study sessions updated successfully")
