"""REST API surface for friend requests, friendships and friends' schedules."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import current_user, get_core
from src.api.schemas import (
    FriendRequestBody,
    FriendSummarySchema,
    MessageResponse,
    RequesterBody,
    StudySessionSchema,
)
from src.core.exceptions import Conflict, Forbidden, NotFound
from src.core.portal import AuthenticatedUser, PortalCore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/friends")


def _bad_request(action: str, exc: Exception) -> HTTPException:
    logger.info("Friend %s refused: %s", action, getattr(exc, "reason", exc))
    return HTTPException(status.HTTP_400_BAD_REQUEST, detail=f"Failed to {action} friend request")


@router.post("/request", response_model=MessageResponse)
async def send_request(
    payload: FriendRequestBody,
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> MessageResponse:
    try:
        core.graph.send_request(user.uid, payload.friend_uid)
    except (Conflict, NotFound) as exc:
        raise _bad_request("send", exc) from None
    return MessageResponse(message="Friend request sent successfully")


@router.post("/accept", response_model=MessageResponse)
async def accept_request(
    payload: RequesterBody,
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> MessageResponse:
    try:
        core.graph.accept(user.uid, payload.requester_uid)
    except NotFound as exc:
        raise _bad_request("accept", exc) from None
    return MessageResponse(message="Friend request accepted")


@router.post("/reject", response_model=MessageResponse)
async def reject_request(
    payload: RequesterBody,
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> MessageResponse:
    try:
        core.graph.reject(user.uid, payload.requester_uid)
    except NotFound as exc:
        raise _bad_request("reject", exc) from None
    return MessageResponse(message="Friend request rejected")


@router.get("/requests", response_model=List[FriendSummarySchema])
async def list_requests(
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> List[FriendSummarySchema]:
    return [FriendSummarySchema.from_model(s) for s in core.graph.list_pending(user.uid)]


@router.get("", response_model=List[FriendSummarySchema])
async def list_friends(
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> List[FriendSummarySchema]:
    return [FriendSummarySchema.from_model(s) for s in core.graph.list_friends(user.uid)]


@router.get("/{uid}/schedule", response_model=List[StudySessionSchema])
async def friend_schedule(
    uid: str,
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> List[StudySessionSchema]:
    try:
        sessions = core.sessions.get_for_friend(user.uid, uid)
    except Forbidden:
        raise HTTPException(
            status.HTTP_403_FORBIDDEN, detail="Cannot access friend's schedule",
        ) from None
    return [StudySessionSchema.from_model(s) for s in sessions]
