"""Mini App login and the caller's own profile."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import current_user, get_core
from src.api.schemas import UserProfile, ValidatedUser, ValidateRequest, ValidateResponse
from src.core.exceptions import InvalidAssertion
from src.core.portal import AuthenticatedUser, PortalCore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/telegram/validate", response_model=ValidateResponse)
async def validate(payload: ValidateRequest, core: PortalCore = Depends(get_core)) -> ValidateResponse:
    if not payload.init_data:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Init data required")
    try:
        auth = core.authenticate(payload.init_data)
    except InvalidAssertion as exc:
        logger.warning("Login rejected: %s", exc.reason)
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Invalid Telegram data") from None

    identity = auth.identity
    return ValidateResponse(
        user=ValidatedUser(
            id=identity.id,
            first_name=identity.first_name,
            last_name=identity.last_name,
            username=identity.username,
            language_code=identity.language_code,
            is_bot=identity.is_bot,
            uid=auth.uid,
            is_admin=auth.is_admin,
            is_main_admin=auth.is_main_admin,
        )
    )


@router.get("/user/profile", response_model=UserProfile)
async def profile(user: AuthenticatedUser = Depends(current_user)) -> UserProfile:
    return UserProfile.from_record(user.record)
