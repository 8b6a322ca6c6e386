"""FastAPI dependencies: the portal core and the authenticated caller.

Follow-up calls from the Mini App carry the raw init data in the
``X-Telegram-Init-Data`` header and are re-verified on every request.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, Request, status

from src.core.exceptions import InvalidAssertion
from src.core.portal import AuthenticatedUser, PortalCore

logger = logging.getLogger(__name__)


def get_core(request: Request) -> PortalCore:
    return request.app.state.core


def current_user(
    core: PortalCore = Depends(get_core),
    x_telegram_init_data: str | None = Header(default=None),
) -> AuthenticatedUser:
    if not x_telegram_init_data:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Telegram authentication required")
    try:
        return core.authenticate(x_telegram_init_data)
    except InvalidAssertion as exc:
        logger.warning("Rejected init data: %s", exc.reason)
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED, detail="Invalid Telegram authentication",
        ) from None


def require_admin(
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> AuthenticatedUser:
    if not core.privileges.is_admin(user.platform_id):
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


def require_main_admin(
    user: AuthenticatedUser = Depends(current_user),
    core: PortalCore = Depends(get_core),
) -> AuthenticatedUser:
    if not core.privileges.is_main_admin(user.platform_id):
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Main admin access required")
    return user
