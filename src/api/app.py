"""FastAPI application: the Mini App's HTTP surface.

The Telegram bot application (reminder jobs, /start) is started and stopped
with the web server so both share one process and one event loop.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI

from src.api import admin, auth, friends, study_sessions
from src.api.errors import install_error_handlers
from src.config import settings

if TYPE_CHECKING:
    from telegram.ext import Application

    from src.core.portal import PortalCore
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)


def create_app(
    core: PortalCore | None = None,
    bot_app: Application | None = None,
    notifier: NotificationPort | None = None,
) -> FastAPI:
    """Build the API.

    Args:
        core: Portal core. Defaults to one built from settings.
        bot_app: Telegram application to run alongside the API, if any.
        notifier: Notification port for API-triggered broadcasts. Defaults
                  to the bot application's notifier.
    """
    if core is None:
        from src.core.portal import build_core
        core = build_core(settings)

    if notifier is None and bot_app is not None:
        notifier = bot_app.bot_data.get("notifier")

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if bot_app is None:
            yield
            return

        await bot_app.initialize()
        await bot_app.start()
        if settings.BOT_POLLING:
            await bot_app.updater.start_polling()
        logger.info("Telegram bot started")
        try:
            yield
        finally:
            if bot_app.updater is not None and bot_app.updater.running:
                await bot_app.updater.stop()
            await bot_app.stop()
            await bot_app.shutdown()
            logger.info("Telegram bot stopped")

    app = FastAPI(title="Student Portal Core", lifespan=lifespan)
    app.state.core = core
    app.state.notifier = notifier

    install_error_handlers(app)
    app.include_router(auth.router)
    app.include_router(friends.router)
    app.include_router(study_sessions.router)
    app.include_router(admin.router)

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


def main() -> None:
    """Entry point: build core, bot and API, then serve with uvicorn."""
    import uvicorn

    from src.bot.telegram_bot import build_app
    from src.core.portal import build_core

    logger.info("Starting Student Portal Core...")
    core = build_core(settings)
    bot_app = build_app(core)
    app = create_app(core, bot_app=bot_app)
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
