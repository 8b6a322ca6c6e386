"""
Student Portal Core — Telegram Bot.

The bot is the portal's voice: it greets users who open a chat with it and
owns the job queue that drives the study and exam reminder loops. Everything
else happens in the Mini App, served by src.api.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from telegram import Update
from telegram.ext import Application, ApplicationBuilder, CommandHandler, ContextTypes

from src.config import settings
from src.core.reminders import ReminderScheduler

if TYPE_CHECKING:
    from src.core.portal import PortalCore
    from src.ports.exam_source import ExamSource
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

WELCOME_TEXT = "مرحباً بك في منصة طلاب الجامعة! 📚\n\nاستخدم Web App للوصول إلى جميع الميزات."

# First exam check shortly after startup; per-exam de-duplication makes it safe
_EXAM_FIRST_RUN_SECONDS = 10


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start: point the user at the Mini App."""
    user = update.effective_user
    logger.info("/start from user_id=%s", user.id if user else "unknown")
    await update.message.reply_text(WELCOME_TEXT)


# ---------------------------------------------------------------------------
# App builder
# ---------------------------------------------------------------------------


def build_app(
    core: PortalCore,
    notifier: NotificationPort | None = None,
    exam_source: ExamSource | None = None,
) -> Application:
    """Build and configure the Telegram Application with handlers and reminder jobs.

    Args:
        core: Portal core whose users receive reminders.
        notifier: Notification port implementation. Defaults to TelegramNotifier
                  (created from the bot instance after app is built).
        exam_source: Exam listing. Defaults to HttpExamSource on EXAMS_URL.
    """
    app = ApplicationBuilder().token(settings.TELEGRAM_BOT_TOKEN).build()

    if notifier is None:
        from src.adapters.telegram_notifier import TelegramNotifier
        notifier = TelegramNotifier(app.bot)

    if exam_source is None:
        from src.adapters.http_exam_source import HttpExamSource
        exam_source = HttpExamSource(settings.EXAMS_URL)

    scheduler = ReminderScheduler(
        core.directory,
        notifier,
        exam_source,
        study_interval=timedelta(seconds=settings.STUDY_CHECK_INTERVAL_SECONDS),
        lead=timedelta(minutes=settings.STUDY_REMINDER_LEAD_MINUTES),
        send_timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
    )

    # The API picks the notifier up from here for file broadcasts
    app.bot_data["notifier"] = notifier

    app.add_handler(CommandHandler("start", cmd_start))

    _setup_reminder_jobs(app, scheduler)

    logger.info("Telegram bot application built with %d handlers", len(app.handlers[0]))
    return app


def _setup_reminder_jobs(app: Application, scheduler: ReminderScheduler) -> None:
    """Register the repeating study and exam reminder jobs."""

    async def _study_job_callback(context: ContextTypes.DEFAULT_TYPE) -> None:
        await scheduler.run_study_tick()

    async def _exam_job_callback(context: ContextTypes.DEFAULT_TYPE) -> None:
        await scheduler.run_exam_tick()

    app.job_queue.run_repeating(
        _study_job_callback,
        interval=settings.STUDY_CHECK_INTERVAL_SECONDS,
        first=0,
        name="study_reminders",
    )
    app.job_queue.run_repeating(
        _exam_job_callback,
        interval=timedelta(hours=settings.EXAM_CHECK_INTERVAL_HOURS),
        first=_EXAM_FIRST_RUN_SECONDS,
        name="exam_reminders",
    )

    logger.info(
        "Reminders scheduled: study every %ds, exams every %dh",
        settings.STUDY_CHECK_INTERVAL_SECONDS,
        settings.EXAM_CHECK_INTERVAL_HOURS,
    )
