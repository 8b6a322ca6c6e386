"""Notification delivery helpers shared by the reminder loops and the API.

Every send is bounded by a timeout and isolated: a failing or slow
recipient is logged and skipped, never allowed to stop the others.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from src.core.identity import IdentityDirectory
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


async def deliver(
    notifier: NotificationPort,
    recipient: int,
    text: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> bool:
    """Send one message. Returns True on success, False on any failure."""
    try:
        await asyncio.wait_for(notifier.send_message(recipient, text), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error("Notification to %d timed out after %.1fs", recipient, timeout)
        return False
    except Exception as exc:
        logger.error("Failed to send notification to %d: %s", recipient, exc)
        return False
    return True


async def broadcast(
    notifier: NotificationPort,
    recipients: Iterable[int],
    text: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> int:
    """Send the same text to every recipient in turn. Returns the success count."""
    sent = 0
    for recipient in recipients:
        if await deliver(notifier, recipient, text, timeout):
            sent += 1
    return sent


def format_file_notification(file_name: str, subject: str) -> str:
    return f"📁 تم إضافة ملف جديد!\n\n📚 المادة: {subject}\n📄 اسم الملف: {file_name}"


async def notify_new_file(
    notifier: NotificationPort,
    directory: IdentityDirectory,
    file_name: str,
    subject: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> int:
    """Tell every known user that a file was added to the library."""
    recipients = [user.platform_id for user in directory.list_users()]
    sent = await broadcast(
        notifier, recipients, format_file_notification(file_name, subject), timeout,
    )
    logger.info("File notification for '%s' sent to %d/%d users", file_name, sent, len(recipients))
    return sent
