"""Privilege tiers — admin and main admin.

The main admin is the single identity whose Telegram handle matches the
configured MAIN_ADMIN_USERNAME. It is admitted on first sighting and is the
only identity allowed to grant the admin tier to others.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from src.core.identity import IdentityDirectory

logger = logging.getLogger(__name__)


def is_main_admin_handle(username: str | None, configured: str | None) -> bool:
    """True if a Telegram handle names the configured main admin.

    An empty configuration never matches.
    """
    if not username or not configured:
        return False
    return username == configured


class AdminSet:
    """Process-wide set of platform ids holding the admin tier."""

    def __init__(self, initial: Iterable[int] = ()) -> None:
        self._ids: set[int] = set(initial)
        self._lock = threading.Lock()

    def add(self, platform_id: int) -> None:
        with self._lock:
            self._ids.add(platform_id)

    def __contains__(self, platform_id: object) -> bool:
        with self._lock:
            return platform_id in self._ids


class PrivilegeResolver:
    """Answers tier questions and applies main-admin promotions."""

    def __init__(self, directory: IdentityDirectory, admins: AdminSet) -> None:
        self._directory = directory
        self._admins = admins

    def is_admin(self, platform_id: int) -> bool:
        return platform_id in self._admins

    def is_main_admin(self, platform_id: int) -> bool:
        record = self._directory.lookup(platform_id)
        return bool(record and record.is_main_admin)

    def promote(self, by_platform_id: int, target_platform_id: int) -> bool:
        """Grant the admin tier to ``target_platform_id``.

        Only the main admin may promote. The target need not have opened the
        Mini App yet; its record picks up the flag on creation.

        Returns:
            True if the grant was applied, False if the actor lacks the tier.
        """
        if not self.is_main_admin(by_platform_id):
            logger.warning(
                "Promotion of %d refused: %d is not the main admin",
                target_platform_id, by_platform_id,
            )
            return False

        with self._directory.lock:
            self._admins.add(target_platform_id)
            target = self._directory.lookup(target_platform_id)
            if target is not None:
                target.is_admin = True

        logger.info("User %d promoted to admin by %d", target_platform_id, by_platform_id)
        return True
