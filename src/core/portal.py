"""
Student Portal Core — wiring and the authentication flow.

init data → verify_init_data → IdentityDirectory.resolve → PrivilegeResolver

Everything the HTTP API and the bot need is reachable from one PortalCore.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.adapters.memory_user_store import InMemoryUserStore
from src.core.identity import IdentityDirectory
from src.core.init_data import verify_init_data
from src.core.privileges import AdminSet, PrivilegeResolver
from src.core.social_graph import SocialGraph
from src.core.study_sessions import StudySessionStore

if TYPE_CHECKING:
    from src.config import Settings
    from src.data.models import PlatformIdentity, UserRecord
    from src.ports.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedUser:
    """A verified identity together with its record and privilege tier."""

    identity: PlatformIdentity
    record: UserRecord
    is_admin: bool
    is_main_admin: bool

    @property
    def platform_id(self) -> int:
        return self.record.platform_id

    @property
    def uid(self) -> str:
        return self.record.uid


class PortalCore:
    """Identity, privileges, friendships and study schedules in one place."""

    def __init__(
        self,
        bot_token: str,
        store: UserStore | None = None,
        admin_ids: list[int] | None = None,
        main_admin_username: str | None = None,
    ) -> None:
        self._bot_token = bot_token
        self.admins = AdminSet(admin_ids or [])
        self.directory = IdentityDirectory(
            store or InMemoryUserStore(), self.admins, main_admin_username,
        )
        self.privileges = PrivilegeResolver(self.directory, self.admins)
        self.graph = SocialGraph(self.directory)
        self.sessions = StudySessionStore(self.directory)

    def authenticate(self, init_data: str) -> AuthenticatedUser:
        """Verify init data and return the caller's identity and tier.

        Raises:
            InvalidAssertion: the payload is not a genuine Telegram assertion.
        """
        identity = verify_init_data(init_data, self._bot_token)
        record = self.directory.resolve(identity)
        return AuthenticatedUser(
            identity=identity,
            record=record,
            is_admin=self.privileges.is_admin(identity.id),
            is_main_admin=self.privileges.is_main_admin(identity.id),
        )


def build_core(settings: Settings) -> PortalCore:
    """Create a PortalCore from application settings."""
    core = PortalCore(
        bot_token=settings.TELEGRAM_BOT_TOKEN,
        admin_ids=settings.ADMIN_IDS,
        main_admin_username=settings.MAIN_ADMIN_USERNAME,
    )
    logger.info(
        "Portal core ready (main admin handle: %s, %d seeded admins)",
        settings.MAIN_ADMIN_USERNAME or "<none>", len(settings.ADMIN_IDS),
    )
    return core
