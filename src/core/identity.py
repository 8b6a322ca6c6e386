"""
Student Portal Core — Identity Directory.

Maps verified Telegram identities to the portal's own user records. A record
is created on the first verified sighting of a platform id and receives an
opaque UID that never changes afterwards.
"""

from __future__ import annotations

import logging
import secrets
import threading

from src.core.exceptions import NotFound
from src.core.privileges import AdminSet, is_main_admin_handle
from src.data.models import PlatformIdentity, UserRecord
from src.ports.user_store import UserStore

logger = logging.getLogger(__name__)

_UID_BYTES = 8


def generate_uid() -> str:
    """Return a fresh UID: 16 uppercase hex characters from a CSPRNG."""
    return secrets.token_hex(_UID_BYTES).upper()


class IdentityDirectory:
    """Create-or-fetch access to user records.

    ``lock`` is shared with the social graph and the study-session store so
    that every mutation of a record, or of a pair of records, is serialized.
    """

    def __init__(
        self,
        store: UserStore,
        admins: AdminSet,
        main_admin_username: str | None = None,
    ) -> None:
        self._store = store
        self._admins = admins
        self._main_admin_username = main_admin_username
        self.lock = threading.RLock()

    def resolve(self, identity: PlatformIdentity) -> UserRecord:
        """Return the record for ``identity``, creating it on first sight.

        Existing records are returned unchanged.
        """
        with self.lock:
            record = self._store.get(identity.id)
            if record is not None:
                return record

            record = UserRecord(
                platform_id=identity.id,
                uid=generate_uid(),
                first_name=identity.first_name,
                last_name=identity.last_name,
                username=identity.username,
                language_code=identity.language_code,
                is_admin=identity.id in self._admins,
            )

            # One-time bootstrap, never re-evaluated for existing records
            if is_main_admin_handle(identity.username, self._main_admin_username):
                record.is_admin = True
                record.is_main_admin = True
                self._admins.add(identity.id)
                logger.info("Main admin %d admitted on first sighting", identity.id)

            self._store.put(record)

        logger.info("Registered user %d as %s", identity.id, record.uid)
        return record

    def lookup(self, platform_id: int) -> UserRecord | None:
        return self._store.get(platform_id)

    def lookup_by_uid(self, uid: str) -> UserRecord | None:
        return self._store.get_by_uid(uid)

    def require_by_uid(self, uid: str) -> UserRecord:
        record = self._store.get_by_uid(uid)
        if record is None:
            raise NotFound("unknown_uid")
        return record

    def list_users(self) -> list[UserRecord]:
        with self.lock:
            return self._store.scan()
