"""In-memory user store — implements UserStore.

Two dicts indexing the same record objects by platform id and by UID.
Callers serialize writes through the identity directory's lock.
"""

from __future__ import annotations

from src.data.models import UserRecord


class InMemoryUserStore:
    """Process-local implementation of UserStore."""

    def __init__(self) -> None:
        self._by_platform_id: dict[int, UserRecord] = {}
        self._by_uid: dict[str, UserRecord] = {}

    def get(self, platform_id: int) -> UserRecord | None:
        return self._by_platform_id.get(platform_id)

    def get_by_uid(self, uid: str) -> UserRecord | None:
        return self._by_uid.get(uid)

    def put(self, record: UserRecord) -> None:
        self._by_platform_id[record.platform_id] = record
        self._by_uid[record.uid] = record

    def scan(self) -> list[UserRecord]:
        return list(self._by_platform_id.values())
