"""User store port — abstract interface for keeping user records.

The identity directory depends on this protocol, never on a specific backend.
"""

from __future__ import annotations

from typing import Protocol

from src.data.models import UserRecord


class UserStore(Protocol):
    """Abstract keyed storage for user records, indexed by platform id and UID."""

    def get(self, platform_id: int) -> UserRecord | None: ...

    def get_by_uid(self, uid: str) -> UserRecord | None: ...

    def put(self, record: UserRecord) -> None: ...

    def scan(self) -> list[UserRecord]: ...
