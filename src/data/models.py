"""
Student Portal Core — Data Models.

Identity, social graph and study schedule live in process memory only;
nothing here survives a restart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class PlatformIdentity:
    """A Telegram user as asserted by Mini App init data.

    Only ever produced by the init-data verifier, so holding one means the
    signature checked out.
    """

    id: int
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_bot: bool = False


@dataclass
class StudySession:
    """A block of study time planned by a user.

    Stored verbatim as submitted; the reminder scheduler parses the
    date and times and skips sessions it cannot read.
    """

    id: str
    subject: str
    topic: str
    date: str                  # ISO date YYYY-MM-DD
    start_time: str            # HH:MM, same day as date
    end_time: str              # HH:MM, same day as date
    completed: bool = False
    notes: str | None = None


@dataclass
class UserRecord:
    """The portal's own record of a Telegram user."""

    platform_id: int
    uid: str
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_admin: bool = False
    is_main_admin: bool = False
    friends: set[str] = field(default_factory=set)
    pending_requests: list[str] = field(default_factory=list)   # requester UIDs, oldest first
    study_sessions: list[StudySession] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class FriendSummary:
    """Public view of another user, as shown in friend and request lists."""

    uid: str
    first_name: str
    last_name: str | None = None
    username: str | None = None


@dataclass
class Exam:
    """An exam as listed by the document store."""

    subject: str
    date: str                  # ISO date, possibly with a time part
