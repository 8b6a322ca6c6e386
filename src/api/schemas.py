"""Request and response bodies for the Mini App HTTP API.

The web client speaks camelCase; Telegram's own user fields stay snake_case
as Telegram sends them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.data.models import FriendSummary, StudySession, UserRecord


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class ValidateRequest(CamelModel):
    init_data: str | None = None


class ValidatedUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_bot: bool = False
    uid: str
    is_admin: bool = Field(alias="isAdmin")
    is_main_admin: bool = Field(alias="isMainAdmin")


class ValidateResponse(BaseModel):
    user: ValidatedUser


# ---------------------------------------------------------------------------
# Study sessions
# ---------------------------------------------------------------------------


class StudySessionSchema(CamelModel):
    id: str
    subject: str
    topic: str
    date: str
    start_time: str
    end_time: str
    completed: bool = False
    notes: str | None = None

    def to_model(self) -> StudySession:
        return StudySession(**self.model_dump())

    @classmethod
    def from_model(cls, session: StudySession) -> StudySessionSchema:
        return cls(
            id=session.id,
            subject=session.subject,
            topic=session.topic,
            date=session.date,
            start_time=session.start_time,
            end_time=session.end_time,
            completed=session.completed,
            notes=session.notes,
        )


# ---------------------------------------------------------------------------
# Users and friends
# ---------------------------------------------------------------------------


class FriendSummarySchema(CamelModel):
    uid: str
    first_name: str
    last_name: str | None = None
    username: str | None = None

    @classmethod
    def from_model(cls, summary: FriendSummary) -> FriendSummarySchema:
        return cls(
            uid=summary.uid,
            first_name=summary.first_name,
            last_name=summary.last_name,
            username=summary.username,
        )


class UserProfile(CamelModel):
    telegram_id: int
    uid: str
    first_name: str
    last_name: str | None = None
    username: str | None = None
    is_admin: bool
    is_main_admin: bool
    friends: list[str]
    friend_requests: list[str]
    study_sessions: list[StudySessionSchema]
    created_at: datetime

    @classmethod
    def from_record(cls, record: UserRecord) -> UserProfile:
        return cls(
            telegram_id=record.platform_id,
            uid=record.uid,
            first_name=record.first_name,
            last_name=record.last_name,
            username=record.username,
            is_admin=record.is_admin,
            is_main_admin=record.is_main_admin,
            friends=sorted(record.friends),
            friend_requests=list(record.pending_requests),
            study_sessions=[StudySessionSchema.from_model(s) for s in record.study_sessions],
            created_at=record.created_at,
        )


class FriendRequestBody(CamelModel):
    friend_uid: str


class RequesterBody(CamelModel):
    requester_uid: str


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


class AddAdminBody(CamelModel):
    telegram_id: int


class FileNotificationBody(CamelModel):
    file_name: str
    subject: str
