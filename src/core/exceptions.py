"""Domain-level exceptions for identity, privileges, friendships and schedules."""

from __future__ import annotations


class PortalError(Exception):
    """Base class for portal core errors."""

    reason: str = "unknown"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class InvalidAssertion(PortalError):
    """Init data failed signature verification or carried no usable user."""

    reason = "invalid_assertion"


class NotFound(PortalError):
    reason = "not_found"


class RequestNotFound(NotFound):
    reason = "request_not_found"


class Forbidden(PortalError):
    reason = "forbidden"


class Conflict(PortalError):
    reason = "conflict"


class SelfRequest(Conflict):
    reason = "self_request"


class AlreadyFriends(Conflict):
    reason = "already_friends"


class RequestAlreadyPending(Conflict):
    reason = "already_pending"
