"""
Student Portal Core — Social Graph.

Friend requests and friendships between portal users, keyed by UID.

Per ordered pair (requester, target):

    None --send_request--> Pending --accept--> Friends
                           Pending --reject--> None

There is no transition out of Friends. Pending requests are stored on the
target's record; friendship is stored on both records and kept symmetric.
"""

from __future__ import annotations

import logging

from src.core.exceptions import (
    AlreadyFriends,
    RequestAlreadyPending,
    RequestNotFound,
    SelfRequest,
)
from src.core.identity import IdentityDirectory
from src.data.models import FriendSummary, UserRecord

logger = logging.getLogger(__name__)


def _summarize(record: UserRecord) -> FriendSummary:
    return FriendSummary(
        uid=record.uid,
        first_name=record.first_name,
        last_name=record.last_name,
        username=record.username,
    )


class SocialGraph:
    """Friend-request lifecycle on top of the identity directory."""

    def __init__(self, directory: IdentityDirectory) -> None:
        self._directory = directory

    def send_request(self, requester_uid: str, target_uid: str) -> None:
        """Record a pending request from ``requester_uid`` on the target.

        Raises:
            SelfRequest: requester and target are the same user.
            NotFound: either UID is unknown.
            AlreadyFriends: the pair are already friends.
            RequestAlreadyPending: an identical request is awaiting an answer.
        """
        if requester_uid == target_uid:
            raise SelfRequest()

        with self._directory.lock:
            requester = self._directory.require_by_uid(requester_uid)
            target = self._directory.require_by_uid(target_uid)

            if target_uid in requester.friends:
                raise AlreadyFriends()
            if requester_uid in target.pending_requests:
                raise RequestAlreadyPending()

            target.pending_requests.append(requester_uid)

        logger.info("Friend request %s -> %s", requester_uid, target_uid)

    def accept(self, owner_uid: str, requester_uid: str) -> None:
        """Accept a pending request, making both users friends.

        Both records are updated inside one lock scope. A mirrored request
        the owner had sent to the requester is cleared as well.

        Raises:
            NotFound: either UID is unknown.
            RequestNotFound: no pending request from ``requester_uid``.
        """
        with self._directory.lock:
            owner = self._directory.require_by_uid(owner_uid)
            if requester_uid not in owner.pending_requests:
                raise RequestNotFound()
            requester = self._directory.require_by_uid(requester_uid)

            owner.pending_requests.remove(requester_uid)
            if owner_uid in requester.pending_requests:
                requester.pending_requests.remove(owner_uid)
            owner.friends.add(requester_uid)
            requester.friends.add(owner_uid)

        logger.info("Friend request %s -> %s accepted", requester_uid, owner_uid)

    def reject(self, owner_uid: str, requester_uid: str) -> None:
        """Drop a pending request without creating a friendship.

        Raises:
            NotFound: ``owner_uid`` is unknown.
            RequestNotFound: no pending request from ``requester_uid``.
        """
        with self._directory.lock:
            owner = self._directory.require_by_uid(owner_uid)
            if requester_uid not in owner.pending_requests:
                raise RequestNotFound()
            owner.pending_requests.remove(requester_uid)

        logger.info("Friend request %s -> %s rejected", requester_uid, owner_uid)

    def list_pending(self, owner_uid: str) -> list[FriendSummary]:
        """Pending requesters, oldest first. Unknown UIDs are skipped."""
        with self._directory.lock:
            owner = self._directory.require_by_uid(owner_uid)
            return self._resolve_all(owner.pending_requests)

    def list_friends(self, owner_uid: str) -> list[FriendSummary]:
        """Friends ordered by UID. Unknown UIDs are skipped."""
        with self._directory.lock:
            owner = self._directory.require_by_uid(owner_uid)
            return self._resolve_all(sorted(owner.friends))

    def _resolve_all(self, uids: list[str]) -> list[FriendSummary]:
        summaries = []
        for uid in uids:
            record = self._directory.lookup_by_uid(uid)
            if record is not None:
                summaries.append(_summarize(record))
        return summaries
