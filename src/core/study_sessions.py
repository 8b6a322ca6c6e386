"""Study-session store — each user's planned study blocks.

A submission replaces the owner's whole list; there is no partial update
and no validation of ordering or overlap. Friends may read each other's
schedules; nobody else can, admins included.
"""

from __future__ import annotations

import logging

from src.core.exceptions import Forbidden
from src.core.identity import IdentityDirectory
from src.data.models import StudySession

logger = logging.getLogger(__name__)


class StudySessionStore:
    """Per-user study sessions kept on the user records."""

    def __init__(self, directory: IdentityDirectory) -> None:
        self._directory = directory

    def replace_all(self, owner_uid: str, sessions: list[StudySession]) -> bool:
        """Overwrite the owner's sessions. Returns False if the owner is unknown."""
        with self._directory.lock:
            owner = self._directory.lookup_by_uid(owner_uid)
            if owner is None:
                logger.warning("Session update for unknown uid %s", owner_uid)
                return False
            owner.study_sessions = list(sessions)

        logger.info("Stored %d study sessions for %s", len(sessions), owner_uid)
        return True

    def get(self, owner_uid: str) -> list[StudySession]:
        owner = self._directory.require_by_uid(owner_uid)
        return list(owner.study_sessions)

    def get_for_friend(self, requester_uid: str, friend_uid: str) -> list[StudySession]:
        """Return a friend's sessions.

        Raises:
            Forbidden: ``friend_uid`` is not among the requester's friends,
                or either user is unknown.
        """
        with self._directory.lock:
            requester = self._directory.lookup_by_uid(requester_uid)
            friend = self._directory.lookup_by_uid(friend_uid)
            if requester is None or friend is None or friend_uid not in requester.friends:
                raise Forbidden("not_friends")
            return list(friend.study_sessions)
