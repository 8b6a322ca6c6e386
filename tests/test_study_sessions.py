"""Tests for src.core.study_sessions — per-user schedules and friend access."""

import itertools

import pytest

from src.core.exceptions import Forbidden
from src.data.models import StudySession


def _session(session_id: str = "s1", subject: str = "Calculus", **overrides) -> StudySession:
    fields = dict(
        id=session_id,
        subject=subject,
        topic="Limits",
        date="2026-03-10",
        start_time="14:00",
        end_time="15:30",
    )
    fields.update(overrides)
    return StudySession(**fields)


@pytest.fixture
def sessions(core):
    return core.sessions


class TestReplaceAll:
    def test_replace_and_get(self, sessions, alice):
        assert sessions.replace_all(alice.uid, [_session("a"), _session("b")]) is True
        assert [s.id for s in sessions.get(alice.uid)] == ["a", "b"]

    def test_submission_overwrites_everything(self, sessions, alice):
        sessions.replace_all(alice.uid, [_session("a"), _session("b")])
        sessions.replace_all(alice.uid, [_session("c")])
        assert [s.id for s in sessions.get(alice.uid)] == ["c"]

    def test_empty_submission_clears(self, sessions, alice):
        sessions.replace_all(alice.uid, [_session("a")])
        sessions.replace_all(alice.uid, [])
        assert sessions.get(alice.uid) == []

    def test_unknown_owner_returns_false(self, sessions):
        assert sessions.replace_all("NOBODY", [_session()]) is False

    def test_no_ordering_validation(self, sessions, alice):
        odd = _session(start_time="18:00", end_time="09:00")
        assert sessions.replace_all(alice.uid, [odd, odd]) is True
        assert len(sessions.get(alice.uid)) == 2

    def test_get_returns_copy(self, sessions, alice):
        sessions.replace_all(alice.uid, [_session("a")])
        sessions.get(alice.uid).append(_session("b"))
        assert len(sessions.get(alice.uid)) == 1


class TestGetForFriend:
    def test_friend_can_read(self, core, sessions, alice, bob):
        sessions.replace_all(bob.uid, [_session("b1")])
        core.graph.send_request(alice.uid, bob.uid)
        core.graph.accept(bob.uid, alice.uid)
        assert [s.id for s in sessions.get_for_friend(alice.uid, bob.uid)] == ["b1"]
        assert sessions.get_for_friend(bob.uid, alice.uid) == []

    def test_stranger_forbidden(self, sessions, alice, bob):
        sessions.replace_all(bob.uid, [_session("b1")])
        with pytest.raises(Forbidden):
            sessions.get_for_friend(alice.uid, bob.uid)

    def test_pending_request_not_enough(self, core, sessions, alice, bob):
        core.graph.send_request(alice.uid, bob.uid)
        with pytest.raises(Forbidden):
            sessions.get_for_friend(alice.uid, bob.uid)
        with pytest.raises(Forbidden):
            sessions.get_for_friend(bob.uid, alice.uid)

    def test_admin_tier_grants_nothing(self, core, sessions, bob):
        from conftest import make_identity

        main = core.directory.resolve(make_identity(123, "Mo", "MO2025_PROGRAMER"))
        with pytest.raises(Forbidden):
            sessions.get_for_friend(main.uid, bob.uid)

    def test_unknown_uids_forbidden(self, sessions, alice):
        with pytest.raises(Forbidden):
            sessions.get_for_friend(alice.uid, "NOBODY")
        with pytest.raises(Forbidden):
            sessions.get_for_friend("NOBODY", alice.uid)

    def test_all_non_friend_pairs_forbidden(self, core, sessions, alice, bob, carol):
        core.graph.send_request(alice.uid, bob.uid)
        core.graph.accept(bob.uid, alice.uid)
        friends = {(alice.uid, bob.uid), (bob.uid, alice.uid)}
        for requester, owner in itertools.permutations([alice.uid, bob.uid, carol.uid], 2):
            if (requester, owner) in friends:
                sessions.get_for_friend(requester, owner)
            else:
                with pytest.raises(Forbidden):
                    sessions.get_for_friend(requester, owner)
