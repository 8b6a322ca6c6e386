"""Tests for src.data.models — portal dataclasses."""

from dataclasses import asdict

from src.data.models import PlatformIdentity, StudySession, UserRecord


def test_user_record_defaults():
    record = UserRecord(platform_id=1, uid="ABCDEF0123456789", first_name="Amal")
    assert record.is_admin is False
    assert record.is_main_admin is False
    assert record.friends == set()
    assert record.pending_requests == []
    assert record.study_sessions == []
    assert record.created_at is not None


def test_user_records_do_not_share_collections():
    a = UserRecord(platform_id=1, uid="A", first_name="A")
    b = UserRecord(platform_id=2, uid="B", first_name="B")
    a.friends.add("B")
    a.pending_requests.append("C")
    assert b.friends == set()
    assert b.pending_requests == []


def test_study_session_defaults():
    session = StudySession(
        id="1", subject="Physics", topic="Optics",
        date="2026-03-10", start_time="10:00", end_time="11:00",
    )
    assert session.completed is False
    assert session.notes is None


def test_platform_identity_serializable():
    identity = PlatformIdentity(id=5, first_name="Lina", username="lina")
    d = asdict(identity)
    assert d["id"] == 5
    assert d["is_bot"] is False
