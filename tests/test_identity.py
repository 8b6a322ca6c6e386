"""Tests for src.core.identity and src.core.privileges."""

import re

import pytest

from conftest import make_identity
from src.core.exceptions import NotFound
from src.core.identity import IdentityDirectory, generate_uid
from src.core.privileges import AdminSet, PrivilegeResolver, is_main_admin_handle
from src.adapters.memory_user_store import InMemoryUserStore


class TestGenerateUid:
    def test_fixed_length_uppercase_hex(self):
        uid = generate_uid()
        assert re.fullmatch(r"[0-9A-F]{16}", uid)

    def test_unpredictable(self):
        assert len({generate_uid() for _ in range(200)}) == 200


class TestResolve:
    def test_creates_record_on_first_sight(self, directory):
        record = directory.resolve(make_identity(42, "Omar", "omar"))
        assert record.platform_id == 42
        assert record.first_name == "Omar"
        assert record.friends == set()
        assert record.pending_requests == []
        assert record.study_sessions == []
        assert record.is_admin is False
        assert record.is_main_admin is False

    def test_idempotent(self, directory):
        first = directory.resolve(make_identity(42, "Omar"))
        second = directory.resolve(make_identity(42, "Omar"))
        assert first.uid == second.uid
        assert first is second

    def test_existing_record_unchanged(self, directory):
        first = directory.resolve(make_identity(42, "Omar", "omar"))
        again = directory.resolve(make_identity(42, "Renamed", "other"))
        assert again.first_name == "Omar"
        assert again.username == "omar"
        assert again.uid == first.uid

    def test_indexed_by_uid(self, directory):
        record = directory.resolve(make_identity(42))
        assert directory.lookup_by_uid(record.uid) is record
        assert directory.lookup(42) is record

    def test_lookup_missing(self, directory):
        assert directory.lookup(7) is None
        assert directory.lookup_by_uid("NOPE") is None

    def test_require_by_uid_raises(self, directory):
        with pytest.raises(NotFound):
            directory.require_by_uid("NOPE")

    def test_list_users(self, directory, alice, bob):
        assert {u.uid for u in directory.list_users()} == {alice.uid, bob.uid}

    def test_distinct_users_get_distinct_uids(self, alice, bob, carol):
        assert len({alice.uid, bob.uid, carol.uid}) == 3


class TestMainAdminBootstrap:
    def test_main_admin_handle_promoted(self, core):
        record = core.directory.resolve(make_identity(123, "Mo", "MO2025_PROGRAMER"))
        assert record.is_admin is True
        assert record.is_main_admin is True
        assert core.privileges.is_admin(123) is True
        assert core.privileges.is_main_admin(123) is True

    def test_ordinary_handle_not_promoted(self, core):
        core.directory.resolve(make_identity(999, "Student", "student1"))
        assert core.privileges.is_admin(999) is False
        assert core.privileges.is_main_admin(999) is False

    def test_no_configured_handle_promotes_nobody(self):
        admins = AdminSet()
        directory = IdentityDirectory(InMemoryUserStore(), admins, main_admin_username="")
        record = directory.resolve(make_identity(1, "A", ""))
        assert record.is_main_admin is False
        assert 1 not in admins

    def test_bootstrap_only_on_creation(self, core):
        core.directory.resolve(make_identity(500, "Early", "someone"))
        record = core.directory.resolve(make_identity(500, "Early", "MO2025_PROGRAMER"))
        assert record.is_main_admin is False
        assert core.privileges.is_admin(500) is False

    def test_seeded_admin_flag_set_on_creation(self):
        admins = AdminSet([77])
        directory = IdentityDirectory(InMemoryUserStore(), admins)
        record = directory.resolve(make_identity(77))
        assert record.is_admin is True
        assert record.is_main_admin is False


class TestIsMainAdminHandle:
    def test_exact_match(self):
        assert is_main_admin_handle("MO2025_PROGRAMER", "MO2025_PROGRAMER") is True

    def test_case_sensitive(self):
        assert is_main_admin_handle("mo2025_programer", "MO2025_PROGRAMER") is False

    def test_missing_handle(self):
        assert is_main_admin_handle(None, "MO2025_PROGRAMER") is False

    def test_empty_configuration(self):
        assert is_main_admin_handle("anyone", "") is False
        assert is_main_admin_handle("anyone", None) is False


class TestPromote:
    def test_main_admin_promotes_existing_user(self, core, alice):
        core.directory.resolve(make_identity(123, "Mo", "MO2025_PROGRAMER"))
        assert core.privileges.promote(123, alice.platform_id) is True
        assert alice.is_admin is True
        assert alice.is_main_admin is False
        assert core.privileges.is_admin(alice.platform_id) is True

    def test_main_admin_promotes_unknown_user(self, core):
        core.directory.resolve(make_identity(123, "Mo", "MO2025_PROGRAMER"))
        assert core.privileges.promote(123, 4242) is True
        assert core.privileges.is_admin(4242) is True
        assert core.directory.resolve(make_identity(4242)).is_admin is True

    def test_plain_admin_cannot_promote(self, core, alice, bob):
        core.directory.resolve(make_identity(123, "Mo", "MO2025_PROGRAMER"))
        core.privileges.promote(123, alice.platform_id)
        assert core.privileges.promote(alice.platform_id, bob.platform_id) is False
        assert bob.is_admin is False

    def test_unknown_actor_cannot_promote(self, core, bob):
        assert core.privileges.promote(31337, bob.platform_id) is False
        assert core.privileges.is_admin(bob.platform_id) is False

    def test_main_admin_implies_admin(self, core):
        record = core.directory.resolve(make_identity(123, "Mo", "MO2025_PROGRAMER"))
        assert not record.is_main_admin or record.is_admin


class TestAdminSet:
    def test_membership(self):
        admins = AdminSet([1, 2])
        admins.add(3)
        assert 3 in admins
        assert 1 in admins
        assert 4 not in admins

    def test_resolver_uses_admin_set(self, directory):
        admins = AdminSet([9])
        resolver = PrivilegeResolver(directory, admins)
        assert resolver.is_admin(9) is True
        assert resolver.is_main_admin(9) is False
