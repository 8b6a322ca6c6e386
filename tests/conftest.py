"""Shared test fixtures and configuration.

Sets up fake environment variables so src.config doesn't sys.exit(),
and provides a fresh portal core plus helpers for signed init data.
"""

import json
import os

# Patch env vars BEFORE any src imports
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "12345:fake-token-for-tests")
os.environ.setdefault("MAIN_ADMIN_USERNAME", "MO2025_PROGRAMER")
os.environ.setdefault("ADMIN_IDS", "")
os.environ.setdefault("BOT_POLLING", "false")

import pytest

BOT_TOKEN = os.environ["TELEGRAM_BOT_TOKEN"]


def make_init_data(
    user_id: int,
    first_name: str = "Test",
    username: str | None = None,
    token: str = BOT_TOKEN,
    **extra_fields: str,
) -> str:
    """Return init data for a user, signed the way Telegram signs it."""
    from src.core.init_data import sign_init_data

    user = {"id": user_id, "first_name": first_name, "is_bot": False}
    if username is not None:
        user["username"] = username
    fields = {"auth_date": "1760000000", "query_id": "AAE-test", "user": json.dumps(user)}
    fields.update(extra_fields)
    return sign_init_data(fields, token)


def make_identity(user_id: int, first_name: str = "Test", username: str | None = None):
    from src.data.models import PlatformIdentity

    return PlatformIdentity(id=user_id, first_name=first_name, username=username)


@pytest.fixture
def core():
    """Return a PortalCore with an empty in-memory store."""
    from src.core.portal import PortalCore

    return PortalCore(bot_token=BOT_TOKEN, main_admin_username="MO2025_PROGRAMER")


@pytest.fixture
def directory(core):
    return core.directory


@pytest.fixture
def alice(directory):
    return directory.resolve(make_identity(1001, "Alice", "alice"))


@pytest.fixture
def bob(directory):
    return directory.resolve(make_identity(1002, "Bob", "bob"))


@pytest.fixture
def carol(directory):
    return directory.resolve(make_identity(1003, "Carol", "carol"))
