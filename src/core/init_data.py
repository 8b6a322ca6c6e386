"""Telegram Mini App init-data verification — pure logic.

The Mini App client forwards ``window.Telegram.WebApp.initData``: a URL-encoded
field set signed by Telegram with a key derived from the bot token. A payload
is trusted only when its ``hash`` matches the recomputed HMAC chain; there is
no partially trusted result.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from urllib.parse import parse_qsl, urlencode

from src.core.exceptions import InvalidAssertion
from src.data.models import PlatformIdentity

_SECRET_KEY_SALT = b"WebAppData"


def _secret_key(bot_token: str) -> bytes:
    return hmac.new(_SECRET_KEY_SALT, bot_token.encode(), hashlib.sha256).digest()


def _data_check_string(fields: list[tuple[str, str]]) -> str:
    """Canonical form: ``key=value`` lines sorted by key, ``hash`` excluded."""
    pairs = sorted((kv for kv in fields if kv[0] != "hash"), key=lambda kv: kv[0])
    return "\n".join(f"{key}={value}" for key, value in pairs)


def compute_hash(fields: list[tuple[str, str]], bot_token: str) -> str:
    """Return the hex HMAC-SHA256 Telegram would attach to these fields."""
    check = _data_check_string(fields)
    return hmac.new(_secret_key(bot_token), check.encode(), hashlib.sha256).hexdigest()


def sign_init_data(fields: dict[str, str], bot_token: str) -> str:
    """Build a signed init-data query string from plain fields.

    The inverse of :func:`verify_init_data`; handy for tooling and tests.
    """
    pairs = [(k, v) for k, v in fields.items() if k != "hash"]
    pairs.append(("hash", compute_hash(pairs, bot_token)))
    return urlencode(pairs)


def verify_init_data(init_data: str, bot_token: str) -> PlatformIdentity:
    """Verify init data against the bot token and return the asserted user.

    Raises:
        InvalidAssertion: missing or wrong hash, missing ``user`` field,
            or a ``user`` blob that is not a JSON object with ``id`` and
            ``first_name``.
    """
    fields = parse_qsl(init_data or "", keep_blank_values=True)
    supplied = next((value for key, value in fields if key == "hash"), None)
    if not supplied:
        raise InvalidAssertion("missing_hash")

    expected = compute_hash(fields, bot_token)
    if not hmac.compare_digest(expected.encode(), supplied.encode()):
        raise InvalidAssertion("bad_signature")

    raw_user = next((value for key, value in fields if key == "user"), None)
    if not raw_user:
        raise InvalidAssertion("missing_user")

    try:
        user = json.loads(raw_user)
    except json.JSONDecodeError:
        raise InvalidAssertion("malformed_user") from None

    if not isinstance(user, dict) or "id" not in user or "first_name" not in user:
        raise InvalidAssertion("malformed_user")

    try:
        platform_id = int(user["id"])
    except (TypeError, ValueError):
        raise InvalidAssertion("malformed_user") from None

    return PlatformIdentity(
        id=platform_id,
        first_name=str(user["first_name"]),
        last_name=user.get("last_name"),
        username=user.get("username"),
        language_code=user.get("language_code"),
        is_bot=bool(user.get("is_bot", False)),
    )
