"""Static credential table and signed session tokens.

Tokens are ``<payload>.<signature>`` where the payload is base64url encoded
JSON (``username``, ``name``, ``iat``, ``exp``) and the signature is an
HMAC-SHA256 of the encoded payload under the server secret.
"""
from __future__ import annotations

import base64
import binascii
import hmac
import json
from datetime import datetime, timezone

from company_dashboard.core import config
from company_dashboard.core.name_normalize import normalize_login
from company_dashboard.domain import SessionUser


def load_users(raw: str | None = None) -> dict[str, tuple[str, str]]:
    """Parse ``user:password`` pairs into ``{username: (password, display_name)}``."""

    users: dict[str, tuple[str, str]] = {}
    for pair in (raw if raw is not None else config.configured_users()).split(","):
        username, _, password = pair.strip().partition(":")
        if not username or not password:
            continue
        users[username.lower()] = (password, username[:1].upper() + username[1:])
    return users


def validate_credentials(username_or_email: str, password: str) -> SessionUser | None:
    """Return the matching user or ``None``; callers must not tell the cases apart."""

    username = normalize_login(username_or_email)
    entry = load_users().get(username)
    expected = entry[0] if entry else ""
    # compare even for unknown users so both failures take the same path
    matched = hmac.compare_digest(expected.encode("utf-8"), password.encode("utf-8"))
    if entry is None or not matched:
        return None
    return SessionUser(username=username, name=entry[1])


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    padding = "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(text + padding)


def _sign(payload: str, secret: bytes) -> str:
    digest = hmac.new(secret, payload.encode("ascii"), digestmod="sha256").digest()
    return _b64encode(digest)


def issue_token(user: SessionUser, *, now: datetime | None = None, secret: bytes | None = None) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "username": user.username,
        "name": user.name,
        "iat": int(issued.timestamp()),
        "exp": int((issued + config.SESSION_TTL).timestamp()),
    }
    payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    return f"{payload}.{_sign(payload, secret or config.session_secret())}"


def verify_token(
    token: str | None, *, now: datetime | None = None, secret: bytes | None = None
) -> SessionUser | None:
    """Pure check of a presented token; ``None`` means there is no session."""

    if not token:
        return None
    payload, dot, signature = token.partition(".")
    if not dot or not payload or not signature:
        return None
    expected = _sign(payload, secret or config.session_secret())
    if not hmac.compare_digest(expected, signature):
        return None
    try:
        claims = json.loads(_b64decode(payload))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    if not isinstance(claims, dict):
        return None

    username = claims.get("username")
    name = claims.get("name")
    expires = claims.get("exp")
    if not isinstance(username, str) or not isinstance(name, str) or not isinstance(expires, int):
        return None
    current = now or datetime.now(timezone.utc)
    if current.timestamp() >= expires:
        return None
    return SessionUser(username=username, name=name)
