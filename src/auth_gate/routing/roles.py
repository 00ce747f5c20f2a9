"""Role claims read from the session token.

The token is decoded, never verified: the signature segment is ignored
and the payload is trusted as long as it parses. Verification belongs to
whatever issued the cookie; this step only routes on the claims.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from collections.abc import Mapping
from typing import Any

import structlog

from auth_gate.errors import MalformedTokenError, TokenDecodeError, TokenPayloadError

logger = structlog.get_logger()

RoleSet = tuple[str, ...]

TOKEN_SEGMENTS = 3
ROLES_CLAIM = "roles"

_NON_B64_RE = re.compile(r"[^A-Za-z0-9+/\-_]")


def _b64_decode(segment: str) -> bytes:
    """Base64 decode accepting url-safe or standard alphabet.

    Padding is optional and characters outside both alphabets are skipped.
    Unlike Node's ``Buffer``, a remainder of one leftover character is not
    silently dropped: it raises ``binascii.Error``.
    """
    cleaned = _NON_B64_RE.sub("", segment)
    padded = cleaned + "=" * (-len(cleaned) % 4)
    return base64.urlsafe_b64decode(padded)


def decode_token_payload(token: str) -> dict[str, Any]:
    """Decode the claims record of a ``header.payload.signature`` token.

    Raises:
        MalformedTokenError: token does not split into exactly 3 segments.
        TokenPayloadError: payload is not base64 JSON object.
    """
    segments = token.split(".")
    if len(segments) != TOKEN_SEGMENTS:
        raise MalformedTokenError(len(segments))

    try:
        payload = json.loads(_b64_decode(segments[1]).decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError) as exc:
        # ValueError covers UnicodeDecodeError and JSONDecodeError;
        # RecursionError comes from deeply nested JSON
        raise TokenPayloadError(f"{type(exc).__name__}: {exc}") from exc

    if not isinstance(payload, dict):
        raise TokenPayloadError(
            f"Payload is {type(payload).__name__}, expected object"
        )
    return payload


def roles_from_claims(claims: Mapping[str, Any]) -> RoleSet:
    """Read the ``roles`` claim.

    Anything other than a list of strings yields no roles. Duplicates are
    dropped, first occurrence order kept.
    """
    raw = claims.get(ROLES_CLAIM)
    if not isinstance(raw, list) or not all(isinstance(r, str) for r in raw):
        return ()
    return tuple(dict.fromkeys(raw))


def decode_session_roles(token: str) -> RoleSet:
    """Decode ``token`` and return its roles.

    Raises:
        TokenDecodeError: token structure or payload is unreadable.
    """
    return roles_from_claims(decode_token_payload(token))


def extract_roles(cookies: Mapping[str, str], cookie_name: str) -> RoleSet | None:
    """Roles from the session cookie, or ``None`` if they can't be determined.

    ``None`` (no cookie, unreadable token) is distinct from ``()`` (readable
    token without a roles claim).
    """
    token = cookies.get(cookie_name)
    if not token:
        return None

    try:
        return decode_session_roles(token)
    except TokenDecodeError as exc:
        logger.warning(
            "session_token_unreadable",
            error=type(exc).__name__,
        )
        return None


def parse_roles_header(value: str | None) -> RoleSet:
    """Parse the JSON array the middleware put in the roles header."""
    if not value:
        return ()
    try:
        roles = json.loads(value)
    except (ValueError, RecursionError):
        return ()
    if not isinstance(roles, list):
        return ()
    return tuple(r for r in roles if isinstance(r, str))


def has_role(roles_header: str | None, required_role: str) -> bool:
    """Check a roles header value for ``required_role``.

    Usage in a route handler::

        if not has_role(request.headers.get("x-user-roles"), "admin"):
            raise HTTPException(status_code=403)
    """
    return required_role in parse_roles_header(roles_header)
