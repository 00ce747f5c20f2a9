"""Shared pytest fixtures."""

import base64
import json
from collections.abc import Callable
from typing import Any

import pytest


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def encode_token(payload: Any, *, signature: str = "sig") -> str:
    """Build an unsigned ``header.payload.signature`` token."""
    header = _b64url(json.dumps({"alg": "HS256", "typ": "JWT"}).encode())
    body = _b64url(json.dumps(payload).encode())
    return f"{header}.{body}.{signature}"


@pytest.fixture()
def make_token() -> Callable[..., str]:
    """Factory for session tokens with an arbitrary JSON payload."""
    return encode_token
