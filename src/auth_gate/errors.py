"""Domain-specific exceptions for auth-gate."""

from __future__ import annotations


class TokenDecodeError(Exception):
    """Session token could not be read as a claims record."""


class MalformedTokenError(TokenDecodeError):
    """Token does not have the ``header.payload.signature`` shape."""

    def __init__(self, segments: int) -> None:
        self.segments = segments
        super().__init__(f"Expected 3 token segments, got {segments}")


class TokenPayloadError(TokenDecodeError):
    """Token payload is not base64-encoded JSON object."""


class ProjectConfigError(Exception):
    """Generator config snapshot is missing or invalid."""
