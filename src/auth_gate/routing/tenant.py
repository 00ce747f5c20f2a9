"""Tenant resolution from the request ``Host`` header.

Examples::

    acme.example.com      -> "acme"
    acme.localhost:3000   -> "acme"
    localhost:3000        -> None
    example.com           -> None  (no subdomain)
    www.example.com       -> None  (www is not a tenant)
    123.example.com       -> None  (numeric labels are infrastructure)

Pure string parsing: no DNS lookup, never raises.
"""

from __future__ import annotations

import re

LOCALHOST = "localhost"
RESERVED_LABELS: frozenset[str] = frozenset({"www"})

_TENANT_RE = re.compile(r"[a-z0-9-]+")
_NUMERIC_RE = re.compile(r"[0-9]+")


def _localhost_candidate(host: str) -> str | None:
    hostname = host.split(":", 1)[0]
    if hostname == LOCALHOST:
        return None
    # "acme.localhost" -> "acme"; anything else is validated whole
    label, dot, rest = hostname.partition(".")
    if dot and rest == LOCALHOST:
        return label
    return hostname


def _domain_candidate(host: str) -> str | None:
    labels = host.split(".")
    if len(labels) < 3:
        return None
    candidate = labels[0]
    if candidate in RESERVED_LABELS or _NUMERIC_RE.fullmatch(candidate):
        return None
    return candidate


def resolve_tenant(host: str) -> str | None:
    """Return the tenant slug encoded in ``host``, or ``None``.

    Args:
        host: Raw ``Host`` header value, port included if present.

    Returns:
        Lowercase ``[a-z0-9-]+`` slug, or ``None`` when the host carries
        no usable tenant label.
    """
    if LOCALHOST in host:
        candidate = _localhost_candidate(host)
    else:
        candidate = _domain_candidate(host)

    if candidate is None or not _TENANT_RE.fullmatch(candidate):
        return None
    return candidate
