"""Path classification against configured route prefixes."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from auth_gate.routing.config import RoutingConfig


class RouteClass(StrEnum):
    """Whether a path bypasses the engine entirely."""

    PUBLIC = "public"
    NOT_PUBLIC = "not_public"


def match_prefix(path: str, prefixes: Iterable[str]) -> str | None:
    """Return the first prefix ``path`` starts with, or ``None``."""
    for prefix in prefixes:
        if path.startswith(prefix):
            return prefix
    return None


def classify(path: str, config: RoutingConfig) -> RouteClass:
    """Classify ``path`` as public or not.

    Plain case-sensitive prefix match, no wildcard expansion. An empty
    path matches nothing unless an empty prefix is configured.
    """
    if match_prefix(path, config.public_route_prefixes) is not None:
        return RouteClass.PUBLIC
    return RouteClass.NOT_PUBLIC


def is_protected(path: str, config: RoutingConfig) -> bool:
    """Check ``path`` against the protected prefixes.

    Informational only; :func:`auth_gate.routing.decision.decide` does not
    consult it.
    """
    return match_prefix(path, config.protected_route_prefixes) is not None


def is_matched(path: str, skip_prefixes: Iterable[str]) -> bool:
    """True when the middleware should evaluate ``path`` at all."""
    return match_prefix(path, skip_prefixes) is None
