"""Per-request input snapshot for the decision engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class RequestDescriptor:
    """Path, ``Host`` header and cookies of one inbound request."""

    path: str
    host: str = ""
    cookies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only private copy
        object.__setattr__(self, "cookies", MappingProxyType(dict(self.cookies)))
