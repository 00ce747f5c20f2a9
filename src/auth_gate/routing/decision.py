"""Per-request routing decision.

Evaluation order, first decisive branch wins:

1. Public path                          -> ``PassThrough``
2. Multitenant and tenant in host       -> ``Rewrite`` to ``/mp/<tenant><path>``
3. RBAC and roles unreadable            -> ``Redirect`` to ``/login``
   RBAC and roles readable              -> ``PassThroughWithHeaders``
4. Otherwise                            -> ``PassThrough``

A tenant rewrite is terminal: the RBAC branch does not run in the same
pass. The rewritten request is expected to re-enter the middleware on
the new path. Whether tenant-rewritten requests should also be
authorized here is an open question; the terminal rewrite is kept as is.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from auth_gate.routing.classifier import RouteClass, classify
from auth_gate.routing.config import RoutingConfig
from auth_gate.routing.request import RequestDescriptor
from auth_gate.routing.roles import RoleSet, extract_roles
from auth_gate.routing.tenant import resolve_tenant


@dataclass(frozen=True)
class PassThrough:
    """Forward the request untouched."""


@dataclass(frozen=True)
class Rewrite:
    """Serve ``new_path`` without changing the client-visible URL."""

    new_path: str


@dataclass(frozen=True)
class Redirect:
    """Answer with a redirect to ``location``."""

    location: str


@dataclass(frozen=True)
class PassThroughWithHeaders:
    """Forward the request with extra request headers attached."""

    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PassThroughWithHeaders):
            return NotImplemented
        return dict(self.headers) == dict(other.headers)

    def __hash__(self) -> int:
        return hash(frozenset(self.headers.items()))


MiddlewareDecision = PassThrough | Rewrite | Redirect | PassThroughWithHeaders


def serialize_roles(roles: RoleSet) -> str:
    """Roles header value: a JSON array, e.g. ``["admin"]``."""
    return json.dumps(list(roles), separators=(",", ":"))


def identity_headers(
    config: RoutingConfig,
    roles: RoleSet,
    tenant_id: str | None = None,
) -> dict[str, str]:
    """Build the request headers carrying roles and, if known, the tenant."""
    headers = {config.roles_header: serialize_roles(roles)}
    if config.multitenant_enabled and tenant_id is not None:
        headers[config.tenant_header] = tenant_id
    return headers


def decide(request: RequestDescriptor, config: RoutingConfig) -> MiddlewareDecision:
    """Decide what happens to ``request``.

    Synchronous, total and side-effect free apart from a warning log
    when the session token is unreadable.
    """
    if classify(request.path, config) == RouteClass.PUBLIC:
        return PassThrough()

    tenant_id: str | None = None
    if config.multitenant_enabled:
        tenant_id = resolve_tenant(request.host)
        if tenant_id is not None:
            return Rewrite(
                new_path=f"{config.tenant_path_prefix}/{tenant_id}{request.path}"
            )

    if config.rbac_enabled:
        roles = extract_roles(request.cookies, config.session_cookie_name)
        if roles is None:
            return Redirect(location=config.login_path)
        # tenant_id is always None here while the rewrite above is terminal
        return PassThroughWithHeaders(
            headers=identity_headers(config, roles, tenant_id)
        )

    return PassThrough()
