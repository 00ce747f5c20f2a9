"""Identity attached to a request by the routing middleware."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.datastructures import Headers

from auth_gate.routing.config import ROLES_HEADER, TENANT_HEADER
from auth_gate.routing.roles import RoleSet, parse_roles_header


@dataclass(frozen=True)
class RequestIdentity:
    """Tenant and roles read back from the middleware headers.

    Roles are unverified token claims; see :mod:`auth_gate.routing.roles`.
    """

    tenant_id: str | None
    roles: RoleSet

    @classmethod
    def from_headers(
        cls,
        headers: Headers,
        *,
        roles_header: str = ROLES_HEADER,
        tenant_header: str = TENANT_HEADER,
    ) -> RequestIdentity:
        return cls(
            tenant_id=headers.get(tenant_header) or None,
            roles=parse_roles_header(headers.get(roles_header)),
        )

    def has_any_role(self, *roles: str) -> bool:
        return any(r in self.roles for r in roles)
