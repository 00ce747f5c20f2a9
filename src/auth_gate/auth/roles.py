"""Role enforcement dependency factory."""

from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Depends, HTTPException, Request

from auth_gate.auth.context import RequestIdentity


async def get_identity(request: Request) -> RequestIdentity:
    """Identity from the headers set by ``RoutingMiddleware``."""
    return RequestIdentity.from_headers(request.headers)


_identity_dep = Depends(get_identity)


def require_role(
    *required_roles: str,
) -> Callable[..., Coroutine[Any, Any, RequestIdentity]]:
    """Dependency factory: require at least one of ``required_roles``.

    Usage as parameter dependency (returns RequestIdentity)::

        async def endpoint(
            identity: RequestIdentity = Depends(require_role("admin")),
        ): ...

    Raises:
        HTTPException 403: if the identity has none of the required roles.
    """

    async def _check_role(
        identity: RequestIdentity = _identity_dep,
    ) -> RequestIdentity:
        if not identity.has_any_role(*required_roles):
            raise HTTPException(
                status_code=403,
                detail=f"Requires role: {' or '.join(required_roles)}",
            )
        return identity

    return _check_role
