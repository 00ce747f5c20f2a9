"""Static routing configuration consumed by the decision engine."""

from __future__ import annotations

from dataclasses import dataclass

SESSION_COOKIE_NAME = "next-auth.session-token"
LOGIN_PATH = "/login"
TENANT_PATH_PREFIX = "/mp"
ROLES_HEADER = "x-user-roles"
TENANT_HEADER = "x-tenant-id"

DEFAULT_PUBLIC_ROUTES: tuple[str, ...] = (
    "/login",
    "/register",
    "/forgot-password",
    "/reset-password",
    "/api/auth",
)

# Paths the HTTP adapter never hands to the engine.
DEFAULT_SKIP_PREFIXES: tuple[str, ...] = (
    "/api",
    "/_next/static",
    "/_next/image",
    "/favicon.ico",
)


def default_protected_routes(*, rbac: bool, multitenant: bool) -> tuple[str, ...]:
    """Protected prefixes for a feature combination."""
    routes = ["/dashboard", "/profile"]
    if rbac:
        routes.append("/admin")
    if multitenant:
        routes.append(TENANT_PATH_PREFIX)
    return tuple(routes)


@dataclass(frozen=True)
class RoutingConfig:
    """Immutable routing configuration, built once per process.

    Prefix lists are checked in order with a plain ``startswith``;
    the first match wins.
    """

    rbac_enabled: bool = False
    multitenant_enabled: bool = False
    public_route_prefixes: tuple[str, ...] = DEFAULT_PUBLIC_ROUTES
    protected_route_prefixes: tuple[str, ...] = ()
    session_cookie_name: str = SESSION_COOKIE_NAME
    login_path: str = LOGIN_PATH
    tenant_path_prefix: str = TENANT_PATH_PREFIX
    roles_header: str = ROLES_HEADER
    tenant_header: str = TENANT_HEADER

    @classmethod
    def for_features(
        cls,
        *,
        rbac: bool,
        multitenant: bool,
        public_route_prefixes: tuple[str, ...] | None = None,
        protected_route_prefixes: tuple[str, ...] | None = None,
        session_cookie_name: str = SESSION_COOKIE_NAME,
    ) -> RoutingConfig:
        """Create a config with the default route lists for the given flags."""
        if protected_route_prefixes is None:
            protected_route_prefixes = default_protected_routes(
                rbac=rbac, multitenant=multitenant
            )
        return cls(
            rbac_enabled=rbac,
            multitenant_enabled=multitenant,
            public_route_prefixes=(
                DEFAULT_PUBLIC_ROUTES
                if public_route_prefixes is None
                else tuple(public_route_prefixes)
            ),
            protected_route_prefixes=tuple(protected_route_prefixes),
            session_cookie_name=session_cookie_name,
        )
