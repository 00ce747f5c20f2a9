"""End-to-end tests through the assembled FastAPI app."""

from collections.abc import Callable

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from auth_gate.api.app import create_app
from auth_gate.config import Settings
from auth_gate.routing.config import SESSION_COOKIE_NAME

TokenFactory = Callable[..., str]


def _app(**overrides: object) -> FastAPI:
    return create_app(Settings(_env_file=None, **overrides))  # type: ignore[arg-type]


def _client(app: FastAPI, host: str = "example.com") -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url=f"http://{host}")


class TestApp:
    async def test_health_bypasses_rbac(self) -> None:
        async with _client(_app(rbac_enabled=True)) as client:
            response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_rbac_without_session_redirects(self) -> None:
        async with _client(_app(rbac_enabled=True)) as client:
            response = await client.get("/dashboard")
        assert response.status_code == 307
        assert response.headers["location"].endswith("/login")

    async def test_admin_with_admin_role(self, make_token: TokenFactory) -> None:
        async with _client(_app(rbac_enabled=True)) as client:
            client.cookies.set(SESSION_COOKIE_NAME, make_token({"roles": ["admin"]}))
            response = await client.get("/admin")
        assert response.status_code == 200
        assert response.json() == {"roles": ["admin"]}

    async def test_admin_without_admin_role(self, make_token: TokenFactory) -> None:
        async with _client(_app(rbac_enabled=True)) as client:
            client.cookies.set(SESSION_COOKIE_NAME, make_token({"roles": ["editor"]}))
            response = await client.get("/admin")
        assert response.status_code == 403
        assert response.json()["detail"] == "Requires role: admin"

    async def test_whoami_reports_roles(self, make_token: TokenFactory) -> None:
        async with _client(_app(rbac_enabled=True)) as client:
            client.cookies.set(
                SESSION_COOKIE_NAME, make_token({"roles": ["editor", "viewer"]})
            )
            response = await client.get("/whoami")
        assert response.json() == {
            "path": "/whoami",
            "tenant_id": None,
            "roles": ["editor", "viewer"],
        }

    async def test_tenant_rewrite_reaches_tenant_route(self) -> None:
        app = _app(multitenant_enabled=True)
        async with _client(app, "acme.example.com") as client:
            response = await client.get("/whoami")
        assert response.status_code == 200
        assert response.json() == {
            "path": "/mp/acme/whoami",
            "tenant_id": "acme",
            "roles": [],
        }

    async def test_routing_config_on_state(self) -> None:
        app = _app(rbac_enabled=True, multitenant_enabled=True)
        config = app.state.routing_config
        assert config.rbac_enabled is True
        assert config.multitenant_enabled is True
        assert "/mp" in config.protected_route_prefixes
