"""Tests for request identity and role enforcement."""

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.datastructures import Headers

from auth_gate.auth import RequestIdentity, require_role


class TestRequestIdentity:
    def test_from_headers(self) -> None:
        identity = RequestIdentity.from_headers(
            Headers({"x-user-roles": '["admin"]', "x-tenant-id": "acme"})
        )
        assert identity == RequestIdentity(tenant_id="acme", roles=("admin",))

    def test_from_empty_headers(self) -> None:
        identity = RequestIdentity.from_headers(Headers({}))
        assert identity.tenant_id is None
        assert identity.roles == ()

    def test_has_any_role(self) -> None:
        identity = RequestIdentity(tenant_id=None, roles=("editor",))
        assert identity.has_any_role("admin", "editor") is True
        assert identity.has_any_role("admin") is False


class TestRequireRole:
    @pytest.fixture()
    def app(self) -> FastAPI:
        app = FastAPI()

        @app.get("/reports")
        async def _reports(
            identity: RequestIdentity = Depends(require_role("admin", "analyst")),  # noqa: B008
        ) -> dict[str, list[str]]:
            return {"roles": list(identity.roles)}

        return app

    async def _get(self, app: FastAPI, roles: str | None) -> tuple[int, dict]:
        headers = {"x-user-roles": roles} if roles is not None else {}
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/reports", headers=headers)
        return response.status_code, response.json()

    async def test_any_matching_role_allowed(self, app: FastAPI) -> None:
        status, body = await self._get(app, '["analyst"]')
        assert status == 200
        assert body == {"roles": ["analyst"]}

    async def test_missing_role_forbidden(self, app: FastAPI) -> None:
        status, body = await self._get(app, '["viewer"]')
        assert status == 403
        assert body["detail"] == "Requires role: admin or analyst"

    async def test_no_header_forbidden(self, app: FastAPI) -> None:
        status, _ = await self._get(app, None)
        assert status == 403
