"""FastAPI application with lifespan management."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from auth_gate.api.middleware import RequestLoggingMiddleware, RoutingMiddleware
from auth_gate.auth import RequestIdentity, get_identity, require_role
from auth_gate.config import Settings, get_settings
from auth_gate.logging_config import configure_logging

logger = structlog.get_logger()

_identity_dep = Depends(get_identity)
_admin_dep = Depends(require_role("admin"))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with routing middleware configured from ``settings``.

    The routing config is resolved once here; it is read-only for the
    lifetime of the process.
    """
    settings = settings or get_settings()
    routing_config = settings.routing_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        configure_logging(
            environment=str(settings.environment),
            log_level=settings.log_level,
        )
        logger.info(
            "app_started",
            environment=str(settings.environment),
            rbac_enabled=routing_config.rbac_enabled,
            multitenant_enabled=routing_config.multitenant_enabled,
        )
        yield
        logger.info("app_stopped")

    app = FastAPI(
        title="Auth Gate",
        description="Tenant and role aware request routing",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.is_dev,
    )
    app.state.routing_config = routing_config

    app.add_middleware(
        RoutingMiddleware,
        config=routing_config,
        skip_prefixes=settings.middleware_skip_prefixes,
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/whoami")
    async def whoami(
        request: Request,
        identity: RequestIdentity = _identity_dep,
    ) -> dict[str, Any]:
        """Echo the effective path and identity seen behind the middleware."""
        return {
            "path": request.url.path,
            "tenant_id": identity.tenant_id,
            "roles": list(identity.roles),
        }

    @app.get("/mp/{tenant_slug}/whoami")
    async def tenant_whoami(
        tenant_slug: str,
        request: Request,
        identity: RequestIdentity = _identity_dep,
    ) -> dict[str, Any]:
        return {
            "path": request.url.path,
            "tenant_id": tenant_slug,
            "roles": list(identity.roles),
        }

    @app.get("/admin")
    async def admin(
        identity: RequestIdentity = _admin_dep,
    ) -> dict[str, Any]:
        return {"roles": list(identity.roles)}

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all handler for unhandled exceptions."""
        logger.error("unhandled_exception", exc_info=exc, path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app
