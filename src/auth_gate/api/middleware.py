"""HTTP middleware: routing decisions and request logging."""

from __future__ import annotations

import time
from collections.abc import Iterable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from auth_gate.routing.classifier import is_matched, is_protected
from auth_gate.routing.config import DEFAULT_SKIP_PREFIXES, RoutingConfig
from auth_gate.routing.decision import (
    MiddlewareDecision,
    PassThroughWithHeaders,
    Redirect,
    Rewrite,
    decide,
)
from auth_gate.routing.request import RequestDescriptor

logger = structlog.get_logger()

REDIRECT_STATUS_CODE = 307


def describe_request(request: Request) -> RequestDescriptor:
    """Snapshot the parts of a Starlette request the engine reads."""
    return RequestDescriptor(
        path=request.url.path,
        host=request.headers.get("host", ""),
        cookies=request.cookies,
    )


def _set_request_headers(request: Request, headers: dict[str, str]) -> None:
    names = {name.lower().encode("latin-1") for name in headers}
    raw = [(k, v) for k, v in request.scope["headers"] if k not in names]
    raw.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in headers.items()
    )
    request.scope["headers"] = raw


def _drop_request_headers(request: Request, names: Iterable[str]) -> None:
    drop = {name.lower().encode("latin-1") for name in names}
    request.scope["headers"] = [
        (k, v) for k, v in request.scope["headers"] if k not in drop
    ]


class RoutingMiddleware(BaseHTTPMiddleware):
    """Apply the routing decision for every matched request.

    Paths starting with one of ``skip_prefixes`` bypass the engine. Identity
    headers sent by the client are always dropped so downstream handlers
    only ever see values this middleware attached.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: RoutingConfig,
        skip_prefixes: Iterable[str] = DEFAULT_SKIP_PREFIXES,
    ) -> None:
        super().__init__(app)
        self.config = config
        self.skip_prefixes = tuple(skip_prefixes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Decide, then forward, rewrite or redirect."""
        _drop_request_headers(
            request, (self.config.roles_header, self.config.tenant_header)
        )
        if not is_matched(request.url.path, self.skip_prefixes):
            return await call_next(request)

        decision = decide(describe_request(request), self.config)
        self._log_decision(request, decision)

        if isinstance(decision, Redirect):
            target = request.url.replace(
                path=decision.location, query="", fragment=""
            )
            return RedirectResponse(str(target), status_code=REDIRECT_STATUS_CODE)

        if isinstance(decision, Rewrite):
            request.scope["path"] = decision.new_path
            request.scope["raw_path"] = decision.new_path.encode("utf-8")
        elif isinstance(decision, PassThroughWithHeaders):
            _set_request_headers(request, dict(decision.headers))

        return await call_next(request)

    def _log_decision(self, request: Request, decision: MiddlewareDecision) -> None:
        logger.debug(
            "routing_decision",
            path=request.url.path,
            decision=type(decision).__name__,
            protected=is_protected(request.url.path, self.config),
        )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests with method, path, status code, and latency."""

    SKIP_PATHS: frozenset[str] = frozenset(
        {"/health", "/docs", "/openapi.json", "/redoc"}
    )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and log timing information."""
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            latency_ms=latency_ms,
        )
        return response
