# ============================================================================
# HTTP MIDDLEWARE
# ============================================================================
# STATUS: API - Cross-cutting request handling
# PURPOSE: Security headers and request-scoped logging context
# ============================================================================
"""
HTTP Middleware

- SecurityHeadersMiddleware: hardening headers on every response
- RequestContextMiddleware: request id header + logging context

Usage:
    from api.middleware import SecurityHeadersMiddleware, RequestContextMiddleware

    app.add_middleware(SecurityHeadersMiddleware, hsts=True)
    app.add_middleware(RequestContextMiddleware)
"""

import uuid
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from core.logging import ComponentType, get_logger, log_context

logger = get_logger(__name__, ComponentType.API)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-XSS-Protection": "0",
    "Cross-Origin-Opener-Policy": "same-origin",
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"

REQUEST_ID_HEADER = "X-Request-ID"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds security headers; HSTS only when enabled (production)."""

    def __init__(self, app: ASGIApp, hsts: bool = False):
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response: Response = await call_next(request)

        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if self.hsts:
            response.headers.setdefault("Strict-Transport-Security", HSTS_VALUE)

        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Propagates or assigns a request id and binds it to the log context."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        with log_context(request_id=request_id, operation=f"{request.method} {request.url.path}"):
            response: Response = await call_next(request)
            logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


__all__ = [
    "SECURITY_HEADERS",
    "SecurityHeadersMiddleware",
    "RequestContextMiddleware",
]
