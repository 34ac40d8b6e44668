"""
Request gate middleware: static API key check and Redis backed rate limiting.

Both receive their configuration through the constructor when the app is
assembled; nothing here reads settings per request.
"""

import hmac
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Iterable

from waybill.app.core import redis_client as redis_client_module
from waybill.app.core.exceptions import AuthenticationError, RateLimitExceededError, app_error_response

logger = logging.getLogger("waybill.middleware")

# Paths that stay reachable without API key and outside the rate limit
DEFAULT_EXEMPT_PATHS = ("/health", "/", "/docs", "/openapi.json", "/redoc")


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """
    Reject requests whose `X-API-Key` header does not match the configured key.

    Usage:
        app.add_middleware(ApiKeyMiddleware, api_key=settings.api_key)
    """

    def __init__(self, app, api_key: str, header_name: str = "X-API-Key",
                 exempt_paths: Iterable[str] = DEFAULT_EXEMPT_PATHS):
        super().__init__(app)
        self.api_key = api_key
        self.header_name = header_name
        self.exempt_paths = set(exempt_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_key = request.headers.get(self.header_name, "")
        if not client_key or not hmac.compare_digest(client_key, self.api_key):
            exc = AuthenticationError("Invalid or missing API key")
            return app_error_response(request, exc)

        return await call_next(request)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window rate limiter keyed by client IP.

    Each window gets its own Redis counter (INCR + EXPIRE). When Redis is
    unreachable the request is let through and the failure is logged.
    """

    def __init__(self, app, requests: int, window_seconds: int,
                 key_prefix: str = "rate_limit",
                 exempt_paths: Iterable[str] = DEFAULT_EXEMPT_PATHS):
        super().__init__(app)
        self.requests = requests
        self.window_seconds = window_seconds
        self.key_prefix = key_prefix
        self.exempt_paths = set(exempt_paths)

    def _window_key(self, client_id: str) -> str:
        window = int(time.time() // self.window_seconds)
        return f"{self.key_prefix}:{client_id}:{window}"

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        key = self._window_key(client_id)

        # Resolved at call time so tests can swap the module level client
        client = redis_client_module.redis_client
        try:
            count = await client.incr(key)
            if count == 1:
                await client.expire(key, self.window_seconds)
        except Exception as e:
            logger.warning("Rate limiter unavailable, allowing request", extra={"error": str(e)})
            return await call_next(request)

        if count > self.requests:
            exc = RateLimitExceededError(retry_after=self.window_seconds)
            return app_error_response(request, exc, headers={"Retry-After": str(self.window_seconds)})

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.requests)
        response.headers["X-RateLimit-Remaining"] = str(max(self.requests - count, 0))
        return response
