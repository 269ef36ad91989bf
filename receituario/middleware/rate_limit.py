"""
Rate Limit Middleware

Limits requests per client IP. Over the limit the request is answered with
429 and a Retry-After header without reaching the routes.
"""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse

from receituario.services.rate_limit_service import RateLimiter
from receituario.utils.ip_utils import get_client_ip, normalize_ip

logger = logging.getLogger(__name__)

# Paths never counted against the limit
EXEMPT_PATHS = ("/health",)


class RateLimitMiddleware:
    def __init__(self, app, max_requests: int = 120, window_seconds: int = 60):
        self.app = app
        self.limiter = RateLimiter(max_requests, window_seconds)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or scope.get("path", "") in EXEMPT_PATHS:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        client_ip = normalize_ip(get_client_ip(request))
        allowed, retry_after = self.limiter.is_allowed(f"ip:{client_ip}")

        if not allowed:
            logger.warning("Rate limit exceeded for %s", client_ip)
            response = JSONResponse(
                content={"error": "rate_limited"},
                status_code=429,
                headers={"Retry-After": str(retry_after)},
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
