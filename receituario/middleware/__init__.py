from receituario.middleware.body_limit import BodySizeLimitMiddleware
from receituario.middleware.rate_limit import RateLimitMiddleware
from receituario.middleware.request_logging import RequestLoggingMiddleware
from receituario.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "BodySizeLimitMiddleware",
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
