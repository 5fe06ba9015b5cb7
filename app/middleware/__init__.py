"""HTTP middleware: request ID / access log and security headers (raw ASGI).

Applied in app.main; the last one added is outermost.
"""

from app.middleware.request_id import RequestIDMiddleware, resolve_request_id
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "resolve_request_id",
]
