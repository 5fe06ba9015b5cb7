"""Security headers for JSON API responses (raw ASGI).

Headers the application already set are left untouched. HSTS is only sent
when enabled (production behind TLS).
"""

from typing import Callable

API_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}
HSTS_VALUE = "max-age=15552000; includeSubDomains"


def SecurityHeadersMiddleware(app: Callable, hsts: bool = False) -> Callable:
    """Append API_SECURITY_HEADERS (and HSTS when hsts=True) to every HTTP response."""
    extra = dict(API_SECURITY_HEADERS)
    if hsts:
        extra["Strict-Transport-Security"] = HSTS_VALUE
    encoded = [(k.lower().encode(), v.encode()) for k, v in extra.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {key.lower() for key, _ in headers}
                headers.extend(h for h in encoded if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
