"""HTTP middleware shared by the web and backend apps."""
from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


def apply_security_headers(response: Response, *, enforce_hsts: bool, connect_src: str = "") -> Response:
    """Set baseline security headers (CSP, anti clickjacking, referrer policy) unless already present."""
    sources = " ".join(filter(None, ["'self'", connect_src]))
    response.headers.setdefault(
        "Content-Security-Policy",
        "default-src 'self'; "
        "img-src 'self' data: https:; "
        "style-src 'self' 'unsafe-inline'; "
        "script-src 'self' 'unsafe-inline'; "
        f"connect-src {sources}",
    )
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
    if enforce_hsts:
        response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, enforce_hsts: bool, connect_src: str = "") -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts
        self._connect_src = connect_src

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        return apply_security_headers(response, enforce_hsts=self._enforce_hsts, connect_src=self._connect_src)
