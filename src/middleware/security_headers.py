"""Security headers middleware untuk JSON API."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from src.core.config import settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)

        # Skip CSP for docs endpoints to avoid blocking Swagger UI
        skip_csp_paths = ["/docs", "/redoc", "/openapi.json"]
        is_docs_path = any(request.url.path.startswith(path) for path in skip_csp_paths)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Force HTTPS in production
        if not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        if not is_docs_path:
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        # Hasil penilaian bersifat pribadi
        if request.url.path.startswith(f"{settings.API_V1_STR}/results"):
            response.headers["Cache-Control"] = "no-store"

        return response


def add_security_headers(app) -> None:
    app.add_middleware(SecurityHeadersMiddleware)
