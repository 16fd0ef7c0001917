"""Cookie and request utilities for session authentication."""

from fastapi import Response, Request
from typing import Optional
from src.core.config import settings


def set_session_cookie(response: Response, access_token: str) -> None:
    """
    Set HTTP-only cookie untuk session token.

    Args:
        response: FastAPI Response object
        access_token: JWT access token
    """
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=f"Bearer {access_token}",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=not settings.DEBUG,    # HTTP diizinkan hanya saat development
        samesite="lax",
        path="/"
    )


def clear_session_cookie(response: Response) -> None:
    """Clear session cookie on logout."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
        path="/"
    )


def get_session_token_from_cookie(request: Request) -> Optional[str]:
    """
    Extract token from HTTP-only cookie.

    Returns:
        Token string without Bearer prefix, or None if not found
    """
    cookie_value = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie_value and cookie_value.startswith("Bearer "):
        return cookie_value[7:]
    return None


def get_client_ip(request: Request) -> str:
    """Get client IP address from request, forwarded headers first."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else "unknown"


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("User-Agent")
