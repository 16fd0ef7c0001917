"""Domain error taxonomy.

Services raise these instead of ``HTTPException`` so the same rules can be
reused outside a request; ``src.middleware.error_handler`` maps each kind to
an HTTP status.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class untuk semua error domain."""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DomainError):
    """Entity tidak ada atau tidak terlihat oleh requester."""

    status_code = 404


class InvalidInputError(DomainError):
    """Payload tidak valid (range nilai, set indikator, dll)."""

    status_code = 400


class StateConflictError(DomainError):
    """Operasi ditolak karena state entity saat ini."""

    status_code = 409


class AuthenticationError(DomainError):
    status_code = 401


class PermissionDeniedError(DomainError):
    status_code = 403


class RateLimitedError(DomainError):
    """Terlalu banyak percobaan dalam window rate limit."""

    status_code = 429

    def __init__(self, message: str, retry_after: int):
        super().__init__(message, {"retry_after": retry_after})
        self.retry_after = retry_after
