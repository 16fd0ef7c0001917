"""Auth module init."""

from .jwt import verify_password, get_password_hash, create_access_token, verify_token
from .permissions import (
    get_current_user,
    require_roles,
    admin_required,
    manage_required,
    can_manage,
)

__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "verify_token",
    "get_current_user",
    "require_roles",
    "admin_required",
    "manage_required",
    "can_manage",
]
