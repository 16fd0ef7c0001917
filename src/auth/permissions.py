"""Authorization dan permission checking - single role per user, dengan cookie support."""

from typing import List, Dict
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.jwt import verify_token
from src.core.database import get_db
from src.models.enums import UserRole
from src.utils.cookies import get_session_token_from_cookie
import logging

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """JWT Bearer handler: Authorization header dulu, lalu cookie session."""

    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=auto_error)

    async def __call__(self, request: Request):
        try:
            credentials: HTTPAuthorizationCredentials = await super(
                JWTBearer, self
            ).__call__(request)

            if credentials:
                if not credentials.scheme == "Bearer":
                    raise HTTPException(
                        status_code=status.HTTP_403_FORBIDDEN,
                        detail="Invalid authentication scheme.",
                    )
                return credentials.credentials
        except HTTPException:
            token = get_session_token_from_cookie(request)
            if token:
                return token

            if self.auto_error:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Not authenticated. Token required in Authorization header or cookie.",
                    headers={"WWW-Authenticate": "Bearer"},
                )
            return None


jwt_bearer = JWTBearer()


async def get_current_user(
    token: str = Depends(jwt_bearer),
    session: AsyncSession = Depends(get_db)
) -> Dict:
    """Get the current authenticated user from JWT token."""
    # Import here to avoid circular import
    from src.repositories.user import UserRepository

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = verify_token(token)
        user_id = payload.get("sub")
        if not user_id:
            raise credentials_exception

    except (JWTError, ValueError):
        raise credentials_exception

    user = await UserRepository(session).get_by_id(user_id)
    if not user:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated"
        )

    return {
        "id": user.id,
        "nim": user.nim,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "period_id": user.period_id,
        "division_id": user.division_id,
        "division_name": user.division.name if user.division else None,
        "has_full_report_access": bool(user.division and user.division.has_full_report_access),
        "is_active": user.is_active,
        "has_changed_password": user.has_changed_password(),
    }


def require_roles(required_roles: List[str]):
    """
    Dependency factory to require specific roles.

    Args:
        required_roles: List of role names that are allowed access

    Returns:
        Dependency function that checks user roles
    """
    async def _check_roles(
        current_user: Dict = Depends(get_current_user),
    ) -> Dict:
        user_role = current_user.get("role")

        if user_role not in required_roles:
            logger.info(f"Access denied for user {current_user.get('id')} with role {user_role}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(required_roles)}. Your role: {user_role}",
            )

        return current_user

    return _check_roles


# Common role dependencies
admin_required = require_roles([UserRole.ADMIN.value])
manage_required = require_roles(UserRole.management_roles())


def can_manage(user: Dict) -> bool:
    """ADMIN, BPI, dan KADIV boleh mengelola master data dan melihat hasil."""
    return user.get("role") in UserRole.management_roles()
