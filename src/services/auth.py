"""Authentication service: login via NIM dengan session cookie."""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import Response

from src.auth.jwt import create_access_token, verify_password, get_password_hash
from src.core.config import settings
from src.core.exceptions import AuthenticationError, InvalidInputError, NotFoundError, RateLimitedError
from src.models.user import User
from src.repositories.user import UserRepository
from src.schemas.auth import UserLogin, LoginResponse, UserChangePassword
from src.schemas.common import MessageResponse
from src.schemas.user import UserResponse
from src.services import audit
from src.services.audit import AuditService
from src.utils.cookies import set_session_cookie, clear_session_cookie
from src.utils.rate_limit import rate_limit

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "NIM atau password salah"


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repo: UserRepository, audit_service: AuditService):
        self.user_repo = user_repo
        self.audit_service = audit_service

    def _issue_token(self, user: User, response: Response) -> str:
        access_token = create_access_token(
            data={
                "sub": str(user.id),
                "role": user.role.value,
                "period_id": user.period_id,
            },
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        set_session_cookie(response, access_token)
        return access_token

    async def login(
        self,
        login_data: UserLogin,
        response: Response,
        ip_address: str = "unknown",
        user_agent: Optional[str] = None
    ) -> LoginResponse:
        """Login dengan NIM + password, dibatasi per IP."""
        limit = await rate_limit(f"login:{ip_address}")
        if not limit.ok:
            await self.audit_service.log(
                audit.LOGIN_RATE_LIMITED, False,
                ip_address=ip_address, user_agent=user_agent,
                extra_data={"nim": login_data.nim, "retry_after": limit.retry_after}
            )
            raise RateLimitedError(
                f"Terlalu banyak percobaan login. Coba lagi dalam {limit.retry_after} detik",
                retry_after=limit.retry_after
            )

        user = await self.user_repo.get_by_nim(login_data.nim)
        if not user or not user.is_active or not verify_password(login_data.password, user.hashed_password):
            logger.info(f"Failed login for NIM {login_data.nim} from {ip_address}")
            await self.audit_service.log(
                audit.LOGIN_FAILED, False,
                user_id=user.id if user else None,
                ip_address=ip_address, user_agent=user_agent,
                extra_data={"nim": login_data.nim}
            )
            raise AuthenticationError(INVALID_CREDENTIALS)

        access_token = self._issue_token(user, response)

        await self.audit_service.log(
            audit.LOGIN_SUCCESS, True,
            user_id=user.id, ip_address=ip_address, user_agent=user_agent
        )
        logger.info(f"User {user.nim} logged in")

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user_id=user.id,
            role=user.role,
            period_id=user.period_id,
            suggest_password_change=not user.has_changed_password(),
        )

    async def logout(self, user_id: str, response: Response, ip_address: Optional[str] = None) -> MessageResponse:
        clear_session_cookie(response)
        await self.audit_service.log(audit.LOGOUT, True, user_id=user_id, ip_address=ip_address)
        return MessageResponse(message="Logout berhasil")

    async def get_current_user_info(self, user_id: str) -> UserResponse:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User tidak ditemukan")
        return UserResponse.from_user_model(user)

    async def change_password(
        self,
        user_id: str,
        password_data: UserChangePassword,
        response: Response,
        ip_address: Optional[str] = None
    ) -> MessageResponse:
        """Ganti password, lalu terbitkan ulang session cookie."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User tidak ditemukan")

        if not verify_password(password_data.old_password, user.hashed_password):
            await self.audit_service.log(
                audit.PASSWORD_CHANGED, False, user_id=user_id, ip_address=ip_address,
                extra_data={"reason": "wrong_old_password"}
            )
            raise InvalidInputError("Password lama salah")

        if len(password_data.new_password) < settings.PASSWORD_MIN_LENGTH:
            raise InvalidInputError(f"Password minimal {settings.PASSWORD_MIN_LENGTH} karakter")

        if password_data.old_password == password_data.new_password:
            raise InvalidInputError("Password baru harus berbeda dari password lama")

        await self.user_repo.update_password(user_id, get_password_hash(password_data.new_password))
        self._issue_token(user, response)

        await self.audit_service.log(audit.PASSWORD_CHANGED, True, user_id=user_id, ip_address=ip_address)
        logger.info(f"Password changed for user {user.nim}")
        return MessageResponse(message="Password berhasil diubah")
