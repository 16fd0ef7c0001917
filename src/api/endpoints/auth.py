"""Authentication endpoints (login via NIM) dengan session cookie."""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.repositories.user import UserRepository
from src.repositories.audit_log import AuditLogRepository
from src.services.audit import AuditService
from src.services.auth import AuthService
from src.schemas.auth import UserLogin, LoginResponse, UserChangePassword
from src.schemas.common import MessageResponse
from src.schemas.user import UserResponse
from src.auth.permissions import get_current_user
from src.utils.cookies import get_client_ip, get_user_agent

router = APIRouter()


async def get_auth_service(session: AsyncSession = Depends(get_db)) -> AuthService:
    """Get auth service dependency."""
    return AuthService(UserRepository(session), AuditService(AuditLogRepository(session)))


@router.post("/login", response_model=LoginResponse, summary="Login user")
async def login(
    login_data: UserLogin,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login dengan NIM dan password.

    - **nim**: NIM anggota
    - **password**: Password (minimal 6 karakter)

    Token disimpan sebagai HTTP-only cookie dan juga dikembalikan di body.
    Percobaan login dibatasi per IP (default 5 kali per 5 menit).
    """
    return await auth_service.login(
        login_data,
        response,
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request)
    )


@router.post("/logout", response_model=MessageResponse, summary="Logout user")
async def logout(
    request: Request,
    response: Response,
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Hapus session cookie."""
    return await auth_service.logout(current_user["id"], response, ip_address=get_client_ip(request))


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Profil user yang sedang login."""
    return await auth_service.get_current_user_info(current_user["id"])


@router.post("/change-password", response_model=MessageResponse, summary="Change password")
async def change_password(
    password_data: UserChangePassword,
    request: Request,
    response: Response,
    current_user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Ganti password user yang sedang login.

    - **old_password**: Password lama untuk verifikasi
    - **new_password**: Password baru (minimal 6 karakter)
    """
    return await auth_service.change_password(
        current_user["id"], password_data, response, ip_address=get_client_ip(request)
    )
