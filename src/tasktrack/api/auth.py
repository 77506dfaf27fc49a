"""Auth API — registration, login, refresh, logout.

Learn: Routes for the cookie-based session:
- POST /users/register → create a new user account
- POST /auth/login → email/password → access_token + refresh_token cookies
- POST /auth/refresh → refresh_token cookie → new access_token cookie
- POST /auth/logout → both cookies expired (max-age 0)
- GET /auth/me → current user info

Tokens never appear in response bodies, only in http-only cookies, so
page scripts can't read them.
"""

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import require_authenticated
from tasktrack.auth.jwt import TokenService, get_token_service
from tasktrack.auth.session import REFRESH_COOKIE, AuthSessionManager, CookieSpec
from tasktrack.config import settings
from tasktrack.db.engine import get_db
from tasktrack.db.models import User
from tasktrack.db.repositories import UserRepository
from tasktrack.schemas.common import MessageResponse
from tasktrack.schemas.user import LoginRequest, RegisterRequest, UserRead
from tasktrack.services.user_service import UserService

router = APIRouter()


def _session_manager(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthSessionManager:
    return AuthSessionManager(UserRepository(db), tokens)


def _set_cookies(response: Response, cookies: list[CookieSpec]) -> None:
    for cookie in cookies:
        response.set_cookie(
            key=cookie.name,
            value=cookie.value,
            max_age=cookie.max_age,
            path=cookie.path,
            httponly=cookie.http_only,
            secure=settings.cookie_secure,
            samesite=settings.cookie_samesite,
        )


# ─── Register ────────────────────────────────────────────


@router.post("/users/register", response_model=MessageResponse, status_code=201)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a new user account."""
    await UserService(db).register(
        name=body.name, email=body.email, password=body.password
    )
    return MessageResponse(message="User registered successfully")


# ─── Login ───────────────────────────────────────────────


@router.post("/auth/login", response_model=MessageResponse)
async def login(
    body: LoginRequest,
    response: Response,
    manager: AuthSessionManager = Depends(_session_manager),
):
    """Login with email and password → token cookies."""
    cookies = await manager.login(body.email, body.password)
    _set_cookies(response, cookies)
    return MessageResponse(message="Login successful")


# ─── Refresh ────────────────────────────────────────────


@router.post("/auth/refresh", response_model=MessageResponse)
async def refresh(
    response: Response,
    refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    manager: AuthSessionManager = Depends(_session_manager),
):
    """Exchange the refresh cookie for a new access cookie."""
    _set_cookies(response, [manager.refresh(refresh_token)])
    return MessageResponse(message="Token refreshed")


# ─── Logout ─────────────────────────────────────────────


@router.post("/auth/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    manager: AuthSessionManager = Depends(_session_manager),
):
    """Expire both token cookies. Works with or without a session."""
    _set_cookies(response, manager.logout())
    return MessageResponse(message="Logout successful")


# ─── Current user ───────────────────────────────────────


@router.get("/auth/me", response_model=UserRead)
async def get_me(user: User = Depends(require_authenticated)):
    """Get the current authenticated user's info."""
    return user
