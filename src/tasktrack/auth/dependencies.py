"""FastAPI auth dependencies — per-request identity resolution.

Learn: These are used as Depends() in route handlers. Resolution runs
once per request and never fails on its own:

1. access_token cookie (browsers), falling back to an
   "Authorization: Bearer <jwt>" header (scripts, curl)
2. no token / invalid token / unknown subject → anonymous context
3. otherwise → authenticated context for that user

Denial happens later, in the ownership guard or in require_user.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.context import AuthContext
from tasktrack.auth.jwt import TokenError, TokenService, get_token_service
from tasktrack.auth.session import ACCESS_COOKIE
from tasktrack.db.engine import get_db
from tasktrack.db.models import User
from tasktrack.db.repositories import UserRepository
from tasktrack.errors import AccessDenied, AuthenticationFailed


def _extract_token(request: Request) -> Optional[str]:
    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:]
    return None


async def resolve_auth_context(
    token: Optional[str],
    users: UserRepository,
    tokens: TokenService,
) -> AuthContext:
    """Turn a raw access token into an AuthContext. Never raises."""
    if not token or not tokens.validate(token):
        return AuthContext.anonymous()

    try:
        subject = tokens.extract_subject(token)
    except TokenError:
        # expired between validate() and decode
        return AuthContext.anonymous()

    user = await users.get_by_email(subject)
    if user is None:
        return AuthContext.anonymous()
    return AuthContext.authenticated(user)


async def get_auth_context(
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """Resolve the caller (optional — anonymous if no valid token)."""
    return await resolve_auth_context(
        _extract_token(request), UserRepository(db), tokens
    )


async def require_user(ctx: AuthContext = Depends(get_auth_context)) -> User:
    """Caller for owner-scoped collections (403 when anonymous)."""
    if not ctx.is_authenticated:
        raise AccessDenied("Authentication required")
    return ctx.user


async def require_authenticated(
    ctx: AuthContext = Depends(get_auth_context),
) -> User:
    """Caller for identity endpoints like /auth/me (401 when anonymous)."""
    if not ctx.is_authenticated:
        raise AuthenticationFailed("Authentication required")
    return ctx.user
