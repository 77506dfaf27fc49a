"""Authentication session lifecycle — login, refresh, logout.

Learn: The session manager decides *what* goes on the wire; the API layer
only copies the resulting CookieSpecs onto the HTTP response. Three
transitions:

- login   → verify credentials → access + refresh cookies
- refresh → valid refresh cookie → new access cookie only
- logout  → both cookies overwritten with "" and max-age 0

Refresh tokens are NOT rotated and NOT tracked server-side, so logout only
clears the browser's copies. A stolen refresh token keeps working until it
expires.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from tasktrack.auth.jwt import TokenError, TokenKind, TokenService
from tasktrack.auth.password import verify_password
from tasktrack.db.repositories import UserRepository
from tasktrack.errors import AuthenticationFailed

logger = structlog.get_logger()

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


@dataclass(frozen=True)
class CookieSpec:
    """One token transport artifact (an http-only cookie)."""

    name: str
    value: str
    max_age: int
    path: str = "/"
    http_only: bool = True


class AuthSessionManager:
    """Business logic for the cookie-based token session."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def _cookie(self, kind: TokenKind, token: str) -> CookieSpec:
        name = ACCESS_COOKIE if kind is TokenKind.ACCESS else REFRESH_COOKIE
        max_age = int(self.tokens.lifetime(kind).total_seconds())
        return CookieSpec(name=name, value=token, max_age=max_age)

    async def login(self, email: str, password: str) -> list[CookieSpec]:
        """Check credentials and issue an access + refresh token pair.

        Unknown email and wrong password fail identically.
        """
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", email=email)
            raise AuthenticationFailed("Invalid credentials")

        access = self.tokens.issue(user.email, TokenKind.ACCESS)
        refresh = self.tokens.issue(user.email, TokenKind.REFRESH)
        logger.info("auth.login_succeeded", user_id=user.id)
        return [
            self._cookie(TokenKind.ACCESS, access),
            self._cookie(TokenKind.REFRESH, refresh),
        ]

    def refresh(self, refresh_token: Optional[str]) -> CookieSpec:
        """Mint a new access token from a refresh token.

        The refresh token itself is left untouched (no rotation).
        """
        if not refresh_token or not self.tokens.validate(refresh_token):
            logger.info("auth.refresh_rejected", present=bool(refresh_token))
            raise AuthenticationFailed("Invalid or expired refresh token")

        try:
            subject = self.tokens.extract_subject(refresh_token)
        except TokenError:
            raise AuthenticationFailed("Invalid or expired refresh token")
        access = self.tokens.issue(subject, TokenKind.ACCESS)
        logger.info("auth.token_refreshed")
        return self._cookie(TokenKind.ACCESS, access)

    def logout(self) -> list[CookieSpec]:
        """Expire both cookies client-side. Idempotent, never fails."""
        return [
            CookieSpec(name=ACCESS_COOKIE, value="", max_age=0),
            CookieSpec(name=REFRESH_COOKIE, value="", max_age=0),
        ]
