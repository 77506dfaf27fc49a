"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
- Access token: short-lived (15 min), proves recent login
- Refresh token: long-lived (7 days), only used to get new access tokens

Both flavors carry the same claims ({sub: email, jti, iat, exp}) and differ only
in lifetime. There is no server-side token store: a token is valid iff its
HS256 signature checks out against the configured secret AND it has not
expired. That also means tokens cannot be revoked before they expire.
"""

import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Optional

import jwt

from tasktrack.config import settings


class TokenError(Exception):
    """Raised when a token cannot be decoded or verified."""


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenService:
    """Issues and validates signed, time-bounded tokens.

    The signing secret is passed in at construction and never leaves the
    instance. Lifetimes for the two token kinds are configured separately.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_lifetime: timedelta = timedelta(minutes=15),
        refresh_lifetime: timedelta = timedelta(days=7),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._lifetimes = {
            TokenKind.ACCESS: access_lifetime,
            TokenKind.REFRESH: refresh_lifetime,
        }

    def __repr__(self) -> str:
        return f"TokenService(algorithm={self._algorithm!r})"

    def lifetime(self, kind: TokenKind) -> timedelta:
        return self._lifetimes[kind]

    def issue(
        self,
        subject: str,
        kind: TokenKind,
        lifetime: Optional[timedelta] = None,
    ) -> str:
        """Create a signed token for `subject`.

        `lifetime` overrides the configured lifetime for `kind`.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "jti": uuid.uuid4().hex,  # unique even within the same second
            "iat": now,
            "exp": now + (lifetime if lifetime is not None else self._lifetimes[kind]),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_access(self, subject: str) -> str:
        return self.issue(subject, TokenKind.ACCESS)

    def issue_refresh(self, subject: str) -> str:
        return self.issue(subject, TokenKind.REFRESH)

    def validate(self, token: Optional[str]) -> bool:
        """True iff the token is well-formed, correctly signed and unexpired.

        Never raises.
        """
        if not token:
            return False
        try:
            self._decode(token)
        except TokenError:
            return False
        return True

    def extract_subject(self, token: str) -> str:
        """Return the token's subject (the user's email).

        Callers must validate() first; raises TokenError on a bad token.
        """
        return self._decode(token)["sub"]

    def _decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired")
        except jwt.PyJWTError as e:
            raise TokenError(f"Invalid token: {e}")


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide TokenService built from settings (FastAPI dependency)."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        access_lifetime=timedelta(seconds=settings.access_token_expire_seconds),
        refresh_lifetime=timedelta(seconds=settings.refresh_token_expire_seconds),
    )
