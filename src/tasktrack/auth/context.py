"""Per-request authorization context."""

from dataclasses import dataclass
from typing import Optional

from tasktrack.db.models import User


@dataclass(frozen=True)
class AuthContext:
    """Who is making the request.

    Learn: Either anonymous (user is None) or authenticated as exactly one
    User. Built once per request by the identity resolver and then passed
    explicitly into every guard and service call — nothing looks it up
    from ambient state.
    """

    user: Optional[User] = None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(user=None)

    @classmethod
    def authenticated(cls, user: User) -> "AuthContext":
        return cls(user=user)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user is not None else None
