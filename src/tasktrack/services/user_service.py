"""User service — registration."""

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.password import hash_password
from tasktrack.config import settings
from tasktrack.db.models import User
from tasktrack.db.repositories import UserRepository
from tasktrack.errors import EmailAlreadyRegistered

logger = structlog.get_logger()


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def register(self, name: str, email: str, password: str) -> User:
        """Create a user account. Email must not be registered yet.

        Learn: The explicit lookup gives the friendly CONFLICT; the unique
        index catches the race where two registrations for the same email
        arrive together.
        """
        if await self.users.email_exists(email):
            raise EmailAlreadyRegistered()

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=settings.bcrypt_rounds),
        )
        try:
            await self.users.save(user)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise EmailAlreadyRegistered()

        logger.info("user.registered", user_id=user.id)
        return user
