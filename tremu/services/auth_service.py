"""
Tremu Backend — Auth Service
==============================

What:  Registration, login, and current-user lookup.
Who:   Called by routes/auth.py and routes/users.py.

Login failures use one message for "no such email" and "wrong password" so
the response never reveals which of the two was wrong.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.exceptions import AuthenticationError, ConflictError, NotFoundError
from tremu.models import User
from tremu.schemas.auth import LoginRequest, LoginResult, RegisterRequest
from tremu.schemas.user import UserSummary
from tremu.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Stateless; every method receives the request's session."""

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> UserSummary:
        """
        Create a user account.

        Raises:
            ConflictError: the email is already registered (→ 409)
        """
        existing = await self._find_by_email(db, payload.email)
        if existing is not None:
            raise ConflictError(
                message="User with this email already exists",
                context={"email": payload.email},
            )

        user = User(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            # Lost a race against another registration for the same email
            raise ConflictError(message="User with this email already exists") from e

        logger.info("User registered: id=%s", user.id)
        return UserSummary.model_validate(user)

    async def login(self, db: AsyncSession, payload: LoginRequest) -> LoginResult:
        """
        Verify credentials and issue an access token.

        Raises:
            AuthenticationError: unknown email or wrong password (→ 401)
        """
        user = await self._find_by_email(db, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError(message=INVALID_CREDENTIALS)

        token = create_access_token(user.id)
        logger.info("User logged in: id=%s", user.id)
        return LoginResult(user=UserSummary.model_validate(user), token=token)

    async def get_user(self, db: AsyncSession, user_id: int) -> UserSummary:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserSummary.model_validate(user)

    async def _find_by_email(self, db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()


# Singleton service instance
auth_service = AuthService()
