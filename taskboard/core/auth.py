"""Authentication core functionality."""
import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ..config import settings
from ..models.user import User
from ..schemas.auth import TokenResponse
from .exceptions import (
    DuplicateAccountError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenInvalidError,
    ValidationError,
)
from .logging import SecurityLogger

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
PASSWORD_MAX_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Authentication service."""

    def __init__(self):
        self.secret_key = settings.auth.secret_key
        self.algorithm = settings.auth.algorithm
        self.token_expire_days = settings.auth.token_expire_days
        self.bcrypt_rounds = settings.auth.bcrypt_rounds

    def hash_password(self, password: str) -> str:
        """Hash password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash."""
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )

    def create_access_token(
        self,
        user_id: uuid.UUID,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a signed JWT carrying the user id."""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(days=self.token_expire_days))
        to_encode = {"sub": str(user_id), "iat": now, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> uuid.UUID:
        """Verify a JWT and return the user id it was issued for.

        Works from the token alone; no session state is consulted.
        """
        try:
            payload = jwt.decode(
                token, self.secret_key, algorithms=[self.algorithm]
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except JWTError as e:
            raise TokenInvalidError() from e

        try:
            return uuid.UUID(payload.get("sub"))
        except (TypeError, ValueError) as e:
            raise TokenInvalidError() from e

    async def get_user_by_email(
        self,
        db: AsyncSession,
        email: str
    ) -> Optional[User]:
        """Get user by normalized email."""
        stmt = select(User).where(User.email == normalize_email(email))
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_by_id(
        self,
        db: AsyncSession,
        user_id: uuid.UUID
    ) -> Optional[User]:
        """Get user by ID."""
        return await db.get(User, user_id)

    def create_token_response(self, user: User, msg: str) -> TokenResponse:
        return TokenResponse(token=self.create_access_token(user.id), msg=msg)

    async def register(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str]
    ) -> TokenResponse:
        """Create an account and issue its first token."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        email = normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please provide a valid email address")

        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
            )
        if len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
            raise ValidationError(
                f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes"
            )

        if await self.get_user_by_email(db, email):
            SecurityLogger.log_registration(email, success=False, failure_reason="duplicate")
            raise DuplicateAccountError()

        hashed_password = await run_in_threadpool(self.hash_password, password)
        user = User(email=email, hashed_password=hashed_password)
        db.add(user)

        # The unique index catches a concurrent registration that passed the check above
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            SecurityLogger.log_registration(email, success=False, failure_reason="duplicate")
            raise DuplicateAccountError() from e

        await db.refresh(user)
        SecurityLogger.log_registration(email, success=True)

        return self.create_token_response(user, "Registration successful")

    async def login(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str]
    ) -> TokenResponse:
        """Check credentials and issue a fresh token.

        Every failure raises the same InvalidCredentialsError so callers cannot
        tell an unknown email from a wrong password.
        """
        if not email or not password:
            SecurityLogger.log_login_attempt(email, success=False, failure_reason="missing_fields")
            raise InvalidCredentialsError()

        user = await self.get_user_by_email(db, email)
        if user is None:
            SecurityLogger.log_login_attempt(email, success=False, failure_reason="unknown_email")
            raise InvalidCredentialsError()

        if len(password.encode('utf-8')) > PASSWORD_MAX_BYTES or not await run_in_threadpool(
            self.verify_password, password, user.hashed_password
        ):
            SecurityLogger.log_login_attempt(user.email, success=False, failure_reason="bad_password")
            raise InvalidCredentialsError()

        # Update last login
        user.last_login = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(user)

        SecurityLogger.log_login_attempt(user.email, success=True)
        return self.create_token_response(user, "Login successful")


# Global auth service instance
auth_service = AuthService()
