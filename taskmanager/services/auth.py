"""Registration and login."""

import logging
from datetime import datetime
from typing import Callable, Optional

from passlib.context import CryptContext

from ..crud import UserDirectory
from ..errors import DuplicateEmailError, InvalidCredentialsError
from ..schemas.user import LoginRequest, RegisterRequest, UserResponse

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def make_password_context(rounds: Optional[int] = None) -> CryptContext:
    """Build a bcrypt context, optionally with a non-default cost factor."""
    if rounds is None:
        return pwd_context
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class AuthService:
    """Registers users and checks their credentials.

    Passwords are hashed with bcrypt before they reach the store; views
    returned to callers never contain the password or its hash.
    """

    def __init__(
        self,
        users: UserDirectory,
        password_context: Optional[CryptContext] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.users = users
        self.password_context = password_context or pwd_context
        self.clock = clock

    def hash_password(self, password: str) -> str:
        return self.password_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.password_context.verify(plain_password, hashed_password)

    def register(self, request: RegisterRequest) -> UserResponse:
        """Create a new account.

        Args:
            request: Validated registration payload

        Returns:
            The new user's view

        Raises:
            DuplicateEmailError: If the email (in any casing) is taken
        """
        email = request.email.lower()
        if self.users.exists_by_email(email):
            raise DuplicateEmailError(email)

        user = self.users.create(
            email=email,
            password_hash=self.hash_password(request.password),
            username=request.username,
            now=self.clock(),
        )
        logger.info(f"Registered user {user.id}")
        return UserResponse.from_entity(user)

    def login(self, request: LoginRequest) -> UserResponse:
        """Check an email/password pair.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match. Both cases raise the same error.
        """
        user = self.users.find_by_email(request.email.lower())
        if user is None or not self.verify_password(request.password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()
        return UserResponse.from_entity(user)

    def email_exists(self, email: str) -> bool:
        return self.users.exists_by_email(email.lower())
