"""User account management."""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..crud import UserDirectory
from ..errors import ValidationError
from ..schemas.user import (
    UserResponse,
    validate_email_field,
    validate_password_field,
    validate_username_field,
)
from .auth import AuthService

logger = logging.getLogger(__name__)


class UserService:
    """Lookup and maintenance of user accounts.

    Password changes are hashed through the auth service so the plaintext
    never reaches the store.
    """

    def __init__(
        self,
        users: UserDirectory,
        auth: AuthService,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.users = users
        self.auth = auth
        self.clock = clock

    def find_by_id(self, user_id: int) -> Optional[UserResponse]:
        user = self.users.find_by_id(user_id)
        return UserResponse.from_entity(user) if user else None

    def find_by_email(self, email: str) -> Optional[UserResponse]:
        user = self.users.find_by_email(email)
        return UserResponse.from_entity(user) if user else None

    def email_exists(self, email: str) -> bool:
        return self.users.exists_by_email(email)

    def create_user(self, email: str, password: str, username: str) -> UserResponse:
        """Create a user directly, bypassing the registration endpoint.

        Raises:
            ValidationError: If any field is malformed
            DuplicateEmailError: If the email is taken
        """
        errors = []
        validate_email_field(email, errors)
        validate_password_field(password, errors)
        validate_username_field(username, errors)
        if errors:
            raise ValidationError(errors)

        user = self.users.create(
            email=email,
            password_hash=self.auth.hash_password(password),
            username=username,
            now=self.clock(),
        )
        logger.info(f"Created user {user.id}")
        return UserResponse.from_entity(user)

    def update_username(self, user_id: int, username: str) -> UserResponse:
        errors = []
        validate_username_field(username, errors)
        if errors:
            raise ValidationError(errors)
        user = self.users.update_username(user_id, username, self.clock())
        logger.info(f"Updated username of user {user_id}")
        return UserResponse.from_entity(user)

    def update_password(self, user_id: int, new_password: str) -> UserResponse:
        errors = []
        validate_password_field(new_password, errors, field="new_password")
        if errors:
            raise ValidationError(errors)
        user = self.users.update_password_hash(
            user_id, self.auth.hash_password(new_password), self.clock()
        )
        logger.info(f"Changed password of user {user_id}")
        return UserResponse.from_entity(user)

    def delete_user(self, user_id: int) -> None:
        """Delete a user and every task they own."""
        self.users.delete(user_id)
        logger.info(f"Deleted user {user_id} and their tasks")

    def count_users(self) -> int:
        return self.users.count()
