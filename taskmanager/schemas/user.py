from datetime import datetime
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel

from ..errors import FieldError
from ..models import User

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
USERNAME_MAX_LENGTH = 50


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    created_at: datetime
    updated_at: datetime
    # password and password_hash are never exposed

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_email_field(email: Optional[str], errors: List[FieldError]) -> None:
    if _is_blank(email):
        errors.append(FieldError("email", "Email is required"))
        return
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        errors.append(FieldError("email", "Enter a valid email address"))


def validate_password_field(
    password: Optional[str], errors: List[FieldError], field: str = "password"
) -> None:
    if _is_blank(password):
        errors.append(FieldError(field, "Password is required"))
    elif not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        errors.append(FieldError(
            field,
            f"Password must be between {PASSWORD_MIN_LENGTH} and "
            f"{PASSWORD_MAX_LENGTH} characters",
        ))


def validate_username_field(username: Optional[str], errors: List[FieldError]) -> None:
    if _is_blank(username):
        errors.append(FieldError("username", "Username is required"))
    elif len(username) > USERNAME_MAX_LENGTH:
        errors.append(FieldError(
            "username", f"Username must be at most {USERNAME_MAX_LENGTH} characters"
        ))


def validate_register_request(request: RegisterRequest) -> List[FieldError]:
    """Return every field problem in a registration payload."""
    errors: List[FieldError] = []
    validate_email_field(request.email, errors)
    validate_password_field(request.password, errors)
    validate_username_field(request.username, errors)
    return errors


def validate_login_request(request: LoginRequest) -> List[FieldError]:
    """Return every field problem in a login payload.

    Only presence and email shape are checked; password length rules apply
    at registration.
    """
    errors: List[FieldError] = []
    validate_email_field(request.email, errors)
    if _is_blank(request.password):
        errors.append(FieldError("password", "Password is required"))
    return errors
