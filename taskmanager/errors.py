"""Domain errors raised by the service and store layers.

The API layer translates each of these into an HTTP status code; see
``taskmanager.main``.
"""

from dataclasses import dataclass
from typing import List


class TaskManagerError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: str = "ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(TaskManagerError):
    """Raised when request input fails validation.

    Carries every failing field so the caller sees all problems at once.
    """

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__(
            message=", ".join(str(e) for e in self.errors),
            code="VALIDATION_ERROR",
        )


class DuplicateEmailError(TaskManagerError):
    """Raised when an email address is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            message="This email address is already in use",
            code="DUPLICATE_EMAIL",
        )


class InvalidCredentialsError(TaskManagerError):
    """Raised on a failed login.

    The message is the same whether the email or the password was wrong.
    """

    def __init__(self) -> None:
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


class NotFoundError(TaskManagerError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity_type: str, entity_id) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            message=f"{entity_type} not found",
            code="NOT_FOUND",
        )


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id) -> None:
        super().__init__("User", user_id)


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: int) -> None:
        super().__init__("Task", task_id)


class ForbiddenError(TaskManagerError):
    """Raised when the caller does not own the resource."""

    def __init__(self, action: str, resource: str = "this task") -> None:
        self.action = action
        super().__init__(
            message=f"You do not have permission to {action} {resource}",
            code="FORBIDDEN",
        )
