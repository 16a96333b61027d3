"""Storage layer for persisting users and tasks through SQLModel."""

import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .errors import DuplicateEmailError, UserNotFoundError
from .models import Task, TaskPriority, TaskStatus, User

logger = logging.getLogger(__name__)


class UserDirectory:
    """Reads and writes rows of the ``users`` table.

    Emails are looked up and stored lowercase.

    Attributes:
        session: Open database session
    """

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email.lower())
        return self.session.exec(statement).first()

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def create(self, email: str, password_hash: str, username: str, now: datetime) -> User:
        """Insert a new user.

        Args:
            email: Email address (lowercased before storing)
            password_hash: Already-hashed password
            username: Display name
            now: Creation timestamp

        Returns:
            The persisted User

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        email = email.lower()
        if self.exists_by_email(email):
            raise DuplicateEmailError(email)

        user = User(
            email=email,
            password_hash=password_hash,
            username=username,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # lost a race against another insert of the same email
            self.session.rollback()
            logger.warning(f"Concurrent registration rejected for {email}")
            raise DuplicateEmailError(email)
        self.session.refresh(user)
        return user

    def _require(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def update_username(self, user_id: int, username: str, now: datetime) -> User:
        user = self._require(user_id)
        user.username = username
        user.updated_at = now
        return self._save(user)

    def update_password_hash(self, user_id: int, password_hash: str, now: datetime) -> User:
        user = self._require(user_id)
        user.password_hash = password_hash
        user.updated_at = now
        return self._save(user)

    def delete(self, user_id: int) -> None:
        """Delete a user together with all of their tasks.

        Raises:
            UserNotFoundError: If no such user exists
        """
        user = self._require(user_id)
        self.session.delete(user)
        self.session.commit()

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(User)).one()

    def _save(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user


class TaskStore:
    """Reads and writes rows of the ``tasks`` table.

    Every query is scoped to one owner; list results come back newest first.

    Attributes:
        session: Open database session
    """

    def __init__(self, session: Session):
        self.session = session

    def _owned(self, user_id: int):
        return (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )

    @staticmethod
    def _keyword_clause(keyword: str):
        needle = keyword.lower()
        return or_(
            func.lower(Task.title).contains(needle, autoescape=True),
            func.lower(Task.description).contains(needle, autoescape=True),
        )

    def get(self, task_id: int) -> Optional[Task]:
        return self.session.get(Task, task_id)

    def add(self, task: Task) -> Task:
        """Insert a new task and return it with its generated id."""
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def save(self, task: Task) -> Task:
        """Persist changes made to an already-loaded task."""
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.session.delete(task)
        self.session.commit()

    def list_by_user(self, user_id: int) -> List[Task]:
        return list(self.session.exec(self._owned(user_id)).all())

    def list_by_status(self, user_id: int, status: TaskStatus) -> List[Task]:
        statement = self._owned(user_id).where(Task.status == status)
        return list(self.session.exec(statement).all())

    def list_by_priority(self, user_id: int, priority: TaskPriority) -> List[Task]:
        statement = self._owned(user_id).where(Task.priority == priority)
        return list(self.session.exec(statement).all())

    def search(self, user_id: int, keyword: str) -> List[Task]:
        """Search owned tasks by keyword in title or description.

        Args:
            user_id: Owner
            keyword: Substring to look for (case-insensitive, wildcards literal)

        Returns:
            Matching tasks
        """
        statement = self._owned(user_id).where(self._keyword_clause(keyword))
        return list(self.session.exec(statement).all())

    def due_before(self, user_id: int, day: date) -> List[Task]:
        statement = self._owned(user_id).where(Task.due_date < day)
        return list(self.session.exec(statement).all())

    def due_after(self, user_id: int, day: date) -> List[Task]:
        statement = self._owned(user_id).where(Task.due_date > day)
        return list(self.session.exec(statement).all())

    def filter(
        self,
        user_id: int,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        keyword: Optional[str] = None,
    ) -> List[Task]:
        """Filter owned tasks by any combination of status, priority and keyword.

        A criterion left as None (or a blank keyword) does not constrain the
        result; the rest are ANDed together.
        """
        statement = self._owned(user_id)
        if status is not None:
            statement = statement.where(Task.status == status)
        if priority is not None:
            statement = statement.where(Task.priority == priority)
        if keyword is not None and keyword.strip():
            statement = statement.where(self._keyword_clause(keyword))
        return list(self.session.exec(statement).all())

    def count_by_user(self, user_id: int) -> int:
        statement = select(func.count()).select_from(Task).where(Task.user_id == user_id)
        return self.session.exec(statement).one()

    def count_by_status(self, user_id: int, status: TaskStatus) -> int:
        statement = (
            select(func.count())
            .select_from(Task)
            .where(Task.user_id == user_id, Task.status == status)
        )
        return self.session.exec(statement).one()
