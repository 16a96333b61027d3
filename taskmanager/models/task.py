from datetime import date, datetime
from typing import TYPE_CHECKING, Optional
from enum import Enum
from sqlalchemy import DateTime
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from .user import User


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @property
    def display_name(self) -> str:
        return _STATUS_LABELS[self]


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def display_name(self) -> str:
        return _PRIORITY_LABELS[self]

    @property
    def rank(self) -> int:
        """Severity rank; higher is more urgent."""
        return PRIORITY_RANK[self]


_STATUS_LABELS = {
    TaskStatus.TODO: "To do",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.DONE: "Done",
}

_PRIORITY_LABELS = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
}

PRIORITY_RANK = {
    TaskPriority.LOW: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.HIGH: 2,
}


class Task(SQLModel, table=True):
    """A single task owned by exactly one user.

    Attributes:
        id: Generated identifier
        title: Task title (required)
        description: Optional detailed description
        due_date: Optional due date (date only)
        status: TODO, IN_PROGRESS or DONE
        priority: LOW, MEDIUM or HIGH
        user_id: Foreign key to the owning user; never changes
        created_at: Timestamp when the task was created
        updated_at: Timestamp of the last mutation
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    due_date: Optional[date] = Field(default=None, index=True)
    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    # timestamps are naive local time
    created_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )

    owner: Optional["User"] = Relationship(back_populates="tasks")
