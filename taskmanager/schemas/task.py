from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel

from ..errors import FieldError
from ..models import Task, TaskPriority, TaskStatus

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000


class TaskRequest(BaseModel):
    """Payload for creating or fully replacing a task."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: TaskStatus
    priority: TaskPriority
    user_id: int
    username: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            status=task.status,
            priority=task.priority,
            user_id=task.user_id,
            username=task.owner.username,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


def validate_task_request(request: TaskRequest, require_enums: bool = False) -> List[FieldError]:
    """Return every field problem in a task payload.

    Args:
        request: The incoming payload
        require_enums: When True, status and priority must be present
            (full update). On create they fall back to TODO / MEDIUM.
    """
    errors: List[FieldError] = []
    if request.title is None or not request.title.strip():
        errors.append(FieldError("title", "Title is required"))
    elif len(request.title) > TITLE_MAX_LENGTH:
        errors.append(FieldError("title", f"Title must be at most {TITLE_MAX_LENGTH} characters"))

    if request.description is not None and len(request.description) > DESCRIPTION_MAX_LENGTH:
        errors.append(FieldError(
            "description", f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        ))

    if require_enums:
        if request.status is None:
            errors.append(FieldError("status", "Status is required"))
        if request.priority is None:
            errors.append(FieldError("priority", "Priority is required"))
    return errors
