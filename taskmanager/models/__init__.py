"""Models package."""
from .task import Task, TaskStatus, TaskPriority, PRIORITY_RANK
from .user import User

__all__ = ["Task", "TaskStatus", "TaskPriority", "PRIORITY_RANK", "User"]
