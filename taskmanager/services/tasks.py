"""Task business rules: ownership, filtering and lifecycle."""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from ..crud import TaskStore, UserDirectory
from ..errors import ForbiddenError, TaskNotFoundError, UserNotFoundError, ValidationError
from ..models import Task, TaskPriority, TaskStatus
from ..schemas.task import TaskRequest, TaskResponse, validate_task_request

logger = logging.getLogger(__name__)

SORT_CHOICES = ("created", "priority", "due-date", "title")


def sort_tasks(tasks: List[Task], sort_by: str) -> List[Task]:
    """Sort tasks by the given criterion.

    Args:
        tasks: Tasks to sort
        sort_by: One of 'created', 'priority', 'due-date', 'title'

    Returns:
        A new sorted list. 'priority' orders by severity (HIGH, MEDIUM, LOW),
        not by enum name.
    """
    if sort_by == "priority":
        # sorted() is stable, so ties keep newest-first order
        return sorted(tasks, key=lambda t: t.priority.rank, reverse=True)

    elif sort_by == "due-date":
        # Tasks with due dates first, sorted by date, then tasks without due dates
        with_due = [t for t in tasks if t.due_date]
        without_due = [t for t in tasks if not t.due_date]
        return sorted(with_due, key=lambda t: t.due_date) + without_due

    elif sort_by == "title":
        return sorted(tasks, key=lambda t: t.title.lower())

    return list(tasks)


class TaskService:
    """Task CRUD and queries for a single calling user.

    Every operation takes the caller's user id explicitly. Reads and writes
    on an individual task first check that the caller owns it.
    """

    def __init__(
        self,
        tasks: TaskStore,
        users: UserDirectory,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.tasks = tasks
        self.users = users
        self.clock = clock

    def _today(self) -> date:
        return self.clock().date()

    def _owned_task(self, task_id: int, user_id: int, action: str) -> Task:
        task = self.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if task.user_id != user_id:
            logger.warning(f"User {user_id} denied {action} on task {task_id}")
            raise ForbiddenError(action)
        return task

    @staticmethod
    def _views(tasks: List[Task]) -> List[TaskResponse]:
        return [TaskResponse.from_entity(t) for t in tasks]

    def create_task(self, request: TaskRequest, user_id: int) -> TaskResponse:
        """Create a task owned by ``user_id``.

        Status defaults to TODO and priority to MEDIUM when not supplied.

        Raises:
            UserNotFoundError: If the owner does not exist
        """
        if self.users.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        now = self.clock()
        task = Task(
            title=request.title,
            description=request.description,
            due_date=request.due_date,
            status=request.status or TaskStatus.TODO,
            priority=request.priority or TaskPriority.MEDIUM,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        task = self.tasks.add(task)
        logger.info(f"Created task {task.id} for user {user_id}")
        return TaskResponse.from_entity(task)

    def get_task(self, task_id: int, user_id: int) -> TaskResponse:
        return TaskResponse.from_entity(self._owned_task(task_id, user_id, "access"))

    def list_tasks(self, user_id: int, sort_by: Optional[str] = None) -> List[TaskResponse]:
        """All tasks of the user, newest first unless ``sort_by`` is given."""
        tasks = self.tasks.list_by_user(user_id)
        if sort_by:
            tasks = sort_tasks(tasks, sort_by)
        return self._views(tasks)

    def filter_by_status(self, user_id: int, status: TaskStatus) -> List[TaskResponse]:
        return self._views(self.tasks.list_by_status(user_id, status))

    def filter_by_priority(self, user_id: int, priority: TaskPriority) -> List[TaskResponse]:
        return self._views(self.tasks.list_by_priority(user_id, priority))

    def search_by_keyword(self, user_id: int, keyword: str) -> List[TaskResponse]:
        """Tasks whose title or description contains ``keyword``, ignoring case."""
        return self._views(self.tasks.search(user_id, keyword))

    def find_overdue(self, user_id: int) -> List[TaskResponse]:
        return self._views(self.tasks.due_before(user_id, self._today()))

    def find_future(self, user_id: int) -> List[TaskResponse]:
        return self._views(self.tasks.due_after(user_id, self._today()))

    def filter_composite(
        self,
        user_id: int,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        keyword: Optional[str] = None,
    ) -> List[TaskResponse]:
        """Tasks matching every supplied criterion.

        Omitted criteria, and a blank keyword, match everything.
        """
        return self._views(self.tasks.filter(user_id, status, priority, keyword or ""))

    def update_task(self, task_id: int, request: TaskRequest, user_id: int) -> TaskResponse:
        """Replace every editable field of a task.

        The id, owner and creation time are left as they are.

        Raises:
            ValidationError: If the payload is incomplete, including a
                missing status or priority
        """
        errors = validate_task_request(request, require_enums=True)
        if errors:
            raise ValidationError(errors)
        task = self._owned_task(task_id, user_id, "update")
        task.title = request.title
        task.description = request.description
        task.due_date = request.due_date
        task.status = request.status
        task.priority = request.priority
        task.updated_at = self.clock()
        task = self.tasks.save(task)
        logger.info(f"Updated task {task_id}")
        return TaskResponse.from_entity(task)

    def update_status(self, task_id: int, status: TaskStatus, user_id: int) -> TaskResponse:
        task = self._owned_task(task_id, user_id, "update")
        task.status = status
        task.updated_at = self.clock()
        task = self.tasks.save(task)
        logger.info(f"Task {task_id} moved to {status.value}")
        return TaskResponse.from_entity(task)

    def delete_task(self, task_id: int, user_id: int) -> None:
        task = self._owned_task(task_id, user_id, "delete")
        self.tasks.delete(task)
        logger.info(f"Deleted task {task_id}")

    def count_all(self, user_id: int) -> int:
        return self.tasks.count_by_user(user_id)

    def count_by_status(self, user_id: int, status: TaskStatus) -> int:
        return self.tasks.count_by_status(user_id, status)
