from fastapi import APIRouter, Depends, Query, Response, status
from typing import List, Optional

from ..dependencies.services import get_task_service
from ..errors import ValidationError
from ..models import TaskPriority, TaskStatus
from ..schemas.task import TaskRequest, TaskResponse, validate_task_request
from ..services.tasks import SORT_CHOICES, TaskService

router = APIRouter()

SORT_PATTERN = "^(" + "|".join(SORT_CHOICES) + ")$"

# Static paths are registered before "/{task_id}" so they are matched first.


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskRequest,
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    errors = validate_task_request(task)
    if errors:
        raise ValidationError(errors)
    return service.create_task(task, user_id)


@router.get("/", response_model=List[TaskResponse])
def get_tasks(
    user_id: int = Query(...),
    sort_by: Optional[str] = Query(None, pattern=SORT_PATTERN),
    service: TaskService = Depends(get_task_service),
):
    return service.list_tasks(user_id, sort_by=sort_by)


@router.get("/status/{task_status}", response_model=List[TaskResponse])
def get_tasks_by_status(
    task_status: TaskStatus,
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    return service.filter_by_status(user_id, task_status)


@router.get("/priority/{priority}", response_model=List[TaskResponse])
def get_tasks_by_priority(
    priority: TaskPriority,
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    return service.filter_by_priority(user_id, priority)


@router.get("/search", response_model=List[TaskResponse])
def search_tasks(
    keyword: str,
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    return service.search_by_keyword(user_id, keyword)


@router.get("/overdue", response_model=List[TaskResponse])
def get_overdue_tasks(user_id: int = Query(...), service: TaskService = Depends(get_task_service)):
    return service.find_overdue(user_id)


@router.get("/future", response_model=List[TaskResponse])
def get_future_tasks(user_id: int = Query(...), service: TaskService = Depends(get_task_service)):
    return service.find_future(user_id)


@router.get("/filter", response_model=List[TaskResponse])
def filter_tasks(
    user_id: int = Query(...),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = None,
    keyword: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
):
    return service.filter_composite(user_id, task_status, priority, keyword)


@router.get("/count", response_model=int)
def count_tasks(user_id: int = Query(...), service: TaskService = Depends(get_task_service)):
    return service.count_all(user_id)


@router.get("/count/status/{task_status}", response_model=int)
def count_tasks_by_status(
    task_status: TaskStatus,
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    return service.count_by_status(user_id, task_status)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, user_id: int = Query(...), service: TaskService = Depends(get_task_service)):
    return service.get_task(task_id, user_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task: TaskRequest,
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    return service.update_task(task_id, task, user_id)


@router.put("/{task_id}/status", response_model=TaskResponse)
def update_task_status(
    task_id: int,
    task_status: TaskStatus = Query(..., alias="status"),
    user_id: int = Query(...),
    service: TaskService = Depends(get_task_service),
):
    return service.update_status(task_id, task_status, user_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, user_id: int = Query(...), service: TaskService = Depends(get_task_service)):
    service.delete_task(task_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
