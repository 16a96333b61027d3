"""Per-request wiring of stores into services."""

from fastapi import Depends, Request
from sqlmodel import Session

from ..crud import TaskStore, UserDirectory
from ..db.session import get_session
from ..services.auth import AuthService
from ..services.tasks import TaskService
from ..services.users import UserService


def get_auth_service(request: Request, session: Session = Depends(get_session)) -> AuthService:
    return AuthService(
        UserDirectory(session),
        password_context=request.app.state.password_context,
    )


def get_user_service(
    session: Session = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
) -> UserService:
    return UserService(UserDirectory(session), auth)


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    return TaskService(TaskStore(session), UserDirectory(session))
