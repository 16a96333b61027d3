"""Shared fixtures: in-memory database, stores and services on a fixed clock."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from taskmanager.config import Settings
from taskmanager.crud import TaskStore, UserDirectory
from taskmanager.database import create_db_and_tables, make_engine
from taskmanager.main import create_app
from taskmanager.schemas.user import RegisterRequest
from taskmanager.services.auth import AuthService, make_password_context
from taskmanager.services.tasks import TaskService
from taskmanager.services.users import UserService


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 15, 9, 0))


@pytest.fixture
def password_context():
    # lowest bcrypt cost keeps the suite fast
    return make_password_context(rounds=4)


@pytest.fixture
def user_directory(session):
    return UserDirectory(session)


@pytest.fixture
def task_store(session):
    return TaskStore(session)


@pytest.fixture
def auth_service(user_directory, password_context, clock):
    return AuthService(user_directory, password_context=password_context, clock=clock)


@pytest.fixture
def user_service(user_directory, auth_service, clock):
    return UserService(user_directory, auth_service, clock=clock)


@pytest.fixture
def task_service(task_store, user_directory, clock):
    return TaskService(task_store, user_directory, clock=clock)


@pytest.fixture
def alice(auth_service):
    return auth_service.register(
        RegisterRequest(email="alice@x.com", password="pw12345678", username="Alice")
    )


@pytest.fixture
def bob(auth_service):
    return auth_service.register(
        RegisterRequest(email="bob@x.com", password="pw12345678", username="Bob")
    )


@pytest.fixture
def client():
    """API client backed by its own in-memory database."""
    settings = Settings(database_url="sqlite://", bcrypt_rounds=4)
    app = create_app(settings=settings)
    with TestClient(app) as client:
        yield client
    app.state.engine.dispose()
