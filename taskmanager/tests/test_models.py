"""Unit tests for the Task and User models."""

from datetime import date, datetime
from sqlalchemy import DateTime

from taskmanager.models import Task, TaskPriority, TaskStatus, User


def test_task_creation_minimal():
    """Test creating a task with minimal required fields."""
    task = Task(title="Test Task", user_id=1)

    assert task.id is None
    assert task.title == "Test Task"
    assert task.description is None
    assert task.due_date is None
    assert task.status == TaskStatus.TODO
    assert task.priority == TaskPriority.MEDIUM
    assert isinstance(task.created_at, datetime)
    assert isinstance(task.updated_at, datetime)


def test_task_creation_full():
    """Test creating a task with all fields."""
    now = datetime(2026, 1, 2, 3, 4, 5)
    task = Task(
        id=7,
        title="Test Task",
        description="Test description",
        due_date=date(2026, 1, 10),
        status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.HIGH,
        user_id=3,
        created_at=now,
        updated_at=now,
    )

    assert task.id == 7
    assert task.description == "Test description"
    assert task.due_date == date(2026, 1, 10)
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.priority == TaskPriority.HIGH
    assert task.user_id == 3
    assert task.created_at == now


def test_enums_serialize_by_name():
    """Enum values are the names used on the wire and in the table."""
    assert [s.value for s in TaskStatus] == ["TODO", "IN_PROGRESS", "DONE"]
    assert [p.value for p in TaskPriority] == ["LOW", "MEDIUM", "HIGH"]
    assert TaskStatus("IN_PROGRESS") is TaskStatus.IN_PROGRESS


def test_display_names():
    """Test human readable enum labels."""
    assert TaskStatus.IN_PROGRESS.display_name == "In progress"
    assert TaskPriority.HIGH.display_name == "High"


def test_priority_rank_is_severity_order():
    """Test that rank follows severity."""
    assert TaskPriority.HIGH.rank > TaskPriority.MEDIUM.rank > TaskPriority.LOW.rank


def test_user_model_has_no_plain_password_field():
    """Test that the user table only carries a password hash."""
    user = User(email="a@b.com", password_hash="hash", username="A")

    assert "password" not in User.model_fields
    assert user.password_hash == "hash"
    assert isinstance(user.created_at, datetime)


def test_timestamp_columns_store_naive_datetimes():
    """Test that timestamp columns are plain DateTime without a timezone."""
    for table in (Task.__table__, User.__table__):
        for name in ("created_at", "updated_at"):
            column = table.c[name]
            assert isinstance(column.type, DateTime)
            assert column.type.timezone is False
            assert column.nullable is False
