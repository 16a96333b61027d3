"""Unit tests for the UserDirectory and TaskStore classes."""

from datetime import date, datetime

import pytest

from taskmanager.errors import DuplicateEmailError, UserNotFoundError
from taskmanager.models import Task, TaskPriority, TaskStatus

NOW = datetime(2026, 3, 15, 9, 0)


@pytest.fixture
def owner(user_directory):
    """Create a user to own tasks."""
    return user_directory.create("Owner@Example.com", "hash", "Owner", NOW)


def make_task(task_store, owner, title, **fields):
    task = Task(title=title, user_id=owner.id, created_at=NOW, updated_at=NOW, **fields)
    return task_store.add(task)


def test_create_user_lowercases_email(user_directory):
    """Test that a new user is stored with a lowercase email and timestamps."""
    user = user_directory.create("MiXeD@Example.COM", "hash", "Mixed", NOW)

    assert user.id is not None
    assert user.email == "mixed@example.com"
    assert user.created_at == NOW
    assert user.updated_at == NOW


def test_naive_timestamps_survive_reload(user_directory, session, owner):
    """Test that naive timestamps are written and read back unchanged."""
    session.expire_all()
    reloaded = user_directory.find_by_id(owner.id)

    assert reloaded.created_at == NOW
    assert reloaded.created_at.tzinfo is None


def test_find_by_email_ignores_case(user_directory, owner):
    """Test email lookup and existence checks in any casing."""
    found = user_directory.find_by_email("OWNER@example.com")

    assert found is not None
    assert found.id == owner.id
    assert user_directory.exists_by_email("owner@EXAMPLE.com")
    assert not user_directory.exists_by_email("nobody@example.com")


def test_create_user_rejects_duplicate_email(user_directory, owner):
    """Test that a second user with the same email is refused."""
    with pytest.raises(DuplicateEmailError):
        user_directory.create("owner@example.com", "other", "Copy", NOW)
    assert user_directory.count() == 1


def test_update_username_refreshes_updated_at(user_directory, owner):
    """Test renaming a user."""
    later = datetime(2026, 3, 16, 10, 0)
    user = user_directory.update_username(owner.id, "Renamed", later)

    assert user.username == "Renamed"
    assert user.updated_at == later
    assert user.created_at == NOW


def test_update_password_hash(user_directory, owner):
    """Test replacing the stored password hash."""
    later = datetime(2026, 3, 16, 10, 0)
    user = user_directory.update_password_hash(owner.id, "newhash", later)

    assert user.password_hash == "newhash"
    assert user.updated_at == later


def test_user_updates_on_missing_user(user_directory):
    """Test that changes to an unknown user raise UserNotFoundError."""
    with pytest.raises(UserNotFoundError):
        user_directory.update_username(999, "x", NOW)
    with pytest.raises(UserNotFoundError):
        user_directory.update_password_hash(999, "x", NOW)
    with pytest.raises(UserNotFoundError):
        user_directory.delete(999)


def test_delete_user_cascades_to_tasks(user_directory, task_store, owner):
    """Test that deleting a user removes their tasks too."""
    make_task(task_store, owner, "One")
    make_task(task_store, owner, "Two")
    owner_id = owner.id

    user_directory.delete(owner_id)

    assert user_directory.find_by_id(owner_id) is None
    assert task_store.count_by_user(owner_id) == 0
    assert user_directory.count() == 0


def test_add_and_get_task(task_store, owner):
    """Test adding a task and loading it back with its owner."""
    task = make_task(task_store, owner, "Write report", description="Quarterly")

    loaded = task_store.get(task.id)
    assert loaded is not None
    assert loaded.title == "Write report"
    assert loaded.owner.username == "Owner"
    assert task_store.get(999) is None


def test_list_by_user_newest_first(task_store, owner):
    """Test that ties on created_at fall back to the newest id."""
    first = make_task(task_store, owner, "First")
    second = make_task(task_store, owner, "Second")

    tasks = task_store.list_by_user(owner.id)
    assert [t.id for t in tasks] == [second.id, first.id]


def test_search_matches_title_or_description(task_store, owner):
    """Test keyword search over title and description, ignoring case."""
    make_task(task_store, owner, "Buy MILK")
    make_task(task_store, owner, "Errands", description="pick up milk")
    make_task(task_store, owner, "Gym")

    titles = {t.title for t in task_store.search(owner.id, "Milk")}
    assert titles == {"Buy MILK", "Errands"}


def test_search_folds_non_ascii_case(task_store, owner):
    """Test that accented capitals match a lowercase keyword."""
    make_task(task_store, owner, "ÉCOLE Anmeldung", description="Über alles")
    make_task(task_store, owner, "Ecole du soir")

    assert [t.title for t in task_store.search(owner.id, "école")] == ["ÉCOLE Anmeldung"]
    assert [t.title for t in task_store.filter(owner.id, keyword="über")] == ["ÉCOLE Anmeldung"]


def test_search_treats_wildcards_literally(task_store, owner):
    """Test that % in a keyword is not a LIKE wildcard."""
    make_task(task_store, owner, "100% done")
    make_task(task_store, owner, "1000 lines")

    titles = [t.title for t in task_store.search(owner.id, "0%")]
    assert titles == ["100% done"]


def test_due_before_and_after_skip_undated(task_store, owner):
    """Test due date queries exclude the boundary day and undated tasks."""
    make_task(task_store, owner, "Past", due_date=date(2026, 3, 1))
    make_task(task_store, owner, "Today", due_date=date(2026, 3, 15))
    make_task(task_store, owner, "Later", due_date=date(2026, 4, 1))
    make_task(task_store, owner, "Undated")

    today = date(2026, 3, 15)
    assert [t.title for t in task_store.due_before(owner.id, today)] == ["Past"]
    assert [t.title for t in task_store.due_after(owner.id, today)] == ["Later"]


def test_filter_combines_criteria(task_store, owner):
    """Test that status, priority and keyword are ANDed together."""
    make_task(task_store, owner, "Shopping list", status=TaskStatus.TODO, priority=TaskPriority.HIGH)
    make_task(task_store, owner, "Shopping trip", status=TaskStatus.DONE, priority=TaskPriority.HIGH)
    make_task(task_store, owner, "Laundry", status=TaskStatus.TODO, priority=TaskPriority.HIGH)

    tasks = task_store.filter(owner.id, TaskStatus.TODO, TaskPriority.HIGH, "shopping")
    assert [t.title for t in tasks] == ["Shopping list"]

    assert len(task_store.filter(owner.id)) == 3
    assert len(task_store.filter(owner.id, keyword="   ")) == 3


def test_task_counts(task_store, owner):
    """Test counting tasks per user and per status."""
    make_task(task_store, owner, "A", status=TaskStatus.DONE)
    make_task(task_store, owner, "B")
    make_task(task_store, owner, "C")

    assert task_store.count_by_user(owner.id) == 3
    assert task_store.count_by_status(owner.id, TaskStatus.TODO) == 2
    assert task_store.count_by_status(owner.id, TaskStatus.IN_PROGRESS) == 0


def test_delete_task(task_store, owner):
    """Test deleting a task."""
    task = make_task(task_store, owner, "Temp")
    task_id = task.id

    task_store.delete(task)

    assert task_store.get(task_id) is None
