# tests/test_schema.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tasktrack.errors import ValidationError
from tasktrack.schema import DEFAULT_ASSIGNEE, Task, TaskPriority, TaskStatus

from .conftest import NOW


def test_new_task_starts_todo_without_completion(make_task) -> None:
    task = make_task("TASK-100", "Write docs", priority=TaskPriority.HIGH, assignee="alice")

    assert task.status == TaskStatus.TODO
    assert task.completed_at is None
    assert task.priority == TaskPriority.HIGH
    assert task.assignee == "alice"
    assert task.created_at <= datetime.now()


def test_defaults_for_description_and_assignee() -> None:
    task = Task(id="TASK-1", title="Defaults", description=None, due_date=NOW, assignee=None)

    assert task.description == ""
    assert task.assignee == DEFAULT_ASSIGNEE
    assert task.priority == TaskPriority.MEDIUM


@pytest.mark.parametrize(
    ("task_id", "title"),
    [("", "Title"), ("   ", "Title"), ("TASK-1", ""), ("TASK-1", "  \t")],
)
def test_blank_id_or_title_is_rejected(task_id: str, title: str) -> None:
    with pytest.raises(ValidationError):
        Task(id=task_id, title=title, due_date=NOW)


def test_id_is_immutable(make_task) -> None:
    task = make_task("TASK-1")

    with pytest.raises(ValueError):
        task.id = "TASK-2"
    assert task.id == "TASK-1"


def test_completed_at_is_set_once(make_task) -> None:
    task = make_task()

    task.update_status(TaskStatus.IN_PROGRESS)
    assert task.completed_at is None

    task.update_status(TaskStatus.DONE)
    first = task.completed_at
    assert first is not None

    task.update_status(TaskStatus.DONE)
    assert task.completed_at == first


def test_completed_at_survives_reopening(make_task) -> None:
    task = make_task(status=TaskStatus.DONE)
    stamped = task.completed_at

    task.update_status(TaskStatus.TODO)

    assert task.status == TaskStatus.TODO
    assert task.completed_at == stamped


def test_overdue_only_when_open_and_past_due(make_task) -> None:
    late = make_task(due_in=-2)
    future = make_task(due_in=2)
    late_but_done = make_task(due_in=-30, status=TaskStatus.DONE)

    assert late.is_overdue(NOW)
    assert not future.is_overdue(NOW)
    assert not late_but_done.is_overdue(NOW)


@pytest.mark.parametrize(
    ("due_in", "days", "expected"),
    [
        (0, 7, True),
        (5, 7, True),
        (7, 7, True),
        (7.5, 7, False),
        (-0.1, 7, False),
        (3, 2, False),
    ],
)
def test_is_upcoming_window(make_task, due_in: float, days: int, expected: bool) -> None:
    assert make_task(due_in=due_in).is_upcoming(days, NOW) is expected


def test_done_task_is_never_upcoming(make_task) -> None:
    assert not make_task(due_in=1, status=TaskStatus.DONE).is_upcoming(7, NOW)


def test_str_marks_overdue_tasks(make_task) -> None:
    task = make_task("TASK-9", "Old thing", due_date=datetime.now() - timedelta(days=3))

    text = str(task)

    assert text.startswith("[TASK-9] Old thing | Priority: Medium | Status: To-Do")
    assert text.endswith("[OVERDUE]")


def test_enum_codes_give_explicit_order() -> None:
    assert TaskPriority.LOW < TaskPriority.MEDIUM < TaskPriority.HIGH
    assert TaskStatus.TODO < TaskStatus.IN_PROGRESS < TaskStatus.DONE
    assert [p.value for p in TaskPriority] == [1, 2, 3]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (3, TaskPriority.HIGH),
        ("1", TaskPriority.LOW),
        ("medium", TaskPriority.MEDIUM),
        (" High ", TaskPriority.HIGH),
        (TaskPriority.LOW, TaskPriority.LOW),
    ],
)
def test_priority_parse(raw, expected: TaskPriority) -> None:
    assert TaskPriority.parse(raw) is expected


@pytest.mark.parametrize(
    "raw", ["in-progress", "In Progress", "InProgress", "IN_PROGRESS", 2, "2"]
)
def test_status_parse_accepts_names_labels_and_codes(raw) -> None:
    assert TaskStatus.parse(raw) is TaskStatus.IN_PROGRESS


@pytest.mark.parametrize("raw", ["urgent", 0, 4, "", None, True])
def test_priority_parse_rejects_unknown(raw) -> None:
    with pytest.raises(ValidationError):
        TaskPriority.parse(raw)


def test_record_accepts_enum_names_on_load() -> None:
    task = Task.model_validate(
        {"id": "TASK-1", "title": "x", "due_date": "2026-10-20T09:00:00",
         "priority": "High", "status": "Done"}
    )

    assert task.priority == TaskPriority.HIGH
    assert task.status == TaskStatus.DONE


def test_json_dump_uses_enum_codes(make_task) -> None:
    data = make_task(priority=TaskPriority.HIGH).model_dump(mode="json")

    assert data["priority"] == 3
    assert data["status"] == 1
    assert data["completed_at"] is None
    assert set(data) == {
        "id", "title", "description", "due_date", "priority",
        "status", "assignee", "created_at", "completed_at",
    }


def test_aware_due_date_is_stored_as_naive_local_time() -> None:
    aware = datetime(2026, 10, 18, 9, 30, tzinfo=timezone(timedelta(hours=-5)))

    task = Task(id="TASK-TZ", title="Call overseas", due_date=aware)

    assert task.due_date.tzinfo is None
    assert task.due_date == aware.astimezone().replace(tzinfo=None)
    assert task.is_overdue(now=task.due_date + timedelta(minutes=1))


def test_invalid_assignment_raises_task_validation_error(make_task) -> None:
    task = make_task("TASK-100", "Keep me")

    with pytest.raises(ValidationError, match="title"):
        task.title = "   "
    with pytest.raises(ValidationError):
        task.priority = 9
    with pytest.raises(ValidationError):
        task.id = "TASK-200"

    assert task.title == "Keep me"
    assert task.priority == TaskPriority.MEDIUM
    assert task.id == "TASK-100"
