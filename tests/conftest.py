# tests/conftest.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest

from tasktrack.schema import Task, TaskPriority, TaskStatus
from tasktrack.store import JsonTaskStore

from .fakes import InMemoryTaskRepository

# Fixed clock for predicate/report tests.
NOW = datetime(2026, 10, 18, 12, 0, 0)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def make_task() -> Callable[..., Task]:
    """
    Task factory with sensible defaults.

    `due_in` is a day offset from NOW; pass `due_date` to set it directly.
    """

    def _make(
        task_id: str = "TASK-001",
        title: str = "Sample task",
        *,
        due_in: float = 1,
        due_date: datetime | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.TODO,
        assignee: str | None = None,
        description: str = "",
    ) -> Task:
        task = Task(
            id=task_id,
            title=title,
            description=description,
            due_date=due_date or NOW + timedelta(days=due_in),
            priority=priority,
            assignee=assignee,
        )
        if status != TaskStatus.TODO:
            task.update_status(status)
        return task

    return _make


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def logger() -> logging.Logger:
    return logging.getLogger("tasktrack.test")


@pytest.fixture()
def store(data_file: Path, logger: logging.Logger) -> JsonTaskStore:
    """Real JSON store on a per-test temp file."""
    return JsonTaskStore(data_file, logger=logger)


@pytest.fixture()
def memory_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()
