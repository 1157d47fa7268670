"""
TASKTRACK - Task Tracking System
================================

Tasks with priority, due date, status and assignee, persisted to a single
JSON file that is rewritten after every change.

Usage:
    from tasktrack import JsonTaskStore, TaskManager, TaskPriority, TaskStatus

    manager = TaskManager(JsonTaskStore("tasks.json"))
    task = manager.create_task("Write report", "", due, TaskPriority.HIGH, "alice")

    manager.update_task_status(task.id, TaskStatus.DONE)
    print(manager.get_task_statistics())
"""

from .schema import (
    Task,
    TaskStatus,
    TaskPriority,
    DEFAULT_ASSIGNEE
)

from .errors import (
    TaskTrackError,
    ValidationError,
    InvalidArgumentError,
    DuplicateKeyError,
    NotFoundError,
    PersistenceError
)

from .store import TaskRepository, JsonTaskStore
from .manager import TaskManager

__version__ = "1.0.0"
__all__ = [
    "TaskManager",
    "TaskRepository",
    "JsonTaskStore",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "DEFAULT_ASSIGNEE",
    "TaskTrackError",
    "ValidationError",
    "InvalidArgumentError",
    "DuplicateKeyError",
    "NotFoundError",
    "PersistenceError"
]
