"""
TASKTRACK - Error Taxonomy
==========================
Every error raised by the store, the algorithms and the manager derives
from TaskTrackError so callers can catch the whole family at once.

Malformed data on load is NOT in this list: it degrades to an empty
collection plus a warning instead of raising.
"""

from pathlib import Path
from typing import Optional, Union


class TaskTrackError(Exception):
    """Base class for all tasktrack errors"""


class ValidationError(TaskTrackError, ValueError):
    """Empty identifier/title, or an unparseable enum value"""


class InvalidArgumentError(TaskTrackError, TypeError):
    """A required collection argument was None"""


class DuplicateKeyError(TaskTrackError, KeyError):
    """Add with an identifier that already exists"""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID '{task_id}' already exists.")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class NotFoundError(TaskTrackError, LookupError):
    """Update on an identifier that is not in the store"""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID '{task_id}' not found.")


class PersistenceError(TaskTrackError):
    """Backing file could not be read or written"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)
