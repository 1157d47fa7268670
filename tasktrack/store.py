"""
TASKTRACK - Task Store
======================
Owns the authoritative task list and its durability contract.

Primary storage: a single JSON file holding an array of task records.
Every successful add/update/delete rewrites the whole file, so the
file always mirrors the in-memory list.
"""

import contextlib
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import List, Optional, Protocol, Union

from .errors import DuplicateKeyError, NotFoundError, PersistenceError, ValidationError
from .schema import Task


class TaskRepository(Protocol):
    """Capability interface the TaskManager depends on"""

    def add(self, task: Task) -> None: ...

    def update(self, task: Task) -> None: ...

    def delete(self, task_id: str) -> bool: ...

    def get_by_id(self, task_id: str) -> Optional[Task]: ...

    def get_all(self) -> List[Task]: ...

    def load(self) -> None: ...

    def persist(self) -> None: ...


def _require_id(task_id: str) -> None:
    if not task_id or not task_id.strip():
        raise ValidationError("Task ID cannot be empty")


class JsonTaskStore:
    """
    File-backed TaskRepository.

    Key behaviours:
    - Loads once at construction; a missing, empty or malformed file
      starts an empty store instead of failing
    - Reads hand out copies, so callers can never edit stored state
    - Writes go to a temp file that is swapped in with os.replace()

    Thread-safety:
    - every mutate-then-persist sequence runs under one lock
    """

    def __init__(
        self,
        path: Union[str, Path] = "tasks.json",
        logger: Optional[logging.Logger] = None
    ):
        self.path = Path(path)
        self._logger = logger or logging.getLogger("tasktrack.store")
        self._lock = threading.RLock()
        self._tasks: List[Task] = []
        self.load()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return any(t.id == task_id for t in self._tasks)

    # ========================================
    # MUTATIONS
    # ========================================

    def add(self, task: Task) -> None:
        with self._lock:
            if self._index_of(task.id) is not None:
                raise DuplicateKeyError(task.id)

            self._tasks.append(task.model_copy(deep=True))
            self.persist()

        self._logger.info(f"Task added: {task.id} - {task.title}")

    def update(self, task: Task) -> None:
        """Replace the stored task with the same id, keeping its position"""
        with self._lock:
            index = self._index_of(task.id)
            if index is None:
                raise NotFoundError(task.id)

            self._tasks[index] = task.model_copy(deep=True)
            self.persist()

        self._logger.info(f"Task updated: {task.id} - {task.title}")

    def delete(self, task_id: str) -> bool:
        _require_id(task_id)

        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return False

            del self._tasks[index]
            self.persist()

        self._logger.info(f"Task deleted: {task_id}")
        return True

    # ========================================
    # READS
    # ========================================

    def get_by_id(self, task_id: str) -> Optional[Task]:
        _require_id(task_id)

        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return None
            return self._tasks[index].model_copy(deep=True)

    def get_all(self) -> List[Task]:
        """Independent copies of every task, in insertion/update order"""
        with self._lock:
            return [t.model_copy(deep=True) for t in self._tasks]

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def load(self) -> None:
        """
        Replace the in-memory list with the file contents.

        Missing/empty/malformed file -> empty list (malformed files are left
        untouched until the next successful persist). Any other I/O failure
        raises PersistenceError.
        """
        with self._lock:
            self._tasks = self._read_file()

    def _read_file(self) -> List[Task]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            self._logger.info(f"Data file not found: {self.path}. Starting with empty task list.")
            return []
        except OSError as e:
            self._logger.exception(f"Failed to read {self.path}")
            raise PersistenceError("Failed to load tasks from file", self.path) from e

        if not raw.strip():
            self._logger.warning("Data file is empty. Starting with empty task list.")
            return []

        try:
            tasks = self._parse(raw)
        except (ValueError, TypeError):
            self._logger.warning(
                f"Failed to parse {self.path}. Starting with empty task list.",
                exc_info=True
            )
            return []

        self._logger.info(f"Data loaded successfully. Total tasks: {len(tasks)}")
        return tasks

    @staticmethod
    def _parse(raw: bytes) -> List[Task]:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array of tasks, got {type(data).__name__}")

        tasks = [Task.model_validate(record) for record in data]

        seen = set()
        for task in tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id!r}")
            seen.add(task.id)
        return tasks

    def persist(self) -> None:
        """Rewrite the whole file from the in-memory list"""
        with self._lock:
            payload = json.dumps(
                [t.model_dump(mode="json") for t in self._tasks],
                indent=2
            )
            try:
                self._write_atomic(payload)
            except OSError as e:
                self._logger.exception(f"Failed to write {self.path}")
                raise PersistenceError("Failed to save tasks to file", self.path) from e

            self._logger.info(f"Data saved successfully. Total tasks: {len(self._tasks)}")

    def _write_atomic(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
