"""
TASKTRACK - Task Schema Definition
==================================
The Task record, its priority/status enums and the derived predicates
(overdue, upcoming) used by the reports.

Priority and status are stored as integer codes so the ordering used by
the sort algorithms is explicit rather than implied by declaration order.
"""

from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SchemaError

from .errors import ValidationError

DEFAULT_ASSIGNEE = "Unassigned"
SECONDS_PER_DAY = 86400.0

E = TypeVar("E", bound=IntEnum)


def _parse_code(enum_cls: Type[E], raw: Any) -> E:
    """Accept a member, an int code, a digit string, a name or a label"""
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        try:
            return enum_cls(raw)
        except ValueError:
            pass
    elif isinstance(raw, str):
        text = raw.strip()
        if text.isdigit():
            try:
                return enum_cls(int(text))
            except ValueError:
                pass
        # "in-progress", "In Progress", "InProgress", "IN_PROGRESS" all match
        squashed = "".join(ch for ch in text.upper() if ch.isalnum())
        for member in enum_cls:
            if member.name.replace("_", "") == squashed:
                return member
    raise ValidationError(f"Invalid {enum_cls.__name__} value: {raw!r}")


class TaskPriority(IntEnum):
    """Task priority levels (higher code sorts first)"""
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def parse(cls, raw: Any) -> "TaskPriority":
        return _parse_code(cls, raw)


class TaskStatus(IntEnum):
    """Task lifecycle states"""
    TODO = 1          # Not started
    IN_PROGRESS = 2   # Being worked on
    DONE = 3          # Finished

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, raw: Any) -> "TaskStatus":
        return _parse_code(cls, raw)


_STATUS_LABELS: Dict[TaskStatus, str] = {
    TaskStatus.TODO: "To-Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


def _describe(exc: SchemaError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'task'}: {err['msg']}"
        for err in exc.errors()
    )
    return f"Invalid task: {problems}"


class Task(BaseModel):
    """Individual task definition"""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True)        # e.g. "TASK-3F9A1C"
    title: str
    description: str = ""
    due_date: datetime
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    assignee: str = DEFAULT_ASSIGNEE

    # Lifecycle timestamps
    created_at: datetime = Field(default_factory=datetime.now, frozen=True)
    completed_at: Optional[datetime] = None

    # Construction and assignment both raise tasktrack.errors.ValidationError
    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except SchemaError as exc:
            raise ValidationError(_describe(exc)) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except SchemaError as exc:
            raise ValidationError(_describe(exc)) from exc

    @field_validator("due_date", "created_at", "completed_at")
    @classmethod
    def _naive_local(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Stored timestamps are naive local time; aware input is converted.
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @field_validator("id", "title")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("assignee", mode="before")
    @classmethod
    def _assignee_default(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_ASSIGNEE
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: Any) -> TaskPriority:
        return TaskPriority.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> TaskStatus:
        return TaskStatus.parse(value)

    # ========================================
    # STATE TRANSITIONS
    # ========================================

    def update_status(self, new_status: TaskStatus) -> None:
        """
        Move the task to new_status.

        completed_at is stamped on the first move into DONE and is kept even
        if the task is later reopened.
        """
        self.status = new_status
        if new_status == TaskStatus.DONE and self.completed_at is None:
            self.completed_at = datetime.now()

    # ========================================
    # DERIVED PREDICATES
    # ========================================

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now()
        return self.status != TaskStatus.DONE and now > self.due_date

    def is_upcoming(self, days: int, now: Optional[datetime] = None) -> bool:
        """True if not done and due between now and now + days (inclusive)"""
        if self.status == TaskStatus.DONE:
            return False
        now = now or datetime.now()
        days_until_due = (self.due_date - now).total_seconds() / SECONDS_PER_DAY
        return 0 <= days_until_due <= days

    def __str__(self) -> str:
        overdue = " [OVERDUE]" if self.is_overdue() else ""
        return (
            f"[{self.id}] {self.title} | Priority: {self.priority.label} | "
            f"Status: {self.status.label} | Due: {self.due_date:%Y-%m-%d} | "
            f"Assignee: {self.assignee}{overdue}"
        )
