"""
TASKTRACK - Task Manager
========================
Use-case facade over the task store and the search/sort algorithms.

Mutations go through the repository and are logged; errors are logged
and re-raised unchanged. Reports work on a fresh snapshot every call.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional

from . import algorithms
from .errors import NotFoundError
from .schema import DEFAULT_ASSIGNEE, Task, TaskPriority, TaskStatus
from .store import TaskRepository

STATUS_ICONS = {
    TaskStatus.TODO: "⬜",
    TaskStatus.IN_PROGRESS: "🔵",
    TaskStatus.DONE: "✅",
}


def generate_task_id() -> str:
    """TASK-XXXXXX (six upper-case hex characters)"""
    return f"TASK-{uuid.uuid4().hex[:6].upper()}"


class TaskManager:
    """
    Task Manager

    Depends only on the TaskRepository protocol, so it runs equally well
    on the JSON store or an in-memory double.
    """

    def __init__(
        self,
        repository: TaskRepository,
        logger: Optional[logging.Logger] = None,
        id_factory: Callable[[], str] = generate_task_id
    ):
        self.repository = repository
        self._logger = logger or logging.getLogger("tasktrack.manager")
        self._id_factory = id_factory

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def create_task(
        self,
        title: str,
        description: Optional[str],
        due_date: datetime,
        priority: TaskPriority,
        assignee: Optional[str] = None
    ) -> Task:
        """Create a task with a fresh unique id and add it to the store"""
        try:
            task = Task(
                id=self._unique_id(),
                title=title,
                description=description,
                due_date=due_date,
                priority=priority,
                assignee=assignee,
            )
            self.repository.add(task)
        except Exception:
            self._logger.exception(f"Failed to create task '{title}'")
            raise

        self._logger.info(f"🚀 Task created successfully: {task.id}")
        return task

    def create_quick_task(self, title: str, due_date: datetime) -> Task:
        return self.create_task(title, "", due_date, TaskPriority.MEDIUM, DEFAULT_ASSIGNEE)

    def update_task_status(self, task_id: str, new_status: TaskStatus) -> Task:
        try:
            task = self.repository.get_by_id(task_id)
            if task is None:
                self._logger.warning(f"Task not found: {task_id}")
                raise NotFoundError(task_id)

            old_status = task.status
            task.update_status(new_status)
            self.repository.update(task)
        except Exception:
            self._logger.exception(f"Failed to update status of task {task_id}")
            raise

        self._logger.info(
            f"Task {task_id} status updated: {old_status.label} -> {new_status.label}"
        )
        return task

    def delete_task(self, task_id: str) -> bool:
        try:
            deleted = self.repository.delete(task_id)
        except Exception:
            self._logger.exception(f"Failed to delete task {task_id}")
            raise

        if deleted:
            self._logger.info(f"🗑️ Task deleted: {task_id}")
        else:
            self._logger.warning(f"Task not found for deletion: {task_id}")
        return deleted

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.repository.get_by_id(task_id)

    def get_all_tasks(self) -> List[Task]:
        return self.repository.get_all()

    # ========================================
    # SEARCH
    # ========================================

    def search_by_title(self, search_term: str) -> List[Task]:
        results = algorithms.linear_search_by_title(self.repository.get_all(), search_term)
        self._logger.info(f"Search by title '{search_term}': {len(results)} results found")
        return results

    def search_by_assignee(self, assignee: str) -> List[Task]:
        results = algorithms.linear_search_by_assignee(self.repository.get_all(), assignee)
        self._logger.info(f"Search by assignee '{assignee}': {len(results)} results found")
        return results

    def search_by_id(self, task_id: str) -> Optional[Task]:
        result = algorithms.binary_search_by_id(self.repository.get_all(), task_id)
        self._logger.info(
            f"Binary search by ID '{task_id}': {'Found' if result else 'Not found'}"
        )
        return result

    def search_by_status(self, status: TaskStatus) -> List[Task]:
        results = algorithms.search_by_status(self.repository.get_all(), status)
        self._logger.info(f"Search by status {status.label}: {len(results)} results found")
        return results

    def search_by_priority(self, priority: TaskPriority) -> List[Task]:
        results = algorithms.search_by_priority(self.repository.get_all(), priority)
        self._logger.info(f"Search by priority {priority.label}: {len(results)} results found")
        return results

    # ========================================
    # SORT
    # ========================================

    def get_tasks_sorted_by_priority(self) -> List[Task]:
        """High -> Low (QuickSort, ties in no guaranteed order)"""
        tasks = self.repository.get_all()
        algorithms.quick_sort_by_priority(tasks)
        self._logger.info(f"Tasks sorted by priority (QuickSort): {len(tasks)} tasks")
        return tasks

    def get_tasks_sorted_by_due_date(self) -> List[Task]:
        """Earliest first (MergeSort, stable)"""
        tasks = self.repository.get_all()
        algorithms.merge_sort_by_due_date(tasks)
        self._logger.info(f"Tasks sorted by due date (MergeSort): {len(tasks)} tasks")
        return tasks

    # ========================================
    # REPORTING
    # ========================================

    def get_overdue_tasks(self, now: Optional[datetime] = None) -> List[Task]:
        now = now or datetime.now()
        overdue = [t for t in self.repository.get_all() if t.is_overdue(now)]
        self._logger.info(f"Overdue tasks report generated: {len(overdue)} tasks")
        return overdue

    def get_upcoming_tasks(self, days: int = 7, now: Optional[datetime] = None) -> List[Task]:
        now = now or datetime.now()
        upcoming = [t for t in self.repository.get_all() if t.is_upcoming(days, now)]
        self._logger.info(
            f"Upcoming tasks report generated (next {days} days): {len(upcoming)} tasks"
        )
        return upcoming

    def get_task_statistics(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """Counts computed from a fresh snapshot on every call"""
        now = now or datetime.now()
        tasks = self.repository.get_all()
        return {
            "total": len(tasks),
            "todo": sum(1 for t in tasks if t.status == TaskStatus.TODO),
            "in_progress": sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
            "done": sum(1 for t in tasks if t.status == TaskStatus.DONE),
            "overdue": sum(1 for t in tasks if t.is_overdue(now)),
            "high_priority": sum(1 for t in tasks if t.priority == TaskPriority.HIGH),
        }

    def get_status_report(self, now: Optional[datetime] = None) -> str:
        """Generate human-readable status report"""
        now = now or datetime.now()
        tasks = self.get_tasks_sorted_by_due_date()
        stats = self.get_task_statistics(now)

        done_pct = int(stats["done"] / stats["total"] * 100) if stats["total"] else 0
        lines = [
            "📋 Task Report",
            f"Progress: {'█' * (done_pct // 10)}{'░' * (10 - done_pct // 10)} {done_pct}%",
            f"Total: {stats['total']} | To-Do: {stats['todo']} | "
            f"In Progress: {stats['in_progress']} | Done: {stats['done']}",
            f"Overdue: {stats['overdue']} | High Priority: {stats['high_priority']}",
            "",
            "Tasks:"
        ]

        if not tasks:
            lines.append("  (none)")

        for task in tasks:
            icon = STATUS_ICONS.get(task.status, "❓")
            overdue = " ⚠️ OVERDUE" if task.is_overdue(now) else ""
            lines.append(
                f"  {icon} [{task.id}] {task.title} "
                f"({task.priority.label}, due {task.due_date:%Y-%m-%d}, {task.assignee}){overdue}"
            )

        return "\n".join(lines)

    # ========================================
    # HELPER METHODS
    # ========================================

    def _unique_id(self) -> str:
        existing = {t.id for t in self.repository.get_all()}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id
