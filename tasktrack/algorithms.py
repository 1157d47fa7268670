"""
TASKTRACK - Search & Sort Algorithms
====================================
Hand-written search and sort routines over task sequences.

Searches never mutate their input and return fresh lists (or a single
optional match). Sorts work in place and return None, like list.sort().
"""

from typing import List, Optional, Sequence

from .errors import InvalidArgumentError
from .schema import Task, TaskPriority, TaskStatus


def _require(tasks: Optional[Sequence[Task]]) -> Sequence[Task]:
    if tasks is None:
        raise InvalidArgumentError("tasks cannot be None")
    return tasks


# ============================================================
# SEARCH
# ============================================================

def linear_search_by_title(tasks: Sequence[Task], search_term: str) -> List[Task]:
    """Case-insensitive substring match on title. O(n), input order kept."""
    _require(tasks)
    if not search_term or not search_term.strip():
        return []

    needle = search_term.casefold()
    return [task for task in tasks if needle in task.title.casefold()]


def linear_search_by_assignee(tasks: Sequence[Task], assignee: str) -> List[Task]:
    """Case-insensitive substring match on assignee. O(n), input order kept."""
    _require(tasks)
    if not assignee or not assignee.strip():
        return []

    needle = assignee.casefold()
    return [task for task in tasks if needle in task.assignee.casefold()]


def binary_search_by_id(tasks: Sequence[Task], task_id: str) -> Optional[Task]:
    """
    Exact match on id.

    The input does not need to be sorted: a copy is ordered by id
    (ordinal comparison) before probing, so the call is O(n log n).
    """
    _require(tasks)
    if not task_id or not task_id.strip():
        return None

    sorted_tasks = sorted(tasks, key=lambda t: t.id)

    left, right = 0, len(sorted_tasks) - 1
    while left <= right:
        mid = left + (right - left) // 2
        probe = sorted_tasks[mid].id
        if probe == task_id:
            return sorted_tasks[mid]
        if probe < task_id:
            left = mid + 1
        else:
            right = mid - 1

    return None


def search_by_status(tasks: Sequence[Task], status: TaskStatus) -> List[Task]:
    _require(tasks)
    return [task for task in tasks if task.status == status]


def search_by_priority(tasks: Sequence[Task], priority: TaskPriority) -> List[Task]:
    _require(tasks)
    return [task for task in tasks if task.priority == priority]


# ============================================================
# SORT: PRIORITY (QuickSort, descending, unstable)
# ============================================================

def quick_sort_by_priority(tasks: List[Task]) -> None:
    """
    Sort High -> Medium -> Low in place.

    Lomuto partition with the last element as pivot. Elements equal to the
    pivot move to the left side, so ties do not keep their original order.
    Average O(n log n), worst case O(n^2).
    """
    _require(tasks)
    if len(tasks) <= 1:
        return
    _quick_sort(tasks, 0, len(tasks) - 1)


def _quick_sort(tasks: List[Task], low: int, high: int) -> None:
    # Recurse into the smaller side and loop over the larger one so the
    # stack stays O(log n) even on already-sorted input.
    while low < high:
        pivot_index = _partition_by_priority(tasks, low, high)
        if pivot_index - low < high - pivot_index:
            _quick_sort(tasks, low, pivot_index - 1)
            low = pivot_index + 1
        else:
            _quick_sort(tasks, pivot_index + 1, high)
            high = pivot_index - 1


def _partition_by_priority(tasks: List[Task], low: int, high: int) -> int:
    pivot = tasks[high].priority
    i = low - 1

    for j in range(low, high):
        if tasks[j].priority >= pivot:
            i += 1
            tasks[i], tasks[j] = tasks[j], tasks[i]

    tasks[i + 1], tasks[high] = tasks[high], tasks[i + 1]
    return i + 1


# ============================================================
# SORT: DUE DATE (MergeSort, ascending, stable)
# ============================================================

def merge_sort_by_due_date(tasks: List[Task]) -> None:
    """
    Sort earliest due date first, in place.

    Top-down merge sort. The merge takes from the left run on ties, which
    keeps equal due dates in their original relative order.
    O(n log n) time, O(n) extra space.
    """
    _require(tasks)
    if len(tasks) <= 1:
        return
    _merge_sort(tasks, 0, len(tasks) - 1)


def _merge_sort(tasks: List[Task], left: int, right: int) -> None:
    if left >= right:
        return
    mid = left + (right - left) // 2
    _merge_sort(tasks, left, mid)
    _merge_sort(tasks, mid + 1, right)
    _merge_by_due_date(tasks, left, mid, right)


def _merge_by_due_date(tasks: List[Task], left: int, mid: int, right: int) -> None:
    left_run = tasks[left:mid + 1]
    right_run = tasks[mid + 1:right + 1]

    i = j = 0
    k = left
    while i < len(left_run) and j < len(right_run):
        if left_run[i].due_date <= right_run[j].due_date:
            tasks[k] = left_run[i]
            i += 1
        else:
            tasks[k] = right_run[j]
            j += 1
        k += 1

    for task in left_run[i:]:
        tasks[k] = task
        k += 1
    for task in right_run[j:]:
        tasks[k] = task
        k += 1


# ============================================================
# REFERENCE SORTS (validation only)
# ============================================================

def builtin_sort_by_priority(tasks: List[Task]) -> None:
    """list.sort() equivalent of quick_sort_by_priority (but stable)"""
    _require(tasks)
    tasks.sort(key=lambda t: t.priority, reverse=True)


def builtin_sort_by_due_date(tasks: List[Task]) -> None:
    """list.sort() equivalent of merge_sort_by_due_date"""
    _require(tasks)
    tasks.sort(key=lambda t: t.due_date)
