#!/usr/bin/env python3
"""
TASKTRACK - CLI Interface
=========================
Command-line tool for tracking tasks in a JSON file.

Usage:
    tasktrack add "Write report" --due 2026-10-25 --priority high --assignee alice
    tasktrack list
    tasktrack status TASK-3F9A1C done
    tasktrack search --title report
    tasktrack sort due
    tasktrack overdue
    tasktrack upcoming --days 3
    tasktrack stats
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence

from pydantic import ValidationError as SettingsError

from .config import LOG_LEVELS, get_settings
from .errors import TaskTrackError, ValidationError
from .logging_setup import setup_logging
from .manager import TaskManager
from .schema import Task, TaskPriority, TaskStatus
from .store import JsonTaskStore

DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%m/%d/%Y")


def parse_date(text: str) -> datetime:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text.strip(), fmt)
        except ValueError:
            continue
    raise argparse.ArgumentTypeError(
        f"invalid date {text!r} (use YYYY-MM-DD, YYYY-MM-DDTHH:MM or MM/DD/YYYY)"
    )


def _enum_arg(parse: Callable[[str], Any]) -> Callable[[str], Any]:
    def convert(text: str) -> Any:
        try:
            return parse(text)
        except ValidationError as e:
            raise argparse.ArgumentTypeError(str(e))
    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasktrack",
        description="tasktrack - priority/due-date task tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tasktrack add "Fix login" --due 2026-10-25 -p high -a alice
  tasktrack status TASK-3F9A1C in-progress
  tasktrack search --assignee alice
  tasktrack sort priority
  tasktrack upcoming --days 3
        """
    )
    parser.add_argument("--file", help="Task data file (default: $TASKTRACK_DATA_FILE or tasks.json)")
    parser.add_argument("--log-file", help="Log file (default: $TASKTRACK_LOG_FILE or system.log)")
    parser.add_argument("--log-level", choices=LOG_LEVELS,
                        help="File log level")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Create a new task")
    add_parser.add_argument("title", help="Task title")
    add_parser.add_argument("--due", type=parse_date, required=True, help="Due date")
    add_parser.add_argument("-d", "--description", default="", help="Description")
    add_parser.add_argument("-p", "--priority", type=_enum_arg(TaskPriority.parse),
                            default=TaskPriority.MEDIUM, help="low, medium or high (or 1-3)")
    add_parser.add_argument("-a", "--assignee", help="Assignee (default: Unassigned)")

    # LIST command
    list_parser = subparsers.add_parser("list", help="List all tasks")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # SHOW command
    show_parser = subparsers.add_parser("show", help="Show a single task")
    show_parser.add_argument("task_id", help="Task ID")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # STATUS command
    status_parser = subparsers.add_parser("status", help="Change a task's status")
    status_parser.add_argument("task_id", help="Task ID")
    status_parser.add_argument("new_status", type=_enum_arg(TaskStatus.parse),
                               help="todo, in-progress or done (or 1-3)")

    # DELETE command
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", help="Task ID")

    # SEARCH command
    search_parser = subparsers.add_parser("search", help="Search tasks")
    criteria = search_parser.add_mutually_exclusive_group(required=True)
    criteria.add_argument("--title", help="Title contains (case-insensitive)")
    criteria.add_argument("--assignee", help="Assignee contains (case-insensitive)")
    criteria.add_argument("--id", dest="task_id", help="Exact task ID")
    criteria.add_argument("--status", type=_enum_arg(TaskStatus.parse), help="Exact status")
    criteria.add_argument("--priority", type=_enum_arg(TaskPriority.parse), help="Exact priority")

    # SORT command
    sort_parser = subparsers.add_parser("sort", help="List tasks sorted")
    sort_parser.add_argument("key", choices=["priority", "due"], help="Sort key")

    # REPORT commands
    subparsers.add_parser("overdue", help="List overdue tasks")
    upcoming_parser = subparsers.add_parser("upcoming", help="List tasks due soon")
    upcoming_parser.add_argument("--days", type=int, help="Window in days (default: 7)")
    stats_parser = subparsers.add_parser("stats", help="Show task statistics")
    stats_parser.add_argument("--json", action="store_true", help="Output as JSON")
    subparsers.add_parser("report", help="Show full status report")

    return parser


def _print_tasks(tasks: Sequence[Task], empty: str = "No tasks found") -> None:
    if not tasks:
        print(empty)
        return
    for task in tasks:
        print(f"  {task}")


def _dump(tasks: Sequence[Task]) -> str:
    return json.dumps([t.model_dump(mode="json") for t in tasks], indent=2)


def run(args: argparse.Namespace, manager: TaskManager, upcoming_days: int) -> int:
    if args.command == "add":
        task = manager.create_task(
            title=args.title,
            description=args.description,
            due_date=args.due,
            priority=args.priority,
            assignee=args.assignee
        )
        print(f"✅ Created: {task.id}")
        print(f"   {task}")

    elif args.command == "list":
        tasks = manager.get_all_tasks()
        if args.json:
            print(_dump(tasks))
        else:
            _print_tasks(tasks)

    elif args.command == "show":
        task = manager.get_task(args.task_id)
        if task is None:
            print(f"❌ Task not found: {args.task_id}")
            return 1
        if args.json:
            print(json.dumps(task.model_dump(mode="json"), indent=2))
        else:
            print(task)
            if task.description:
                print(f"   {task.description}")
            print(f"   Created: {task.created_at:%Y-%m-%d %H:%M}")
            if task.completed_at:
                print(f"   Completed: {task.completed_at:%Y-%m-%d %H:%M}")

    elif args.command == "status":
        task = manager.update_task_status(args.task_id, args.new_status)
        print(f"▶️ {task.id} is now {task.status.label}")

    elif args.command == "delete":
        if not manager.delete_task(args.task_id):
            print(f"❌ Task not found: {args.task_id}")
            return 1
        print(f"🗑️ Deleted: {args.task_id}")

    elif args.command == "search":
        if args.task_id is not None:
            task = manager.search_by_id(args.task_id)
            _print_tasks([task] if task else [])
        elif args.title is not None:
            _print_tasks(manager.search_by_title(args.title))
        elif args.assignee is not None:
            _print_tasks(manager.search_by_assignee(args.assignee))
        elif args.status is not None:
            _print_tasks(manager.search_by_status(args.status))
        else:
            _print_tasks(manager.search_by_priority(args.priority))

    elif args.command == "sort":
        if args.key == "priority":
            _print_tasks(manager.get_tasks_sorted_by_priority())
        else:
            _print_tasks(manager.get_tasks_sorted_by_due_date())

    elif args.command == "overdue":
        _print_tasks(manager.get_overdue_tasks(), empty="No overdue tasks")

    elif args.command == "upcoming":
        days = args.days if args.days is not None else upcoming_days
        _print_tasks(manager.get_upcoming_tasks(days), empty=f"Nothing due in the next {days} days")

    elif args.command == "stats":
        stats = manager.get_task_statistics()
        if args.json:
            print(json.dumps(stats, indent=2))
        else:
            print("📊 Task Statistics:")
            print("-" * 40)
            for name, count in stats.items():
                print(f"  {name.replace('_', ' ').title():<15} {count}")
            print("-" * 40)

    elif args.command == "report":
        print(manager.get_status_report())

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = get_settings()
    except SettingsError as e:
        print(f"❌ Invalid settings: {e}", file=sys.stderr)
        return 1

    log_file = args.log_file if args.log_file is not None else settings.log_file
    logger = setup_logging(log_file=log_file or None, level=args.log_level or settings.log_level)

    try:
        store = JsonTaskStore(args.file or settings.data_file, logger=logger)
        manager = TaskManager(store, logger=logger)
        return run(args, manager, settings.upcoming_days)
    except TaskTrackError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
