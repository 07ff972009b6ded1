"""Tasks from Todoist via the todoist CLI script."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from morning_dashboard.collectors.runner import parse_json, run_command
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import Task, TaskBuckets

logger = logging.getLogger(__name__)


def due_fields(item: dict[str, Any]) -> tuple[str | None, str | None]:
    """(display text, ISO date) from a task's ``due`` value, which may be missing."""
    due = item.get("due")
    if isinstance(due, dict):
        due_date = due.get("date")
        due_date = str(due_date) if due_date else None
        return due.get("string") or due_date, due_date
    if isinstance(due, str) and due:
        return due, None
    return None, None


def parse_task(item: dict[str, Any], is_overdue: bool = False) -> Task:
    due, due_date = due_fields(item)
    return Task(
        id=str(item.get("id", "")),
        content=item.get("content") or "",
        description=item.get("description") or "",
        due=due,
        due_date=due_date,
        priority=item.get("priority") or 1,
        project_id=item.get("project_id"),
        labels=list(item.get("labels") or []),
        is_overdue=is_overdue,
    )


def bucket_tasks(
    overdue: list[dict[str, Any]],
    today: list[dict[str, Any]],
    upcoming: list[dict[str, Any]],
    on: date,
    upcoming_days: int = 7,
) -> TaskBuckets:
    """Group raw tasks, keeping each task only in the first bucket it appears in.

    Upcoming tasks must be due after ``on`` and within ``upcoming_days``;
    tasks with no due date are kept.
    """
    seen: set[str] = set()

    def dedup(items: list[dict[str, Any]], is_overdue: bool = False) -> list[Task]:
        tasks = []
        for item in items:
            if not isinstance(item, dict):
                continue
            task = parse_task(item, is_overdue)
            if task.id not in seen:
                seen.add(task.id)
                tasks.append(task)
        return tasks

    horizon = (on + timedelta(days=upcoming_days)).isoformat()
    today_str = on.isoformat()

    def within_horizon(item: dict[str, Any]) -> bool:
        due_date = due_fields(item)[1]
        return not due_date or today_str < due_date[:10] <= horizon

    upcoming = [t for t in upcoming if isinstance(t, dict) and within_horizon(t)]

    return TaskBuckets(
        overdue=dedup(overdue, is_overdue=True),
        today=dedup(today),
        upcoming=dedup(upcoming),
    )


async def _run_filter(config: DashboardConfig, name: str) -> list[dict[str, Any]]:
    data = parse_json(await run_command([config.todoist.cli_path, name], timeout=config.command_timeout))
    return data if isinstance(data, list) else []


async def fetch_tasks(config: DashboardConfig, on: date) -> TaskBuckets:
    """Today's, overdue and (optionally) upcoming tasks."""
    if not config.todoist.enabled:
        return TaskBuckets()

    today = await _run_filter(config, "today")
    overdue = await _run_filter(config, "overdue")
    upcoming = await _run_filter(config, "upcoming") if config.todoist.show_upcoming else []

    buckets = bucket_tasks(overdue, today, upcoming, on, config.todoist.upcoming_days)
    logger.debug(
        f"Fetched {len(buckets.overdue)} overdue, {len(buckets.today)} today, "
        f"{len(buckets.upcoming)} upcoming tasks"
    )
    return buckets
