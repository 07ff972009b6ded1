"""GitHub notifications via the gh CLI."""

from __future__ import annotations

import logging
from typing import Any

from morning_dashboard.collectors.runner import is_installed, parse_json, run_command
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import GitHubNotification

logger = logging.getLogger(__name__)


def parse_notifications(data: Any, limit: int = 5) -> list[GitHubNotification]:
    """Unread notifications from the ``/notifications`` REST payload."""
    if not isinstance(data, list):
        return []

    notifications = []
    for item in data:
        if not isinstance(item, dict) or not item.get("unread"):
            continue
        subject = item.get("subject") or {}
        notifications.append(
            GitHubNotification(
                id=str(item.get("id", "")),
                title=subject.get("title") or "",
                type=subject.get("type") or "",
                repo=(item.get("repository") or {}).get("full_name") or "",
                reason=item.get("reason") or "",
            )
        )
        if len(notifications) >= limit:
            break
    return notifications


async def fetch_notifications(config: DashboardConfig) -> list[GitHubNotification]:
    if not config.github.enabled or not is_installed("gh"):
        return []

    raw = await run_command(["gh", "api", "notifications"], timeout=config.command_timeout)
    return parse_notifications(parse_json(raw), config.github.max_notifications)
