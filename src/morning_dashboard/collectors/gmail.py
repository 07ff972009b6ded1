"""Unread email from Gmail via the gog CLI."""

from __future__ import annotations

import logging
import re
from typing import Any

from morning_dashboard.collectors.runner import parse_json, run_command
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import Email

logger = logging.getLogger(__name__)


def account_args(config: DashboardConfig) -> list[str]:
    """Extra gog arguments selecting the configured Google account."""
    return ["--account", config.google.account] if config.google.account else []


def parse_emails(data: Any) -> list[Email]:
    """Parse gog search output.

    gog returns ``{"threads": [...]}``, ``{"messages": [...]}`` or a bare list.
    """
    if isinstance(data, dict):
        messages = data.get("threads") or data.get("messages") or []
    elif isinstance(data, list):
        messages = data
    else:
        return []

    emails = []
    for message in messages:
        if not isinstance(message, dict):
            continue
        sender = re.sub(r"<.*>", "", message.get("from") or "").strip()
        emails.append(
            Email(
                id=str(message.get("id", "")),
                sender=sender or "Unknown",
                subject=message.get("subject") or "(no subject)",
                date=message.get("date"),
                snippet=message.get("snippet") or "",
                thread_id=message.get("threadId") or message.get("thread_id"),
                labels=list(message.get("labels") or message.get("labelIds") or []),
            )
        )
    return emails


async def fetch_emails(config: DashboardConfig) -> list[Email]:
    """Search Gmail with the configured query."""
    if not config.gmail.enabled:
        return []

    raw = await run_command(
        [
            "gog", "gmail", "search", config.gmail.query,
            "--max", str(config.gmail.max_emails),
            *account_args(config),
            "--json",
        ],
        timeout=config.command_timeout,
    )
    emails = parse_emails(parse_json(raw))
    logger.debug(f"Fetched {len(emails)} emails")
    return emails[: config.gmail.max_emails]
