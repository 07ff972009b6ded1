"""gog authentication status and the remote Google data proxy."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

import aiohttp

from morning_dashboard.collectors.calendar import date_range, events_between, parse_events
from morning_dashboard.collectors.gmail import parse_emails
from morning_dashboard.collectors.runner import parse_json, run_command
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import CalendarEvent, Email, GoogleStatus

logger = logging.getLogger(__name__)


def parse_auth_status(data: Any, installed: bool = True) -> GoogleStatus:
    """Status from ``gog auth list --json``; the first account is used."""
    accounts = data.get("accounts") if isinstance(data, dict) else None
    if isinstance(accounts, list) and accounts and isinstance(accounts[0], dict):
        account = accounts[0]
        return GoogleStatus(
            installed=True,
            authenticated=True,
            account=account.get("email"),
            services=list(account.get("services") or []),
        )
    return GoogleStatus(installed=installed)


async def fetch_auth_status(config: DashboardConfig) -> GoogleStatus:
    raw = await run_command(["gog", "auth", "list", "--json"], timeout=config.command_timeout)
    if raw is None:
        return GoogleStatus()
    return parse_auth_status(parse_json(raw))


async def fetch_from_proxy(
    config: DashboardConfig,
    now: datetime,
) -> tuple[list[Email], list[CalendarEvent]]:
    """Email and calendar data from a proxy started with ``mdash proxy``.

    Used where gog cannot reach its credentials, e.g. inside a container.
    """
    url = config.google.proxy_url.rstrip("/") + "/google"
    timeout = aiohttp.ClientTimeout(total=config.command_timeout * 2)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.warning(f"Google proxy at {url} unavailable: {e}")
        return [], []

    if not isinstance(data, dict):
        return [], []

    emails: list[Email] = []
    if config.gmail.enabled:
        emails = parse_emails(data.get("email"))[: config.gmail.max_emails]

    events: list[CalendarEvent] = []
    if config.calendar.enabled:
        start, end = date_range(now, config.calendar.lookahead_days)
        events = events_between(parse_events(data.get("calendar"), tz=now.tzinfo), start, end)

    return emails, events
