"""Collect every dashboard section for one render."""

from __future__ import annotations

import logging
from datetime import datetime

from morning_dashboard.collectors.calendar import fetch_events
from morning_dashboard.collectors.github import fetch_notifications
from morning_dashboard.collectors.gmail import fetch_emails
from morning_dashboard.collectors.google import fetch_from_proxy
from morning_dashboard.collectors.system import fetch_system_health
from morning_dashboard.collectors.todoist import fetch_tasks
from morning_dashboard.collectors.weather import fetch_weather
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import DashboardData
from morning_dashboard.scheduling.focus_time import FocusTimeCalculator
from morning_dashboard.utils.formatting import get_greeting
from morning_dashboard.utils.quotes import get_daily_quote

logger = logging.getLogger(__name__)


async def collect_dashboard_data(
    config: DashboardConfig,
    now: datetime | None = None,
) -> DashboardData:
    """Fetch all sources one after another and derive focus time.

    Args:
        config: Effective configuration.
        now: Current instant; local time when omitted.

    Returns:
        DashboardData ready for any renderer.
    """
    now = now or datetime.now().astimezone()

    if config.google.proxy_url:
        emails, events = await fetch_from_proxy(config, now)
    else:
        emails = await fetch_emails(config)
        events = await fetch_events(config, now)

    tasks = await fetch_tasks(config, now.date())
    weather = await fetch_weather(config, now)
    github = await fetch_notifications(config)
    system = await fetch_system_health(config)

    focus_blocks = []
    if config.calendar.enabled and config.calendar.show_focus_time:
        calculator = FocusTimeCalculator.from_config(config.calendar)
        focus_blocks = calculator.calculate(calculator.todays_events(events, now), now)

    logger.info(
        f"Collected {len(emails)} emails, {len(events)} events, "
        f"{len(tasks.overdue) + len(tasks.today)} tasks, {len(focus_blocks)} focus blocks"
    )

    return DashboardData(
        timestamp=now,
        greeting=get_greeting(now),
        quote=get_daily_quote(now.date()),
        tasks=tasks,
        events=events,
        focus_blocks=focus_blocks,
        emails=emails,
        weather=weather,
        github=github,
        system=system,
    )
