"""Calendar events from Google Calendar via the gog CLI."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any

from morning_dashboard.collectors.gmail import account_args
from morning_dashboard.collectors.runner import parse_json, run_command
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import CalendarEvent

logger = logging.getLogger(__name__)


def local_timezone() -> tzinfo | None:
    return datetime.now().astimezone().tzinfo


def date_range(now: datetime, days: int, past_days: int = 0) -> tuple[datetime, datetime]:
    """Range from midnight ``past_days`` ago to midnight ``days`` ahead."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=past_days), midnight + timedelta(days=days)


def _parse_when(value: dict[str, Any], tz: tzinfo | None) -> tuple[datetime, bool]:
    """Parse a Google ``start``/``end`` object into (datetime, all_day)."""
    if value.get("dateTime"):
        parsed = datetime.fromisoformat(value["dateTime"].replace("Z", "+00:00"))
        if parsed.tzinfo is None and tz is not None:
            parsed = parsed.replace(tzinfo=tz)
        return parsed, False
    return datetime.combine(date.fromisoformat(value["date"]), time.min, tzinfo=tz), True


def parse_events(data: Any, tz: tzinfo | None = None) -> list[CalendarEvent]:
    """Parse gog calendar output, all-day events first, then by start time."""
    if isinstance(data, dict):
        items = data.get("events") or []
    elif isinstance(data, list):
        items = data
    else:
        return []

    tz = tz or local_timezone()
    events = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            start, all_day = _parse_when(item.get("start") or {}, tz)
            end = _parse_when(item["end"], tz)[0] if item.get("end") else start
        except (KeyError, ValueError) as e:
            logger.debug(f"Skipping event {item.get('id')}: {e}")
            continue

        entry_points = (item.get("conferenceData") or {}).get("entryPoints") or [{}]
        events.append(
            CalendarEvent(
                id=str(item.get("id", "")),
                summary=item.get("summary") or "(no title)",
                start=start,
                end=end,
                all_day=all_day,
                location=item.get("location"),
                meet_link=item.get("hangoutLink") or entry_points[0].get("uri"),
            )
        )

    return sorted(events, key=lambda e: (not e.all_day, e.start))


def events_between(
    events: list[CalendarEvent],
    start: datetime,
    end: datetime,
) -> list[CalendarEvent]:
    """Events starting inside ``[start, end)``."""
    return [e for e in events if start <= e.start < end]


async def fetch_raw_events(
    config: DashboardConfig,
    start: datetime,
    end: datetime,
) -> Any:
    """Unparsed gog output for events in ``[start, end)``."""
    raw = await run_command(
        [
            "gog", "calendar", "events", config.calendar.id,
            "--from", start.isoformat(),
            "--to", end.isoformat(),
            *account_args(config),
            "--json",
        ],
        timeout=config.command_timeout,
    )
    return parse_json(raw)


async def fetch_events(config: DashboardConfig, now: datetime) -> list[CalendarEvent]:
    """Events from today through the configured lookahead."""
    if not config.calendar.enabled:
        return []

    start, end = date_range(now, config.calendar.lookahead_days)
    events = parse_events(await fetch_raw_events(config, start, end), tz=now.tzinfo)
    logger.debug(f"Fetched {len(events)} calendar events")
    return events
