"""Value objects shared by collectors, the focus-time calculator and renderers.

Everything here lives for a single dashboard render; nothing is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class CalendarEvent:
    """A calendar event resolved from the calendar source."""

    id: str
    summary: str
    start: datetime
    end: datetime
    all_day: bool = False
    location: str | None = None
    meet_link: str | None = None

    def is_past(self, now: datetime) -> bool:
        return not self.all_day and self.end < now

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "summary": self.summary,
            "start": self.start.date().isoformat() if self.all_day else self.start.isoformat(),
            "end": self.end.date().isoformat() if self.all_day else self.end.isoformat(),
            "all_day": self.all_day,
            "location": self.location,
            "meet_link": self.meet_link,
        }


@dataclass
class FocusBlock:
    """A contiguous free interval in the work day."""

    start: datetime
    end: datetime
    duration_minutes: float = 0.0

    def __post_init__(self):
        if self.duration_minutes == 0.0:
            self.duration_minutes = (self.end - self.start).total_seconds() / 60.0

    @property
    def minutes(self) -> int:
        """Duration in whole minutes, truncated toward zero."""
        return int(self.duration_minutes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_minutes": self.duration_minutes,
            "minutes": self.minutes,
        }


@dataclass
class Email:
    """An unread email thread."""

    id: str
    sender: str
    subject: str
    date: str | None = None
    snippet: str = ""
    thread_id: str | None = None
    labels: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "thread_id": self.thread_id or self.id,
            "from": self.sender,
            "subject": self.subject,
            "date": self.date,
            "snippet": self.snippet,
            "labels": self.labels,
        }


@dataclass
class Task:
    """A Todoist task."""

    id: str
    content: str
    description: str = ""
    due: str | None = None
    due_date: str | None = None
    priority: int = 1  # 4 = urgent, 1 = none
    project_id: str | None = None
    labels: list[str] = field(default_factory=list)
    is_overdue: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "description": self.description,
            "due": self.due,
            "due_date": self.due_date,
            "priority": self.priority,
            "project_id": self.project_id,
            "labels": self.labels,
            "is_overdue": self.is_overdue,
        }


@dataclass
class TaskBuckets:
    """Tasks grouped the way the dashboard shows them."""

    overdue: list[Task] = field(default_factory=list)
    today: list[Task] = field(default_factory=list)
    upcoming: list[Task] = field(default_factory=list)

    @property
    def active(self) -> list[Task]:
        """Overdue and today's tasks, overdue first then by priority."""
        return sorted(
            self.overdue + self.today,
            key=lambda t: (not t.is_overdue, -t.priority),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "overdue": [t.to_dict() for t in self.overdue],
            "today": [t.to_dict() for t in self.today],
            "upcoming": [t.to_dict() for t in self.upcoming],
        }


@dataclass
class Weather:
    """Current conditions and today's forecast."""

    location: str
    condition: str
    temp: str | None
    feels_like: str | None
    unit: str
    humidity: str | None = None
    wind_speed: str | None = None
    wind_unit: str = "mph"
    high: str | None = None
    low: str | None = None
    sunrise: str | None = None
    sunset: str | None = None
    uv_index: str | None = None
    chance_of_rain: str = "0"

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "condition": self.condition,
            "temp": self.temp,
            "feels_like": self.feels_like,
            "unit": self.unit,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "wind_unit": self.wind_unit,
            "high": self.high,
            "low": self.low,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
            "uv_index": self.uv_index,
            "chance_of_rain": self.chance_of_rain,
        }


@dataclass
class GitHubNotification:
    """An unread GitHub notification."""

    id: str
    title: str
    type: str
    repo: str
    reason: str = ""
    unread: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "repo": self.repo,
            "reason": self.reason,
            "unread": self.unread,
        }


@dataclass
class BatteryStatus:
    percent: int
    charging: bool

    @property
    def is_low(self) -> bool:
        return self.percent <= 20 and not self.charging

    def to_dict(self) -> dict[str, Any]:
        return {"percent": self.percent, "charging": self.charging}


@dataclass
class SystemHealth:
    battery: BatteryStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"battery": self.battery.to_dict() if self.battery else None}


@dataclass
class Quote:
    text: str
    author: str

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "author": self.author}


@dataclass
class GoogleStatus:
    """Authentication state of the ``gog`` CLI."""

    installed: bool = False
    authenticated: bool = False
    account: str | None = None
    services: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "installed": self.installed,
            "authenticated": self.authenticated,
            "account": self.account,
            "services": self.services,
        }


@dataclass
class DashboardData:
    """Everything one dashboard render needs."""

    timestamp: datetime
    greeting: str
    quote: Quote
    tasks: TaskBuckets = field(default_factory=TaskBuckets)
    events: list[CalendarEvent] = field(default_factory=list)
    focus_blocks: list[FocusBlock] = field(default_factory=list)
    emails: list[Email] = field(default_factory=list)
    weather: Weather | None = None
    github: list[GitHubNotification] = field(default_factory=list)
    system: SystemHealth | None = None

    @property
    def next_event(self) -> CalendarEvent | None:
        """First timed event that has not started yet."""
        for event in self.events:
            if not event.all_day and event.start > self.timestamp:
                return event
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "greeting": self.greeting,
            "quote": self.quote.to_dict(),
            "tasks": self.tasks.to_dict(),
            "calendar": {
                "events": [e.to_dict() for e in self.events],
                "focus_blocks": [b.to_dict() for b in self.focus_blocks],
            },
            "email": [e.to_dict() for e in self.emails],
            "weather": self.weather.to_dict() if self.weather else None,
            "github": [n.to_dict() for n in self.github],
            "system": self.system.to_dict() if self.system else None,
        }
