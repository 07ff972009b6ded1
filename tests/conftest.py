"""
Pytest configuration and shared fixtures.
"""

import os
from datetime import datetime, timedelta

import pytest

from morning_dashboard.core import config as config_module
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import (
    CalendarEvent,
    DashboardData,
    Email,
    FocusBlock,
    GitHubNotification,
    Quote,
    Task,
    TaskBuckets,
    Weather,
)

NOW = datetime(2026, 10, 19, 8, 30)


def make_event(start, end, summary="Meeting", event_id=None, all_day=False, **kwargs):
    """CalendarEvent on 2026-10-19 from "HH:MM" strings."""
    day = NOW.date().isoformat()
    return CalendarEvent(
        id=event_id or f"{summary}-{start}",
        summary=summary,
        start=datetime.fromisoformat(f"{day}T{start}"),
        end=datetime.fromisoformat(f"{day}T{end}"),
        all_day=all_day,
        **kwargs,
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from the user's config files and MDASH_* variables."""
    for key in list(os.environ):
        if key.startswith("MDASH_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path / "config-dir")
    monkeypatch.setattr(config_module, "default_config_paths", lambda: [])
    return tmp_path


@pytest.fixture
def config():
    """Default configuration."""
    return DashboardConfig.from_document(DashboardConfig.defaults())


@pytest.fixture
def sample_data():
    """Dashboard data covering every section."""
    return DashboardData(
        timestamp=NOW,
        greeting="Good morning",
        quote=Quote("Done is better than perfect.", "Sheryl Sandberg"),
        tasks=TaskBuckets(
            overdue=[Task(id="1", content="File taxes", priority=4, due="yesterday", is_overdue=True)],
            today=[Task(id="2", content="Review <script>alert(1)</script> PR", priority=2, due="today")],
            upcoming=[Task(id="3", content="Plan offsite", due="Friday", due_date="2026-10-23")],
        ),
        events=[
            make_event("00:00", "23:59", summary="Team holiday", all_day=True),
            make_event("09:00", "09:30", summary="Standup", location="Room 4"),
            make_event("11:00", "12:00", summary="Design review", meet_link="https://meet.example.com/abc"),
        ],
        focus_blocks=[
            FocusBlock(start=NOW.replace(hour=9, minute=30), end=NOW.replace(hour=11, minute=0)),
            FocusBlock(start=NOW.replace(hour=12, minute=0), end=NOW.replace(hour=18, minute=0)),
        ],
        emails=[Email(id="m1", sender="Alice", subject="Quarterly numbers")],
        weather=Weather(
            location="Berlin",
            condition="Partly cloudy",
            temp="12",
            feels_like="10",
            unit="°C",
            humidity="70",
            wind_speed="15",
            wind_unit="km/h",
            high="14",
            low="8",
        ),
        github=[
            GitHubNotification(id="n1", title="Fix flaky test", type="PullRequest", repo="acme/api"),
        ],
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def later():
    return NOW + timedelta(hours=1)
