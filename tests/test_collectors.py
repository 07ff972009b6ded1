"""Tests for the data collectors."""

import asyncio
from datetime import date, datetime, timedelta, timezone

import pytest

from morning_dashboard.collectors import aggregate, gmail, runner, todoist
from morning_dashboard.collectors.calendar import date_range, events_between, parse_events
from morning_dashboard.collectors.github import parse_notifications
from morning_dashboard.collectors.gmail import parse_emails
from morning_dashboard.collectors.google import parse_auth_status
from morning_dashboard.collectors.system import parse_battery
from morning_dashboard.collectors.todoist import bucket_tasks
from morning_dashboard.collectors.weather import parse_weather
from morning_dashboard.models import TaskBuckets

from .conftest import make_event

UTC = timezone.utc


class TestRunner:
    def test_missing_program_returns_none(self):
        result = asyncio.run(runner.run_command(["mdash-definitely-not-installed-xyz"]))
        assert result is None

    def test_parse_json(self):
        assert runner.parse_json('{"a": 1}') == {"a": 1}
        assert runner.parse_json("") is None
        assert runner.parse_json(None) is None
        assert runner.parse_json("not json") is None


class TestGmail:
    def test_parse_threads(self):
        data = {
            "threads": [
                {
                    "id": "t1",
                    "from": "Alice Example <alice@example.com>",
                    "subject": "Lunch?",
                    "labels": ["UNREAD", "INBOX"],
                },
                {"id": "t2", "from": "", "subject": ""},
            ]
        }

        emails = parse_emails(data)

        assert [e.sender for e in emails] == ["Alice Example", "Unknown"]
        assert emails[0].labels == ["UNREAD", "INBOX"]
        assert emails[1].subject == "(no subject)"

    def test_parse_bare_list_and_messages(self):
        assert len(parse_emails([{"id": "1", "from": "a"}])) == 1
        assert parse_emails({"messages": [{"id": "2", "threadId": "x"}]})[0].thread_id == "x"
        assert parse_emails(None) == []

    def test_to_dict_uses_from_key(self):
        email = parse_emails([{"id": "1", "from": "Bob <b@x.io>", "subject": "Hi"}])[0]
        assert email.to_dict()["from"] == "Bob"

    def test_fetch_passes_account_and_caps_results(self, config, monkeypatch):
        calls = []

        async def fake_run(args, timeout=15.0):
            calls.append(args)
            return '[{"id": "1"}, {"id": "2"}, {"id": "3"}]'

        monkeypatch.setattr(gmail, "run_command", fake_run)
        config.google.account = "me@example.com"
        config.gmail.max_emails = 2

        emails = asyncio.run(gmail.fetch_emails(config))

        assert len(emails) == 2
        assert calls[0][:3] == ["gog", "gmail", "search"]
        assert "--account" in calls[0]
        assert calls[0][calls[0].index("--max") + 1] == "2"

    def test_disabled_fetches_nothing(self, config, monkeypatch):
        async def fail(*args, **kwargs):
            raise AssertionError("should not run")

        monkeypatch.setattr(gmail, "run_command", fail)
        config.gmail.enabled = False

        assert asyncio.run(gmail.fetch_emails(config)) == []


class TestCalendar:
    def test_all_day_events_sort_first(self):
        data = {
            "events": [
                {
                    "id": "b",
                    "summary": "Standup",
                    "start": {"dateTime": "2026-10-19T09:00:00Z"},
                    "end": {"dateTime": "2026-10-19T09:15:00Z"},
                    "hangoutLink": "https://meet.google.com/abc",
                },
                {
                    "id": "a",
                    "summary": "Holiday",
                    "start": {"date": "2026-10-19"},
                    "end": {"date": "2026-10-20"},
                },
            ]
        }

        events = parse_events(data, tz=UTC)

        assert [e.id for e in events] == ["a", "b"]
        assert events[0].all_day
        assert events[1].start == datetime(2026, 10, 19, 9, tzinfo=UTC)
        assert events[1].meet_link == "https://meet.google.com/abc"

    def test_conference_entry_point_and_defaults(self):
        data = [
            {
                "id": "c",
                "start": {"dateTime": "2026-10-19T10:00:00+00:00"},
                "conferenceData": {"entryPoints": [{"uri": "https://zoom.example/1"}]},
            }
        ]

        event = parse_events(data, tz=UTC)[0]

        assert event.summary == "(no title)"
        assert event.end == event.start
        assert event.meet_link == "https://zoom.example/1"

    def test_malformed_events_are_skipped(self):
        data = [
            {"id": "bad", "start": {"dateTime": "tomorrow-ish"}},
            {"id": "missing"},
            {"id": "ok", "start": {"dateTime": "2026-10-19T10:00:00Z"}},
        ]
        assert [e.id for e in parse_events(data, tz=UTC)] == ["ok"]

    def test_date_range(self):
        start, end = date_range(datetime(2026, 10, 19, 14, 30), 7, past_days=3)
        assert start == datetime(2026, 10, 16)
        assert end == datetime(2026, 10, 26)

    def test_events_between(self):
        events = [make_event("09:00", "10:00", summary="a"), make_event("12:00", "13:00", summary="b")]
        start = datetime(2026, 10, 19, 11)
        assert [e.summary for e in events_between(events, start, start + timedelta(hours=5))] == ["b"]


class TestTodoist:
    def test_buckets_deduplicate_in_order(self):
        overdue = [{"id": "1", "content": "Old", "due": {"date": "2026-10-17"}}]
        today = [
            {"id": "1", "content": "Old"},
            {"id": "2", "content": "Now", "priority": 4, "due": {"string": "today", "date": "2026-10-19"}},
        ]
        upcoming = [
            {"id": "2", "content": "Now", "due": {"date": "2026-10-21"}},
            {"id": "3", "content": "Soon", "due": {"date": "2026-10-22"}},
        ]

        buckets = bucket_tasks(overdue, today, upcoming, date(2026, 10, 19))

        assert [t.id for t in buckets.overdue] == ["1"]
        assert buckets.overdue[0].is_overdue
        assert [t.id for t in buckets.today] == ["2"]
        assert buckets.today[0].due == "today"
        assert [t.id for t in buckets.upcoming] == ["3"]

    def test_upcoming_horizon(self):
        upcoming = [
            {"id": "today", "content": "x", "due": {"date": "2026-10-19"}},
            {"id": "edge", "content": "x", "due": {"date": "2026-10-26"}},
            {"id": "far", "content": "x", "due": {"date": "2026-11-30"}},
            {"id": "undated", "content": "x"},
        ]

        buckets = bucket_tasks([], [], upcoming, date(2026, 10, 19), upcoming_days=7)

        assert [t.id for t in buckets.upcoming] == ["edge", "undated"]

    def test_active_orders_overdue_then_priority(self):
        buckets = bucket_tasks(
            [{"id": "o", "content": "x", "priority": 1}],
            [{"id": "a", "content": "x", "priority": 2}, {"id": "b", "content": "x", "priority": 4}],
            [],
            date(2026, 10, 19),
        )
        assert [t.id for t in buckets.active] == ["o", "b", "a"]

    def test_malformed_due_values(self):
        buckets = bucket_tasks(
            [],
            [{"id": "1", "content": "Call bank", "due": "tomorrow"}],
            [
                {"id": "2", "content": "Odd", "due": "next week"},
                {"id": "3", "content": "Empty", "due": {}},
                {"id": "4", "content": "Broken", "due": ["2026-10-20"]},
            ],
            date(2026, 10, 19),
        )

        assert buckets.today[0].due == "tomorrow"
        assert buckets.today[0].due_date is None
        assert [t.id for t in buckets.upcoming] == ["2", "3", "4"]

    def test_fetch_survives_unexpected_output(self, config, monkeypatch):
        outputs = {
            "today": '[{"id": "1", "content": "Call bank", "due": "tomorrow"}]',
            "overdue": '{"error": "not a list"}',
            "upcoming": '[{"id": "2", "content": "Later", "due": 7}]',
        }

        async def fake_run(args, timeout=15.0):
            return outputs[args[-1]]

        monkeypatch.setattr(todoist, "run_command", fake_run)

        buckets = asyncio.run(todoist.fetch_tasks(config, date(2026, 10, 19)))

        assert [t.id for t in buckets.today] == ["1"]
        assert buckets.overdue == []
        assert [t.id for t in buckets.upcoming] == ["2"]


WTTR = {
    "current_condition": [
        {
            "temp_C": "12",
            "temp_F": "54",
            "FeelsLikeC": "10",
            "FeelsLikeF": "50",
            "humidity": "70",
            "windspeedKmph": "15",
            "windspeedMiles": "9",
            "uvIndex": "2",
            "weatherDesc": [{"value": "Light rain"}],
        }
    ],
    "nearest_area": [{"areaName": [{"value": "Berlin"}]}],
    "weather": [
        {
            "maxtempC": "14",
            "mintempC": "8",
            "maxtempF": "57",
            "mintempF": "46",
            "astronomy": [{"sunrise": "07:31 AM", "sunset": "06:12 PM"}],
            "hourly": [{"chanceofrain": str(n * 10)} for n in range(8)],
        }
    ],
}


class TestWeather:
    def test_metric(self):
        weather = parse_weather(WTTR, units="metric", hour=14)

        assert weather.location == "Berlin"
        assert weather.condition == "Light rain"
        assert (weather.temp, weather.unit, weather.wind_unit) == ("12", "°C", "km/h")
        assert (weather.high, weather.low) == ("14", "8")
        assert weather.chance_of_rain == "40"

    def test_imperial(self):
        weather = parse_weather(WTTR, units="imperial")
        assert (weather.temp, weather.feels_like, weather.unit) == ("54", "50", "°F")
        assert weather.wind_speed == "9"

    def test_invalid_payload(self):
        assert parse_weather({}) is None
        assert parse_weather("nope") is None


class TestGitHub:
    def test_unread_only_with_limit(self):
        data = [
            {
                "id": str(n),
                "unread": n != 1,
                "reason": "review_requested",
                "subject": {"title": f"PR {n}", "type": "PullRequest"},
                "repository": {"full_name": "acme/api"},
            }
            for n in range(5)
        ]

        notifications = parse_notifications(data, limit=2)

        assert [n.id for n in notifications] == ["0", "2"]
        assert notifications[0].repo == "acme/api"
        assert notifications[0].type == "PullRequest"

    def test_non_list_payload(self):
        assert parse_notifications({"message": "Bad credentials"}) == []


class TestSystem:
    @pytest.mark.parametrize(
        "text, percent, charging",
        [
            ("Now drawing from 'AC Power'\n -InternalBattery-0\t95%; charged;", 95, True),
            ("Now drawing from 'Battery Power'\n -InternalBattery-0\t15%; discharging;", 15, False),
            ("Now drawing from 'Battery Power'\n -InternalBattery-0\t40%; charging;", 40, True),
        ],
    )
    def test_parse_battery(self, text, percent, charging):
        battery = parse_battery(text)
        assert battery.percent == percent
        assert battery.charging is charging

    def test_low_battery(self):
        assert parse_battery("Battery Power 15%; discharging").is_low
        assert not parse_battery("AC Power 15%; charging").is_low

    def test_unparseable(self):
        assert parse_battery(None) is None
        assert parse_battery("No batteries available") is None


class TestGoogleStatus:
    def test_authenticated(self):
        status = parse_auth_status(
            {"accounts": [{"email": "me@example.com", "services": ["gmail", "calendar"]}]}
        )
        assert status.authenticated
        assert status.account == "me@example.com"

    def test_no_accounts(self):
        status = parse_auth_status({"accounts": []})
        assert status.installed and not status.authenticated

    def test_malformed_accounts(self):
        for data in ({"accounts": ["me@example.com"]}, {"accounts": "me@example.com"}, [1, 2]):
            status = parse_auth_status(data)
            assert not status.authenticated
            assert status.account is None


class TestCollectDashboardData:
    @pytest.fixture
    def stub_sources(self, monkeypatch):
        events = [
            make_event("00:00", "23:59", summary="Holiday", all_day=True),
            make_event("09:00", "09:30", summary="Standup"),
            make_event("11:00", "12:00", summary="Review"),
        ]

        async def fetch_events(config, now):
            return events

        async def nothing(*args, **kwargs):
            return []

        async def no_value(*args, **kwargs):
            return None

        async def no_tasks(config, on):
            return TaskBuckets()

        monkeypatch.setattr(aggregate, "fetch_events", fetch_events)
        monkeypatch.setattr(aggregate, "fetch_emails", nothing)
        monkeypatch.setattr(aggregate, "fetch_notifications", nothing)
        monkeypatch.setattr(aggregate, "fetch_tasks", no_tasks)
        monkeypatch.setattr(aggregate, "fetch_weather", no_value)
        monkeypatch.setattr(aggregate, "fetch_system_health", no_value)
        return events

    def test_focus_blocks_from_todays_events(self, config, stub_sources):
        now = datetime(2026, 10, 19, 8, 0)

        data = asyncio.run(aggregate.collect_dashboard_data(config, now))

        assert data.greeting == "Good morning"
        assert data.events == stub_sources
        assert [(b.start.hour, b.start.minute, b.minutes) for b in data.focus_blocks] == [
            (9, 30, 90),
            (12, 0, 360),
        ]
        assert data.next_event.summary == "Standup"

    def test_focus_time_can_be_disabled(self, config, stub_sources):
        config.calendar.show_focus_time = False

        data = asyncio.run(aggregate.collect_dashboard_data(config, datetime(2026, 10, 19, 8, 0)))

        assert data.focus_blocks == []

    def test_proxy_replaces_gog(self, config, monkeypatch, stub_sources):
        async def from_proxy(config, now):
            return [], [make_event("10:00", "17:45", summary="Offsite")]

        monkeypatch.setattr(aggregate, "fetch_from_proxy", from_proxy)
        config.google.proxy_url = "http://host.docker.internal:3142"

        data = asyncio.run(aggregate.collect_dashboard_data(config, datetime(2026, 10, 19, 9, 0)))

        assert [e.summary for e in data.events] == ["Offsite"]
        assert [b.minutes for b in data.focus_blocks] == [60]
