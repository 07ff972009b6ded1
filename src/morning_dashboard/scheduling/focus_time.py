"""Focus Time Calculation.

Finds the free stretches left in today's work window once calendar
events are placed on it, so the dashboard can suggest when to do
uninterrupted work.

Example with a 9:00-18:00 window, now = 8:00:
- Events 9:00-9:30 and 11:00-12:00
- Focus blocks: 9:30-11:00 (90 min) and 12:00-18:00 (360 min)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from morning_dashboard.core.config import CalendarConfig
from morning_dashboard.models import CalendarEvent, FocusBlock

logger = logging.getLogger(__name__)

DEFAULT_WORK_START_HOUR = 9
DEFAULT_WORK_END_HOUR = 18
DEFAULT_MIN_BLOCK_MINUTES = 30
DEFAULT_MAX_BLOCKS = 3


class FocusTimeCalculator:
    """Computes focus blocks from a day's timed calendar events."""

    def __init__(
        self,
        work_start_hour: int = DEFAULT_WORK_START_HOUR,
        work_end_hour: int = DEFAULT_WORK_END_HOUR,
        min_block_minutes: float = DEFAULT_MIN_BLOCK_MINUTES,
        max_blocks: int = DEFAULT_MAX_BLOCKS,
    ):
        """Initialize the calculator.

        Args:
            work_start_hour: Nominal start of the work day (local hour).
            work_end_hour: End-of-day cutoff (local hour, 24 allowed).
            min_block_minutes: Shortest gap worth reporting.
            max_blocks: Maximum number of blocks returned.
        """
        self.work_start_hour = work_start_hour
        self.work_end_hour = work_end_hour
        self.min_block_minutes = min_block_minutes
        self.max_blocks = max_blocks

    @classmethod
    def from_config(cls, config: CalendarConfig) -> FocusTimeCalculator:
        return cls(
            work_start_hour=config.work_start_hour,
            work_end_hour=config.work_end_hour,
            min_block_minutes=config.min_focus_minutes,
            max_blocks=config.max_focus_blocks,
        )

    def work_window(self, now: datetime) -> tuple[datetime, datetime]:
        """Return (window_start, window_end) for the day containing ``now``."""
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        work_start = midnight + timedelta(hours=self.work_start_hour)
        window_end = midnight + timedelta(hours=self.work_end_hour)
        return max(now, work_start), window_end

    def calculate(
        self,
        events: Iterable[CalendarEvent],
        now: datetime,
    ) -> list[FocusBlock]:
        """Find the free blocks between ``now`` and the end of the work day.

        Events already in progress at the window start still occupy the
        cursor. All-day events are ignored.

        Args:
            events: Today's calendar events, expected ordered by start.
            now: Current instant.

        Returns:
            Up to ``max_blocks`` FocusBlocks, earliest first.
        """
        window_start, window_end = self.work_window(now)
        if window_start >= window_end:
            return []

        timed = sorted(
            (
                e for e in events
                if not e.all_day and e.start < window_end and e.end > window_start
            ),
            key=lambda e: e.start,
        )

        blocks: list[FocusBlock] = []
        cursor = window_start

        for event in timed:
            if event.start > cursor:
                self._add_gap(blocks, cursor, event.start)
            cursor = max(cursor, event.start, event.end)

        if cursor < window_end:
            self._add_gap(blocks, cursor, window_end)

        logger.debug(
            f"Found {len(blocks)} focus blocks between "
            f"{window_start:%H:%M} and {window_end:%H:%M} across {len(timed)} events"
        )
        return blocks[: self.max_blocks]

    def _add_gap(self, blocks: list[FocusBlock], start: datetime, end: datetime) -> None:
        block = FocusBlock(start=start, end=end)
        if block.duration_minutes >= self.min_block_minutes:
            blocks.append(block)

    def todays_events(
        self,
        events: Iterable[CalendarEvent],
        now: datetime,
    ) -> list[CalendarEvent]:
        """Timed events that start on the same calendar day as ``now``."""
        todays = []
        for event in events:
            if event.all_day:
                continue
            start = event.start
            if start.tzinfo is not None and now.tzinfo is not None:
                start = start.astimezone(now.tzinfo)
            if start.date() == now.date():
                todays.append(event)
        return todays


def compute_focus_blocks(
    events: Iterable[CalendarEvent],
    now: datetime,
    work_start_hour: int = DEFAULT_WORK_START_HOUR,
    work_end_hour: int = DEFAULT_WORK_END_HOUR,
    min_block_minutes: float = DEFAULT_MIN_BLOCK_MINUTES,
    max_blocks: int = DEFAULT_MAX_BLOCKS,
) -> list[FocusBlock]:
    """Functional shortcut for ``FocusTimeCalculator(...).calculate``."""
    calculator = FocusTimeCalculator(
        work_start_hour=work_start_hour,
        work_end_hour=work_end_hour,
        min_block_minutes=min_block_minutes,
        max_blocks=max_blocks,
    )
    return calculator.calculate(events, now)
