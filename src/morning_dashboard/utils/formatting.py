"""Human-readable formatting shared by the terminal and web renderers."""

from __future__ import annotations

import math
from datetime import datetime

# Checked in order after the sunny and partly cloudy cases
WEATHER_ICONS = [
    (("cloud", "overcast"), "☁️"),
    (("rain", "drizzle"), "🌧️"),
    (("thunder", "storm"), "⛈️"),
    (("snow",), "🌨️"),
    (("fog", "mist"), "🌫️"),
    (("wind",), "💨"),
]


def truncate(text: str | None, length: int) -> str:
    """Shorten text to ``length`` characters, marking the cut with an ellipsis."""
    if not text:
        return ""
    text = str(text)
    if len(text) <= length:
        return text
    return text[: max(0, length - 1)] + "…"


def format_time(dt: datetime) -> str:
    """Format as ``9:05 AM``."""
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def format_date_long(dt: datetime) -> str:
    """Format as ``Monday, October 19, 2026``."""
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def format_duration(minutes: int) -> str:
    """Format a minute count as ``1h 30m``, ``2h`` or ``45m``."""
    if minutes >= 60:
        hours, mins = divmod(minutes, 60)
        return f"{hours}h {mins}m" if mins else f"{hours}h"
    return f"{minutes}m"


def format_relative_time(target: datetime, now: datetime) -> str:
    """Describe how far in the future ``target`` is."""
    mins = math.floor((target - now).total_seconds() / 60)
    if mins < 1:
        return "now"
    if mins < 60:
        return f"in {mins}m"
    hours = mins // 60
    if hours < 24:
        return f"in {hours}h {mins % 60}m"
    return f"in {hours // 24}d"


def get_greeting(now: datetime) -> str:
    """Time-appropriate greeting."""
    if now.hour < 12:
        return "Good morning"
    if now.hour < 17:
        return "Good afternoon"
    return "Good evening"


def weather_icon(condition: str | None) -> str:
    """Emoji for a weather description."""
    cond = (condition or "").lower()
    if "sun" in cond or "clear" in cond:
        return "☀️"
    if "cloud" in cond and "part" in cond:
        return "⛅"
    for keywords, icon in WEATHER_ICONS:
        if any(k in cond for k in keywords):
            return icon
    return "🌡️"
