"""Weather from wttr.in."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any
from urllib.parse import quote

import aiohttp

from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import Weather

logger = logging.getLogger(__name__)

WTTR_URL = "https://wttr.in/{location}?format=j1"


def _first_value(items: Any) -> str | None:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0].get("value")
    return None


def parse_weather(
    data: Any,
    units: str = "imperial",
    location: str = "",
    hour: int = 0,
) -> Weather | None:
    """Build a Weather from wttr.in ``format=j1`` JSON."""
    if not isinstance(data, dict) or not data.get("current_condition"):
        return None

    metric = units == "metric"
    current = data["current_condition"][0]
    today = (data.get("weather") or [{}])[0]
    astronomy = (today.get("astronomy") or [{}])[0]
    hourly = today.get("hourly") or []
    slot = hourly[hour // 3] if len(hourly) > hour // 3 else {}
    area = (data.get("nearest_area") or [{}])[0]

    return Weather(
        location=_first_value(area.get("areaName")) or location or "Unknown",
        condition=_first_value(current.get("weatherDesc")) or "Unknown",
        temp=current.get("temp_C" if metric else "temp_F"),
        feels_like=current.get("FeelsLikeC" if metric else "FeelsLikeF"),
        unit="°C" if metric else "°F",
        humidity=current.get("humidity"),
        wind_speed=current.get("windspeedKmph" if metric else "windspeedMiles"),
        wind_unit="km/h" if metric else "mph",
        high=today.get("maxtempC" if metric else "maxtempF"),
        low=today.get("mintempC" if metric else "mintempF"),
        sunrise=astronomy.get("sunrise"),
        sunset=astronomy.get("sunset"),
        uv_index=current.get("uvIndex"),
        chance_of_rain=slot.get("chanceofrain") or "0",
    )


async def fetch_weather(config: DashboardConfig, now: datetime) -> Weather | None:
    """Current conditions for the configured location."""
    if not config.weather.enabled:
        return None

    url = WTTR_URL.format(location=quote(config.weather.location))
    timeout = aiohttp.ClientTimeout(total=config.weather_timeout)
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.warning(f"Weather unavailable: {e}")
        return None

    return parse_weather(data, config.weather.units, config.weather.location, now.hour)
