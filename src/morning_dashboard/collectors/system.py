"""System health (battery) on macOS."""

from __future__ import annotations

import re
import sys

from morning_dashboard.collectors.runner import run_command
from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import BatteryStatus, SystemHealth


def parse_battery(text: str | None) -> BatteryStatus | None:
    """Parse ``pmset -g batt`` output."""
    if not text:
        return None
    match = re.search(r"(\d+)%", text)
    if not match:
        return None
    charging = "AC Power" in text or re.search(r"\bcharging\b", text) is not None
    return BatteryStatus(percent=int(match.group(1)), charging=charging)


async def fetch_system_health(config: DashboardConfig) -> SystemHealth | None:
    if not config.system.enabled:
        return None

    battery = None
    if config.system.show_battery and sys.platform == "darwin":
        battery = parse_battery(
            await run_command(["pmset", "-g", "batt"], timeout=config.command_timeout)
        )

    return SystemHealth(battery=battery) if battery else None
