"""Data collectors for external tools and APIs."""

from morning_dashboard.collectors.aggregate import collect_dashboard_data

__all__ = ["collect_dashboard_data"]
