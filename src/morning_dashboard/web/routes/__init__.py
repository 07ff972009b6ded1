"""Web routes for the Morning Dashboard GUI."""

from morning_dashboard.web.routes import api, dashboard

__all__ = ["api", "dashboard"]
