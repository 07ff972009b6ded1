"""Google data proxy.

Runs on the host where gog can reach its stored credentials and serves
email and calendar data to a dashboard running elsewhere (for example in
a container) that sets ``google.proxy_url``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from morning_dashboard import __version__
from morning_dashboard.collectors.calendar import date_range, fetch_raw_events
from morning_dashboard.collectors.gmail import fetch_emails
from morning_dashboard.collectors.google import fetch_auth_status
from morning_dashboard.core.config import DashboardConfig

logger = logging.getLogger(__name__)


def raw_event_list(data: Any) -> list[dict[str, Any]]:
    """gog returns ``{"events": [...]}`` or a bare list."""
    if isinstance(data, dict):
        data = data.get("events")
    return [e for e in data if isinstance(e, dict)] if isinstance(data, list) else []


def create_proxy_app(config: DashboardConfig) -> FastAPI:
    """Create the proxy application."""
    app = FastAPI(title="Morning Dashboard Google proxy", version=__version__)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"])

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse({"error": "Not found"}, status_code=404)
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/google")
    async def google() -> dict[str, Any]:
        """Unread email, raw calendar events and gog auth status."""
        now = datetime.now().astimezone()
        start, end = date_range(now, config.proxy.lookahead_days, config.proxy.past_days)

        emails = await fetch_emails(config)
        events = raw_event_list(await fetch_raw_events(config, start, end))
        status = await fetch_auth_status(config)

        logger.info(f"Served {len(emails)} emails and {len(events)} events")
        return {
            "email": [e.to_dict() for e in emails],
            "calendar": events,
            "status": status.to_dict(),
        }

    return app


def run_proxy(config: DashboardConfig, host: str | None = None, port: int | None = None) -> None:
    """Run the proxy server until interrupted."""
    import uvicorn

    uvicorn.run(
        create_proxy_app(config),
        host=host or config.proxy.host,
        port=port or config.proxy.port,
        log_level=config.log_level.lower(),
    )
