"""Dashboard page route."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from morning_dashboard.collectors import collect_dashboard_data

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Full dashboard page, collected fresh on every request."""
    config = request.app.state.config
    data = await collect_dashboard_data(config)

    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "data": data,
            "config": config,
            "now": data.timestamp,
            "next_event": data.next_event,
        },
    )
