"""API routes for data access."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from morning_dashboard import __version__
from morning_dashboard.collectors import collect_dashboard_data

router = APIRouter(tags=["api"])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@router.get("/data")
async def get_data(request: Request) -> dict[str, Any]:
    """Everything the dashboard shows, as JSON."""
    data = await collect_dashboard_data(request.app.state.config)
    return data.to_dict()
