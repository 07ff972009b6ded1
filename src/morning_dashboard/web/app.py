"""FastAPI web application for the Morning Dashboard GUI."""

from __future__ import annotations

import logging
import socket
import threading
import webbrowser
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates

from morning_dashboard import __version__
from morning_dashboard.core.config import DashboardConfig, get_config
from morning_dashboard.utils.formatting import (
    format_date_long,
    format_duration,
    format_time,
    weather_icon,
)

logger = logging.getLogger(__name__)

# Paths
TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_templates() -> Jinja2Templates:
    """Jinja2 templates with the dashboard's formatting filters."""
    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.filters["time"] = format_time
    templates.env.filters["date_long"] = format_date_long
    templates.env.filters["duration"] = format_duration
    templates.env.filters["weather_icon"] = weather_icon
    return templates


def create_app(config: DashboardConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Morning Dashboard",
        description="Morning productivity dashboard",
        version=__version__,
    )

    # The JSON endpoint is meant for scripts and widgets on other origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.config = config or get_config()
    app.state.templates = create_templates()

    from morning_dashboard.web.routes import api, dashboard

    app.include_router(dashboard.router)
    app.include_router(api.router, prefix="/api")

    return app


def port_available(host: str, port: int) -> bool:
    """Check whether ``host:port`` can be bound."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def open_browser_later(url: str, delay: float = 1.0) -> None:
    """Open ``url`` once the server has had a moment to start."""
    timer = threading.Timer(delay, webbrowser.open, args=(url,))
    timer.daemon = True
    timer.start()


def run_server(
    config: DashboardConfig,
    host: str | None = None,
    port: int | None = None,
    open_browser: bool = True,
) -> None:
    """Run the web server until interrupted."""
    import uvicorn

    host = host or config.gui.host
    port = port or config.gui.port
    url = f"http://{'localhost' if host in ('127.0.0.1', '0.0.0.0') else host}:{port}"

    logger.info(f"Starting dashboard at {url}")
    if open_browser:
        open_browser_later(url)

    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level=config.log_level.lower(),
    )
