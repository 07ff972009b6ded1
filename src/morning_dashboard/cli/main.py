"""CLI commands for Morning Dashboard using Typer."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from morning_dashboard import __version__
from morning_dashboard.core.config import CONFIG_DIR, ConfigError, DashboardConfig

# Initialize Typer app
app = typer.Typer(
    name="mdash",
    help="Morning productivity dashboard for the terminal and browser.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()


def setup_logging(log_level: str) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Reduce noise from external libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def load_config(config_path: Path | None, log_level: str | None = None) -> DashboardConfig:
    """Resolve configuration and set up logging, exiting on invalid config."""
    setup_logging(log_level or "WARNING")
    try:
        config = DashboardConfig.load(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not log_level:
        logging.getLogger().setLevel(config.log_level)
    return config


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"morning-dashboard v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    compact: bool = typer.Option(False, "--compact", "-c", help="Compact output mode"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colors"),
    config_path: Path = typer.Option(None, "--config", help="Use custom config file"),
    section: list[str] = typer.Option(
        None, "--section", "-s", help="Show a specific section (repeatable)"
    ),
    tasks: bool = typer.Option(False, "--tasks", help="Show only tasks"),
    calendar: bool = typer.Option(False, "--calendar", help="Show only calendar"),
    email: bool = typer.Option(False, "--email", help="Show only emails"),
    weather: bool = typer.Option(False, "--weather", help="Show only weather"),
    github: bool = typer.Option(False, "--github", help="Show only GitHub notifications"),
    log_level: str = typer.Option(
        None, "--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    ),
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version number",
        callback=_version_callback, is_eager=True,
    ),
) -> None:
    """Show the morning dashboard.

    Config files are read from ~/.config/morning-dashboard/config.json,
    ~/.morning-dashboard.json and ./config.json; --config takes priority.
    """
    ctx.obj = {"config_path": config_path, "log_level": log_level}
    if ctx.invoked_subcommand is not None:
        return

    from morning_dashboard.collectors import collect_dashboard_data
    from morning_dashboard.render.terminal import SECTIONS, TerminalRenderer, make_console

    sections = list(section or [])
    for name, selected in (
        ("tasks", tasks),
        ("calendar", calendar),
        ("email", email),
        ("weather", weather),
        ("github", github),
    ):
        if selected:
            sections.append(name)

    unknown = sorted(set(sections) - set(SECTIONS))
    if unknown:
        console.print(
            f"[red]Error: Unknown section(s): {', '.join(unknown)}. "
            f"Choose from {', '.join(SECTIONS)}.[/red]"
        )
        raise typer.Exit(1)

    config = load_config(config_path, log_level)
    if compact:
        config.display.compact = True
    if no_color:
        config.display.color = False

    try:
        data = asyncio.run(collect_dashboard_data(config))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(data.to_dict(), indent=2, ensure_ascii=False))
        return

    renderer = TerminalRenderer(config, make_console(config.display.width, config.display.color))
    renderer.render(data, sections)


@app.command()
def gui(
    ctx: typer.Context,
    port: int = typer.Option(None, "--port", "-p", help="Server port (default: 3141)"),
    host: str = typer.Option(None, "--host", help="Host to bind to"),
    no_browser: bool = typer.Option(False, "--no-browser", help="Don't open a browser"),
) -> None:
    """Launch the web dashboard in the browser."""
    from morning_dashboard.web.app import port_available, run_server

    config = load_config(ctx.obj["config_path"], ctx.obj["log_level"])

    # Use config values if not overridden
    host = host or config.gui.host
    port = port or config.gui.port

    if not port_available(host, port):
        console.print(f"\n[red]Error: Port {port} is already in use.[/red]")
        console.print(f"Try: mdash gui --port {port + 1}\n")
        raise typer.Exit(1)

    url = f"http://localhost:{port}"
    console.print("\n[bold]☀️  Morning Dashboard GUI[/bold]")
    console.print("━" * 34)
    console.print(f"Server running at: [blue]{url}[/blue]")
    console.print(f"API endpoint: [blue]{url}/api/data[/blue]")
    console.print("\nPress Ctrl+C to stop\n")

    try:
        run_server(config, host=host, port=port, open_browser=not no_browser)
    except KeyboardInterrupt:
        console.print("\n[yellow]Dashboard stopped[/yellow]")


@app.command()
def proxy(
    ctx: typer.Context,
    port: int = typer.Option(None, "--port", "-p", help="Proxy port (default: 3142)"),
    host: str = typer.Option(None, "--host", help="Host to bind to"),
) -> None:
    """Serve Google email and calendar data to a remote dashboard."""
    from morning_dashboard.web.proxy import run_proxy

    config = load_config(ctx.obj["config_path"], ctx.obj["log_level"])
    port = port or config.proxy.port

    console.print(f"[green]🔗 Google proxy running on http://localhost:{port}[/green]")
    console.print("   /health - Health check")
    console.print("   /google - Email + Calendar data")

    try:
        run_proxy(config, host=host, port=port)
    except KeyboardInterrupt:
        console.print("\n[yellow]Proxy stopped[/yellow]")


@app.command()
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = load_config(ctx.obj["config_path"], ctx.obj["log_level"])

    table = Table(title="Morning Dashboard Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")

    for key, value in config.model_dump(mode="json").items():
        if isinstance(value, dict):
            table.add_row(f"[bold]{key}[/bold]", "")
            for sub_key, sub_value in value.items():
                table.add_row(f"  {sub_key}", json.dumps(sub_value))
        else:
            table.add_row(key, json.dumps(value))

    console.print(table)


@app.command()
def config_init(
    ctx: typer.Context,
    path: Path = typer.Option(None, "--path", help="Where to write (default: ~/.config/morning-dashboard/config.json)"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write the current configuration to a file."""
    config = load_config(ctx.obj["config_path"], ctx.obj["log_level"])
    path = path or CONFIG_DIR / "config.json"

    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    config.save(path)
    console.print(f"[green]Configuration written to {path}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"morning-dashboard v{__version__}")


if __name__ == "__main__":
    app()
