"""Terminal rendering with Rich."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from morning_dashboard.core.config import DashboardConfig
from morning_dashboard.models import DashboardData, TaskBuckets
from morning_dashboard.utils.formatting import (
    format_date_long,
    format_duration,
    format_relative_time,
    format_time,
    truncate,
    weather_icon,
)

SECTIONS = ("tasks", "calendar", "email", "weather", "github")

PRIORITY_STYLES = {4: "red", 3: "yellow", 2: "blue"}

GITHUB_ICONS = {
    "PullRequest": "🔀",
    "Issue": "🐛",
    "Release": "🏷️",
    "Discussion": "💬",
}


def make_console(width: int, color: bool) -> Console:
    """Console for dashboard output; no styling at all when ``color`` is off."""
    return Console(width=width, color_system="auto" if color else None, highlight=False)


class TerminalRenderer:
    """Render DashboardData as boxed terminal sections."""

    def __init__(self, config: DashboardConfig, console: Console | None = None):
        self.config = config
        self.display = config.display
        self.console = console or make_console(self.display.width, self.display.color)

    def render(self, data: DashboardData, sections: Iterable[str] = ()) -> None:
        """Print the dashboard.

        Args:
            data: Collected dashboard data.
            sections: Only show these sections; everything when empty.
        """
        selected = set(sections)
        show_all = not selected

        def should_show(section: str) -> bool:
            return show_all or section in selected

        if show_all and not self.display.compact and self.console.is_terminal:
            self.console.clear()

        if show_all and self.display.show_greeting:
            self.render_header(data)

        if show_all and self.config.quote.enabled and not self.display.compact:
            self.render_quote(data)

        self.console.print()

        if should_show("tasks"):
            self._panel(*self.tasks_panel(data.tasks))
        if should_show("calendar"):
            self._panel(*self.calendar_panel(data))
        if should_show("email"):
            self._panel(*self.email_panel(data))
        if not show_all and should_show("weather"):
            self._panel(*self.weather_panel(data))
        if should_show("github") and data.github:
            self._panel(*self.github_panel(data))

        if show_all and self.display.show_summary:
            self.render_footer(data)

    def _panel(self, title: str, lines: list[str], style: str) -> None:
        self.console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]{title}[/bold]",
                border_style=style,
                width=self.display.width,
            )
        )
        self.console.print()

    def render_header(self, data: DashboardData) -> None:
        now = data.timestamp
        self.console.print()
        self.console.print(f"  ☀️  {data.greeting}!", style="bold cyan")
        self.console.print(f"  {format_date_long(now)} • {format_time(now)}", style="dim")

        weather = data.weather
        if weather:
            self.console.print(
                f"  {weather_icon(weather.condition)} {weather.temp}{weather.unit} "
                f"(feels {weather.feels_like}{weather.unit}) • {escape(weather.condition)}",
                style="dim",
            )

        battery = data.system.battery if data.system else None
        if battery and battery.is_low:
            self.console.print(f"  ⚠️  Battery low: {battery.percent}%", style="yellow")

        self.console.print()
        self.console.rule(characters="═", style="dim")

    def render_quote(self, data: DashboardData) -> None:
        self.console.print()
        self.console.print(f'  "{escape(data.quote.text)}"', style="dim italic")
        self.console.print(f"   — {escape(data.quote.author)}", style="dim")

    def tasks_panel(self, tasks: TaskBuckets) -> tuple[str, list[str], str]:
        active = tasks.active
        if not active and not tasks.upcoming:
            return "📋 TASKS", ["[dim]No tasks due today. Enjoy your day![/dim]"], "green"

        max_shown = self.display.max_tasks_shown
        content_width = self.display.width - 16
        lines = []
        for task in active[:max_shown]:
            style = PRIORITY_STYLES.get(task.priority)
            icon = f"[{style}]●[/{style}]" if style else "[dim]○[/dim]"
            overdue = f"[red]{escape('[OVERDUE]')}[/red] " if task.is_overdue else ""
            due = f" [dim]({escape(task.due)})[/dim]" if task.due else ""
            lines.append(f"{icon} {overdue}{escape(truncate(task.content, content_width))}{due}")

        if len(active) > max_shown:
            lines.append(f"[dim]  ... and {len(active) - max_shown} more tasks[/dim]")

        if self.config.todoist.show_upcoming and tasks.upcoming:
            lines.append("")
            lines.append("[dim]── Upcoming ──[/dim]")
            for task in tasks.upcoming[:3]:
                content = escape(truncate(task.content, self.display.width - 20))
                lines.append(f"[dim]  ○ {content} ({escape(task.due or task.due_date or '')})[/dim]")
            if len(tasks.upcoming) > 3:
                lines.append(f"[dim]    ... and {len(tasks.upcoming) - 3} more upcoming[/dim]")

        title = f"📋 TASKS ({len(active)} today"
        if tasks.overdue:
            title += f", [red]{len(tasks.overdue)} overdue[/red]"
        return title + ")", lines, "yellow"

    def calendar_panel(self, data: DashboardData) -> tuple[str, list[str], str]:
        events = data.events
        if not events:
            return "📅 CALENDAR", ["[dim]No events scheduled for today.[/dim]"], "blue"

        now = data.timestamp
        next_event = data.next_event
        compact = self.display.compact
        max_shown = self.display.max_events_shown
        content_width = self.display.width - 24

        lines = []
        for event in events[:max_shown]:
            past = event.is_past(now)
            if event.all_day:
                when = "[magenta]ALL DAY[/magenta] "
            else:
                when = f"[{'dim' if past else 'cyan'}]{format_time(event.start):<8}[/]"
                if next_event is not None and event.id == next_event.id:
                    when += f" [green]← {format_relative_time(event.start, now)}[/green]"

            summary = escape(truncate(event.summary, content_width))
            lines.append(f"{when} [dim]{summary}[/dim]" if past else f"{when} {summary}")

            if event.location and not compact:
                lines.append(f"[dim]         📍 {escape(truncate(event.location, content_width - 3))}[/dim]")
            if event.meet_link and not compact:
                lines.append(f"[dim]         🔗 {escape(truncate(event.meet_link, content_width - 3))}[/dim]")

        if len(events) > max_shown:
            lines.append(f"[dim]  ... and {len(events) - max_shown} more events[/dim]")

        if data.focus_blocks and not compact:
            lines.append("")
            lines.append("[green]── Focus Time ──[/green]")
            for block in data.focus_blocks:
                lines.append(
                    f"[green]  ◆ {format_time(block.start)} — "
                    f"{format_duration(block.minutes)} available[/green]"
                )

        return f"📅 CALENDAR ({len(events)})", lines, "blue"

    def email_panel(self, data: DashboardData) -> tuple[str, list[str], str]:
        emails = data.emails
        if not emails:
            return "📧 INBOX", ["[dim]No unread emails. Inbox zero! 🎉[/dim]"], "magenta"

        max_shown = self.display.max_emails_shown
        from_width = 18
        subject_width = self.display.width - from_width - 8
        lines = []
        for email in emails[:max_shown]:
            sender = escape(f"{truncate(email.sender, from_width):<{from_width}}")
            lines.append(f"[cyan]{sender}[/cyan] {escape(truncate(email.subject, subject_width))}")

        if len(emails) > max_shown:
            lines.append(f"[dim]  ... and {len(emails) - max_shown} more emails[/dim]")

        return f"📧 INBOX ({len(emails)} unread)", lines, "magenta"

    def weather_panel(self, data: DashboardData) -> tuple[str, list[str], str]:
        weather = data.weather
        if not weather:
            return "🌤️ WEATHER", ["[dim]Weather unavailable.[/dim]"], "cyan"

        lines = [
            f"{weather_icon(weather.condition)} [bold]{weather.temp}{weather.unit}[/bold] "
            f"{escape(weather.condition)} in {escape(weather.location)}",
            f"[dim]Feels like {weather.feels_like}{weather.unit} • "
            f"High/Low {weather.high}° / {weather.low}°[/dim]",
            f"[dim]Humidity {weather.humidity}% • Wind {weather.wind_speed} {weather.wind_unit}[/dim]",
        ]
        if weather.chance_of_rain and weather.chance_of_rain.isdigit() and int(weather.chance_of_rain) > 0:
            lines.append(f"[dim]Rain {weather.chance_of_rain}%[/dim]")
        if weather.sunrise:
            lines.append(f"[dim]Sun ↑{weather.sunrise} ↓{weather.sunset}[/dim]")
        return "🌤️ WEATHER", lines, "cyan"

    def github_panel(self, data: DashboardData) -> tuple[str, list[str], str]:
        lines = []
        for notification in data.github:
            icon = GITHUB_ICONS.get(notification.type, "📌")
            repo = escape(truncate(notification.repo, 20))
            title = escape(truncate(notification.title, self.display.width - 30))
            lines.append(f"{icon} [dim]{repo}[/dim] {title}")
        return f"🐙 GITHUB ({len(data.github)})", lines, "bright_black"

    def render_footer(self, data: DashboardData) -> None:
        self.console.rule(characters="═", style="dim")
        self.console.print()

        counts = [
            (len(data.tasks.overdue), "red", "overdue"),
            (len(data.tasks.today), "yellow", "tasks"),
            (len(data.events), "blue", "events"),
            (len(data.emails), "magenta", "emails"),
            (len(data.github), "bright_black", "notifications"),
        ]
        summary = [f"[{style}]{count} {label}[/{style}]" for count, style, label in counts if count]

        if summary:
            self.console.print(f"[dim]  Today:[/dim] {' • '.join(summary)}")
        else:
            self.console.print("[green]  ✨ All clear! Have a great day.[/green]")
        self.console.print()
