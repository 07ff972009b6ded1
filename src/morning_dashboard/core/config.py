"""Configuration management with Pydantic, JSON/YAML files and layered overrides."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "morning-dashboard"


class ConfigError(ValueError):
    """The effective configuration failed validation."""


class GmailConfig(BaseModel):
    """Unread email section."""

    enabled: bool = True
    max_emails: int = Field(default=10, ge=1)
    query: str = Field(default="is:unread newer_than:3d", description="Gmail search query")


class CalendarConfig(BaseModel):
    """Calendar section and focus-time settings."""

    enabled: bool = True
    id: str = Field(default="primary", description="Calendar ID passed to gog")
    show_focus_time: bool = True
    lookahead_days: int = Field(default=1, ge=1)
    work_start_hour: int = Field(default=9, ge=0, le=24)
    work_end_hour: int = Field(default=18, ge=0, le=24)
    min_focus_minutes: int = Field(default=30, ge=0)
    max_focus_blocks: int = Field(default=3, ge=0)


class TodoistConfig(BaseModel):
    """Todoist task section."""

    enabled: bool = True
    cli_path: str = Field(
        default_factory=lambda: str(Path.home() / "clawd/skills/todoist/scripts/todoist")
    )
    show_upcoming: bool = True
    upcoming_days: int = Field(default=7, ge=1)


class WeatherConfig(BaseModel):
    """Weather section (wttr.in)."""

    enabled: bool = True
    location: str = Field(default="", description="Empty means wttr.in guesses from IP")
    units: str = Field(default="imperial", pattern="^(imperial|metric)$")


class QuoteConfig(BaseModel):
    enabled: bool = True


class GitHubConfig(BaseModel):
    """GitHub notifications section."""

    enabled: bool = True
    max_notifications: int = Field(default=5, ge=0)


class SystemConfig(BaseModel):
    enabled: bool = True
    show_battery: bool = True


class GoogleConfig(BaseModel):
    """Google account options shared by the gmail and calendar sources."""

    account: str = Field(default="", description="Passed to gog as --account")
    proxy_url: str = Field(default="", description="Read Google data from a running proxy")


class GuiConfig(BaseModel):
    """Web dashboard configuration."""

    host: str = Field(default="127.0.0.1", description="Bind to localhost only")
    port: int = Field(default=3141, ge=1, le=65535)
    auto_refresh: bool = True
    refresh_interval: int = Field(default=300, ge=10, description="Seconds between reloads")
    theme: str = Field(default="auto", pattern="^(auto|light|dark)$")


class ProxyConfig(BaseModel):
    """Google data proxy configuration."""

    host: str = "0.0.0.0"
    port: int = Field(default=3142, ge=1, le=65535)
    past_days: int = Field(default=3, ge=0)
    lookahead_days: int = Field(default=7, ge=1)


class DisplayConfig(BaseModel):
    """Terminal output configuration."""

    width: int = Field(default=80, ge=40)
    max_tasks_shown: int = Field(default=12, ge=1)
    max_emails_shown: int = Field(default=6, ge=1)
    max_events_shown: int = Field(default=8, ge=1)
    compact: bool = False
    color: bool = True
    show_greeting: bool = True
    show_summary: bool = True


class DashboardConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MDASH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    command_timeout: float = Field(default=15.0, gt=0, description="Seconds per external command")
    weather_timeout: float = Field(default=5.0, gt=0)

    # Sub-configurations
    gmail: GmailConfig = Field(default_factory=GmailConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    todoist: TodoistConfig = Field(default_factory=TodoistConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    quote: QuoteConfig = Field(default_factory=QuoteConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
    google: GoogleConfig = Field(default_factory=GoogleConfig)
    gui: GuiConfig = Field(default_factory=GuiConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment variables beat config files
        return env_settings, init_settings, file_secret_settings

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        """Built-in default document, untouched by the environment."""
        return cls.model_construct().model_dump(mode="json")

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> DashboardConfig:
        """Validate a resolved configuration tree."""
        try:
            return cls(**document)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(f"Invalid configuration: {problems}") from e

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        search_paths: list[Path] | None = None,
    ) -> DashboardConfig:
        """Load configuration from files, environment variables, and defaults.

        Priority (highest to lowest):
        1. Environment variables (MDASH_*, also read from CONFIG_DIR/.env)
        2. Explicit config file (--config)
        3. Config files in the standard locations
        4. Default values
        """
        env_file = CONFIG_DIR / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        resolver = ConfigResolver(search_paths=search_paths)
        return cls.from_document(resolver.load(config_path))

    def save(self, config_path: Path | None = None) -> Path:
        """Write the current configuration to a JSON or YAML file."""
        config_path = config_path or CONFIG_DIR / "config.json"
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json")
        with open(config_path, "w") as f:
            if config_path.suffix in (".yaml", ".yml"):
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)
                f.write("\n")

        logger.info(f"Configuration written to {config_path}")
        return config_path


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` on top of ``base`` without mutating either.

    Mappings present on both sides are merged key by key; any other value
    (scalars and lists included) from ``override`` replaces the base value.
    """
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            result[key] = deep_merge(base[key], value)
        else:
            result[key] = value
    return result


def resolve(
    defaults: Mapping[str, Any],
    overrides: Iterable[Mapping[str, Any] | None],
) -> dict[str, Any]:
    """Apply override documents in order on top of the defaults.

    Later documents win. ``None`` stands for an absent document.
    """
    result = dict(defaults)
    for document in overrides:
        if document:
            result = deep_merge(result, document)
    return result


def default_config_paths() -> list[Path]:
    """Standard config file locations, highest priority first."""
    return [
        CONFIG_DIR / "config.json",
        CONFIG_DIR / "config.yaml",
        CONFIG_DIR / "config.yml",
        Path.home() / ".morning-dashboard.json",
        Path.cwd() / "config.json",
    ]


class ConfigResolver:
    """Find, parse and merge configuration documents."""

    def __init__(
        self,
        search_paths: list[Path] | None = None,
        defaults: Mapping[str, Any] | None = None,
    ):
        """Initialize the resolver.

        Args:
            search_paths: Config file locations, highest priority first.
            defaults: Floor document; the model defaults when omitted.
        """
        self.search_paths = search_paths if search_paths is not None else default_config_paths()
        self.defaults = dict(defaults) if defaults is not None else DashboardConfig.defaults()

    def candidate_paths(self, config_path: Path | None = None) -> list[Path]:
        """All locations to consult, highest priority first, without duplicates."""
        paths = ([config_path] if config_path else []) + list(self.search_paths)
        seen: set[Path] = set()
        unique = []
        for path in paths:
            key = path.expanduser().resolve()
            if key not in seen:
                seen.add(key)
                unique.append(path.expanduser())
        return unique

    def read_document(self, path: Path) -> dict[str, Any] | None:
        """Parse one override document.

        Returns None when the file is missing or cannot be parsed.
        """
        if not path.is_file():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix in (".yaml", ".yml"):
                    document = yaml.safe_load(f) or {}
                else:
                    document = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Could not parse config at {path}: {e}")
            return None

        if not isinstance(document, dict):
            logger.warning(f"Ignoring config at {path}: top level must be an object")
            return None

        logger.debug(f"Loaded config from {path}")
        return document

    def load_documents(self, config_path: Path | None = None) -> list[dict[str, Any]]:
        """Readable override documents, lowest priority first."""
        if config_path and not config_path.expanduser().is_file():
            logger.warning(f"Config file not found: {config_path}")

        documents = []
        for path in reversed(self.candidate_paths(config_path)):
            document = self.read_document(path)
            if document is not None:
                documents.append(document)
        return documents

    def load(self, config_path: Path | None = None) -> dict[str, Any]:
        """Effective configuration tree for this invocation."""
        return resolve(self.defaults, self.load_documents(config_path))


@lru_cache
def get_config() -> DashboardConfig:
    """Get cached configuration instance."""
    return DashboardConfig.load()
