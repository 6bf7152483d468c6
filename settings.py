"""
Runtime configuration for the standup reporter.
Secrets come from the environment (.env supported), tuning from config.yaml.
"""

import logging
import os
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# Leading YYYY-M-D; any time or zone suffix is ignored.
HOLIDAY_RE = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?:$|[T ])")

REQUIRED_ENV = [
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REFRESH_TOKEN",
    "GOOGLE_CALENDAR_ID",
    "LINEAR_API_KEY",
    "SLACK_API_TOKEN",
]


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    google_client_id: str
    google_client_secret: str
    google_refresh_token: str
    google_calendar_id: str
    linear_api_key: str
    slack_api_token: str
    slack_standup_channel: str
    slack_user_id: str
    use_standup_channel: bool
    holidays: frozenset[str]
    weather_api_key: str = ""
    anthropic_api_key: str = ""
    timezone: str = "America/Denver"
    in_progress_status: str = "In Progress"
    submitted_status: str = "Code Review"
    merged_status: str = "Testing"
    latitude: float = 40.233845
    longitude: float = -111.658531
    greeting_model: str = "claude-sonnet-4-6"
    greeting_max_tokens: int = 50
    log_level: str = "INFO"
    log_file: str = ""
    http_timeout: float = 30.0


def parse_holidays(raw: str) -> frozenset[str]:
    """Normalise a comma-separated list of dates to YYYY-MM-DD strings."""
    holidays = set()
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        match = HOLIDAY_RE.match(item)
        try:
            if not match:
                raise ValueError(item)
            holidays.add(date(*map(int, match.groups())).strftime("%Y-%m-%d"))
        except ValueError:
            raise ConfigError(f"Invalid holiday date: {item!r}")
    return frozenset(holidays)


def _load_yaml(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def load_settings(config_path: Path | None = None) -> Settings:
    """Build Settings from the environment and config.yaml. Raises ConfigError."""
    load_dotenv()
    config = _load_yaml(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)

    missing = [name for name in REQUIRED_ENV if not os.getenv(name)]
    use_standup_channel = os.getenv("USE_STANDUP_CHANNEL", "false").lower() == "true"
    if use_standup_channel and not os.getenv("SLACK_STANDUP_CHANNEL"):
        missing.append("SLACK_STANDUP_CHANNEL")
    if not use_standup_channel and not os.getenv("SLACK_USER_ID"):
        missing.append("SLACK_USER_ID")
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    statuses = config.get("statuses") or {}
    weather = config.get("weather") or {}
    greeting = config.get("greeting") or {}
    logging_cfg = config.get("logging") or {}
    defaults = Settings.__dataclass_fields__

    timezone = config.get("timezone") or defaults["timezone"].default
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"Unknown timezone: {timezone!r}")

    log_level = os.getenv("LOG_LEVEL") or logging_cfg.get("level") or defaults["log_level"].default
    log_level = str(log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown log level: {log_level!r}")

    try:
        return Settings(
            google_client_id=os.environ["GOOGLE_CLIENT_ID"],
            google_client_secret=os.environ["GOOGLE_CLIENT_SECRET"],
            google_refresh_token=os.environ["GOOGLE_REFRESH_TOKEN"],
            google_calendar_id=os.environ["GOOGLE_CALENDAR_ID"],
            linear_api_key=os.environ["LINEAR_API_KEY"],
            slack_api_token=os.environ["SLACK_API_TOKEN"],
            slack_standup_channel=os.getenv("SLACK_STANDUP_CHANNEL", ""),
            slack_user_id=os.getenv("SLACK_USER_ID", ""),
            use_standup_channel=use_standup_channel,
            holidays=parse_holidays(os.getenv("HOLIDAYS", "")),
            weather_api_key=os.getenv("WEATHER_API_KEY", ""),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            timezone=timezone,
            in_progress_status=statuses.get("in_progress", defaults["in_progress_status"].default),
            submitted_status=statuses.get("submitted", defaults["submitted_status"].default),
            merged_status=statuses.get("merged", defaults["merged_status"].default),
            latitude=float(weather.get("latitude", defaults["latitude"].default)),
            longitude=float(weather.get("longitude", defaults["longitude"].default)),
            greeting_model=greeting.get("model", defaults["greeting_model"].default),
            greeting_max_tokens=int(greeting.get("max_tokens", defaults["greeting_max_tokens"].default)),
            log_level=log_level,
            log_file=logging_cfg.get("file") or "",
            http_timeout=float(config.get("http_timeout", defaults["http_timeout"].default)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {config_path or DEFAULT_CONFIG_PATH}: {e}")
