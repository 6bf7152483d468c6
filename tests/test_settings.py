"""Tests for settings.py."""
import pytest

from settings import ConfigError, load_settings, parse_holidays

REQUIRED = {
    "GOOGLE_CLIENT_ID": "cid",
    "GOOGLE_CLIENT_SECRET": "secret",
    "GOOGLE_REFRESH_TOKEN": "refresh",
    "GOOGLE_CALENDAR_ID": "primary",
    "LINEAR_API_KEY": "lin_api_x",
    "SLACK_API_TOKEN": "xoxb-x",
    "SLACK_USER_ID": "U123",
}

OPTIONAL = [
    "SLACK_STANDUP_CHANNEL",
    "USE_STANDUP_CHANNEL",
    "HOLIDAYS",
    "WEATHER_API_KEY",
    "ANTHROPIC_API_KEY",
    "LOG_LEVEL",
]


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setattr("settings.load_dotenv", lambda: None)
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    for name in OPTIONAL:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def no_yaml(tmp_path):
    return tmp_path / "missing.yaml"


def test_loads_required_values(env, no_yaml):
    cfg = load_settings(no_yaml)
    assert cfg.google_calendar_id == "primary"
    assert cfg.linear_api_key == "lin_api_x"
    assert cfg.slack_user_id == "U123"
    assert cfg.use_standup_channel is False


def test_defaults_without_yaml(env, no_yaml):
    cfg = load_settings(no_yaml)
    assert cfg.timezone == "America/Denver"
    assert cfg.in_progress_status == "In Progress"
    assert cfg.submitted_status == "Code Review"
    assert cfg.merged_status == "Testing"
    assert cfg.greeting_max_tokens == 50
    assert cfg.holidays == frozenset()
    assert cfg.weather_api_key == ""
    assert cfg.anthropic_api_key == ""
    assert cfg.log_level == "INFO"
    assert cfg.log_file == ""


def test_yaml_overrides(env, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "timezone: Europe/Berlin\n"
        "statuses:\n"
        "  in_progress: Doing\n"
        "  submitted: In Review\n"
        "  merged: Done\n"
        "weather:\n"
        "  latitude: 52.5\n"
        "  longitude: 13.4\n"
        "greeting:\n"
        "  max_tokens: 40\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  file: /tmp/standup.log\n"
        "http_timeout: 5\n"
    )
    cfg = load_settings(path)
    assert cfg.timezone == "Europe/Berlin"
    assert (cfg.in_progress_status, cfg.submitted_status, cfg.merged_status) == ("Doing", "In Review", "Done")
    assert cfg.latitude == 52.5
    assert cfg.greeting_max_tokens == 40
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == "/tmp/standup.log"
    assert cfg.http_timeout == 5.0


def test_log_level_env_wins(env, no_yaml):
    env.setenv("LOG_LEVEL", "WARNING")
    assert load_settings(no_yaml).log_level == "WARNING"


def test_log_level_normalised(env, no_yaml):
    env.setenv("LOG_LEVEL", "debug")
    assert load_settings(no_yaml).log_level == "DEBUG"


def test_invalid_log_level_raises(env, no_yaml):
    env.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ConfigError, match="VERBOSE"):
        load_settings(no_yaml)


def test_shipped_config_logs_to_stdout_only(env):
    assert load_settings().log_file == ""


def test_missing_required_raises(env, no_yaml):
    env.delenv("LINEAR_API_KEY")
    env.delenv("GOOGLE_REFRESH_TOKEN")
    with pytest.raises(ConfigError) as exc:
        load_settings(no_yaml)
    assert "LINEAR_API_KEY" in str(exc.value)
    assert "GOOGLE_REFRESH_TOKEN" in str(exc.value)


def test_standup_channel_required_when_enabled(env, no_yaml):
    env.setenv("USE_STANDUP_CHANNEL", "true")
    with pytest.raises(ConfigError, match="SLACK_STANDUP_CHANNEL"):
        load_settings(no_yaml)

    env.setenv("SLACK_STANDUP_CHANNEL", "C999")
    env.delenv("SLACK_USER_ID")
    cfg = load_settings(no_yaml)
    assert cfg.use_standup_channel is True
    assert cfg.slack_standup_channel == "C999"


def test_user_id_required_for_direct_messages(env, no_yaml):
    env.delenv("SLACK_USER_ID")
    with pytest.raises(ConfigError, match="SLACK_USER_ID"):
        load_settings(no_yaml)


def test_holidays_from_env(env, no_yaml):
    env.setenv("HOLIDAYS", "2024-12-25, 2024-07-04T00:00:00,,")
    cfg = load_settings(no_yaml)
    assert cfg.holidays == frozenset({"2024-12-25", "2024-07-04"})


def test_holidays_accept_loose_dates():
    assert parse_holidays("2024-1-5, 2024/12/25, 2024-07-04T00:00:00Z") == frozenset(
        {"2024-01-05", "2024-12-25", "2024-07-04"}
    )


def test_invalid_holiday_raises():
    with pytest.raises(ConfigError, match="christmas"):
        parse_holidays("2024-01-01,christmas")


def test_impossible_holiday_raises():
    with pytest.raises(ConfigError, match="2024-02-30"):
        parse_holidays("2024-02-30")
    with pytest.raises(ConfigError, match="2024-1-512"):
        parse_holidays("2024-1-512")


def test_unknown_timezone_raises(env, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Mars/Olympus_Mons\n")
    with pytest.raises(ConfigError, match="Mars/Olympus_Mons"):
        load_settings(path)


def test_bad_number_raises(env, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("http_timeout: soon\n")
    with pytest.raises(ConfigError):
        load_settings(path)
