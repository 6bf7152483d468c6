from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from settings import Settings

DENVER = ZoneInfo("America/Denver")


def denver(*args) -> datetime:
    return datetime(*args, tzinfo=DENVER)


@pytest.fixture
def settings():
    return Settings(
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_refresh_token="refresh-token",
        google_calendar_id="me@example.com",
        linear_api_key="lin_api_test",
        slack_api_token="xoxb-test",
        slack_standup_channel="C0STANDUP",
        slack_user_id="U0ME",
        use_standup_channel=False,
        holidays=frozenset(),
        weather_api_key="weather-key",
        anthropic_api_key="sk-ant-test",
    )
