"""
Posts the standup report to Slack via Slack SDK.
Setup: api.slack.com/apps → create app → OAuth scopes: chat:write, im:write → install → copy bot token.
Your SLACK_USER_ID: click your name in Slack → Profile → copy Member ID (starts with U).

Delivery never raises; failures come back as DeliveryResult(ok=False).
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from settings import Settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    channel_id: str | None = None
    error: str | None = None


def make_client(settings: Settings) -> WebClient:
    return WebClient(token=settings.slack_api_token)


def _error_text(e: Exception) -> str:
    if isinstance(e, SlackApiError):
        return e.response["error"]
    return str(e)


def get_direct_message_channel_id(client: WebClient, user_id: str) -> str | None:
    try:
        dm = client.conversations_open(users=[user_id])
        return dm["channel"]["id"]
    except (SlackClientError, OSError) as e:
        log.error(f"Error opening DM channel with {user_id}: {_error_text(e)}")
        return None


def resolve_channel_id(client: WebClient, settings: Settings) -> str | None:
    """The standup channel, or a DM with the configured user."""
    if settings.use_standup_channel:
        return settings.slack_standup_channel
    channel_id = get_direct_message_channel_id(client, settings.slack_user_id)
    if not channel_id:
        log.error("Failed to get channel ID.")
    return channel_id


def _blocks(text: str) -> list[dict]:
    return [{"type": "section", "text": {"type": "mrkdwn", "text": text}}]


def post_standup(
    client: WebClient,
    channel_id: str | None,
    text: str,
    schedule_at: datetime | None = None,
) -> DeliveryResult:
    """Post now, or schedule for `schedule_at` when given."""
    if not channel_id:
        return DeliveryResult(ok=False, error="no channel")
    try:
        if schedule_at:
            client.chat_scheduleMessage(
                channel=channel_id,
                text=text,
                blocks=_blocks(text),
                post_at=int(schedule_at.timestamp()),
            )
        else:
            client.chat_postMessage(
                channel=channel_id,
                text=text,
                mrkdwn=True,
                blocks=_blocks(text),
            )
        return DeliveryResult(ok=True, channel_id=channel_id)
    except (SlackClientError, OSError) as e:
        error = _error_text(e)
        log.error(f"Slack post failed: {error}")
        return DeliveryResult(ok=False, channel_id=channel_id, error=error)
