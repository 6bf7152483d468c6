"""
Standup Reporter — orchestrator.
Flow: compute windows → fetch calendar → skip checks → fetch Linear issues
→ greeting → assemble → post to Slack.
"""

import argparse
import logging
import sys
from datetime import datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

from auth.google_auth import get_access_token
from briefing.business_days import is_holiday, is_weekend
from briefing.generator import generate_greeting
from briefing.report import build_standup_message
from briefing.windows import build_windows
from delivery.slack_sender import make_client, post_standup, resolve_channel_id
from settings import ConfigError, Settings, load_settings
from sources.google_calendar import detect_vacation_event, get_calendar_events
from sources.linear import get_linear_issues
from sources.weather import get_current_weather

log = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    handlers = [logging.StreamHandler(sys.stdout)]
    file_error = None
    if settings.log_file:
        log_path = Path(settings.log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path))
        except OSError as e:
            file_error = e

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )
    if file_error:
        log.warning(f"Cannot write log file {settings.log_file}: {file_error}; logging to stdout only.")


def _response(body: str) -> dict:
    return {"statusCode": 200, "body": body}


def run_standup(
    settings: Settings,
    now: datetime | None = None,
    slack_client=None,
    schedule_at: datetime | None = None,
    dry_run: bool = False,
) -> dict:
    """One standup run. Calendar and Linear failures propagate; delivery failures do not."""
    now = now or datetime.now(ZoneInfo(settings.timezone))
    windows = build_windows(now, settings.holidays)
    log.info(
        "Generating standup report: today=%s yesterday=%s issue_cutoff=%s in_progress_cutoff=%s",
        windows.today.strftime("%Y-%m-%d"),
        windows.yesterday.strftime("%Y-%m-%d"),
        windows.issue_cutoff.strftime("%Y-%m-%d"),
        windows.in_progress_cutoff.strftime("%Y-%m-%d"),
    )

    token = get_access_token(settings)
    yesterday_events = get_calendar_events(settings, windows.yesterday_window, token)
    today_events = get_calendar_events(settings, windows.today_calendar_window, token)
    log.info(f"Calendar: {len(yesterday_events)} events yesterday, {len(today_events)} today.")

    if is_weekend(windows.today):
        log.info("Skipping standup because it is a weekend")
        return _response("Skipping standup because it is a weekend.")

    if is_holiday(windows.today, settings.holidays):
        log.info("Skipping standup because it is a holiday")
        return _response("Skipping standup because it is a holiday.")

    vacation_event = detect_vacation_event(today_events)
    if vacation_event:
        log.info(f"Skipping standup because of out-of-office event '{vacation_event}'")
        return _response(f"Skipping standup because of out-of-office event '{vacation_event}'.")

    yesterday_issues = get_linear_issues(
        settings, windows.yesterday_activity_window, windows.issue_cutoff, windows.in_progress_cutoff
    )
    today_issues = get_linear_issues(
        settings, windows.today_window, windows.issue_cutoff, windows.in_progress_cutoff
    )
    log.info(
        f"Linear: {len(yesterday_issues.submitted)} submitted, {len(yesterday_issues.merged)} merged, "
        f"{len(today_issues.in_progress)} in progress."
    )

    weather = get_current_weather(settings)
    log.info(f"Current weather: {weather.condition}, temperature: {weather.temperature}")
    greeting = generate_greeting(settings, now, weather)

    message = build_standup_message(
        greeting=greeting,
        yesterday_events=yesterday_events,
        yesterday_issues=yesterday_issues,
        today_events=today_events,
        today_issues=today_issues,
    )
    log.info(f"Prepared Slack message ({len(message)} chars):\n{message}")

    if dry_run:
        return _response("Dry run; message not sent.")

    # Delivery failures are logged by the sender and deliberately not surfaced:
    # the report is best-effort and the run still counts as handled.
    client = slack_client or make_client(settings)
    channel_id = resolve_channel_id(client, settings)
    result = post_standup(client, channel_id, message, schedule_at=schedule_at)
    if result.ok:
        log.info("✓ Standup delivered to Slack.")
    else:
        log.warning(f"Standup not delivered: {result.error}")

    return _response("Handled successfully")


def handler(event=None, context=None):
    """Serverless entry point (e.g. an AWS Lambda on a weekday schedule)."""
    settings = load_settings()
    configure_logging(settings)
    return run_standup(settings)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Post the daily standup report to Slack.")
    parser.add_argument("--dry-run", action="store_true", help="build and log the message without posting")
    parser.add_argument("--post-at", metavar="HH:MM", help="schedule the post for this local time today")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR, format="%(asctime)s [%(levelname)s] %(message)s")
        log.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(settings)
    log.info("=== Standup Reporter starting ===")
    try:
        schedule_at = None
        if args.post_at:
            tz = ZoneInfo(settings.timezone)
            schedule_at = datetime.combine(
                datetime.now(tz).date(), time.fromisoformat(args.post_at), tzinfo=tz
            )
        result = run_standup(settings, schedule_at=schedule_at, dry_run=args.dry_run)
        log.info(f"Run result: {result}")
    except Exception as e:
        log.error(f"Standup failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
