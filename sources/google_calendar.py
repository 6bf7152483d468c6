"""
Fetches calendar events from the Google Calendar API and reduces them to
standup-worthy summaries.
"""

import re
from urllib.parse import quote

import requests

from briefing.windows import Window, to_utc_iso
from settings import Settings

CALENDAR_BASE = "https://www.googleapis.com/calendar/v3"

OUT_OF_OFFICE_RE = re.compile(r"ooo|pto|vacation|out of office", re.IGNORECASE)


def _get(url, token, params=None, timeout=30.0):
    r = requests.get(url, headers={"Authorization": f"Bearer {token}"}, params=params, timeout=timeout)
    r.raise_for_status()
    return r.json()


def list_events(settings: Settings, window: Window, token: str) -> list[dict]:
    """Raw events starting inside the window, recurring events expanded, by start time."""
    url = f"{CALENDAR_BASE}/calendars/{quote(settings.google_calendar_id, safe='')}/events"
    params = {
        "timeMin": to_utc_iso(window.start),
        "timeMax": to_utc_iso(window.end),
        "singleEvents": "true",
        "orderBy": "startTime",
    }
    items = []
    while True:
        data = _get(url, token, params=params, timeout=settings.http_timeout)
        items.extend(data.get("items", []))
        page_token = data.get("nextPageToken")
        if not page_token:
            return items
        params = {**params, "pageToken": page_token}


def keep_event(event: dict) -> bool:
    summary = event.get("summary")
    return bool(
        summary
        and event.get("transparency") != "opaque"
        and "personal" not in (event.get("description") or "").lower()
        and summary.strip().lower() != "busy"
    )


def filter_events(events: list[dict]) -> list[str]:
    """Summaries of the events worth mentioning, in the order given."""
    return [e["summary"] for e in events if keep_event(e)]


def get_calendar_events(settings: Settings, window: Window, token: str) -> list[str]:
    return filter_events(list_events(settings, window, token))


def detect_vacation_event(events: list[str]) -> str | None:
    """First event that looks like time off (OOO, PTO, vacation, out of office)."""
    return next((e for e in events if OUT_OF_OFFICE_RE.search(e)), None)
