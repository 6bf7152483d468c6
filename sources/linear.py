"""
Fetches the user's recently touched issues from the Linear GraphQL API and
sorts them into in-progress / submitted / merged buckets.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

import requests

from briefing.windows import Window, to_utc_iso
from settings import Settings

log = logging.getLogger(__name__)

LINEAR_URL = "https://api.linear.app/graphql"

ISSUES_QUERY = """
query ($start: DateTimeOrDuration!, $end: DateTimeOrDuration!,
       $cutoff: DateTimeOrDuration!, $inProgressCutoff: DateTimeOrDuration!,
       $statuses: [String!], $inProgress: String!) {
  issues(filter: {and: [
    { assignee: { isMe: { eq: true } } },
    { children: { length: { eq: 0 } } },
    { createdAt: { gte: $cutoff } },
    { state: { name: { in: $statuses } } },
    { or: [
        { and: [{ updatedAt: { gte: $inProgressCutoff, lte: $end } },
                { state: { name: { eq: $inProgress } } }] },
        { and: [{ updatedAt: { gte: $start, lte: $end } },
                { state: { name: { neq: $inProgress } } }] }
      ]
    }
  ]}) {
    nodes {
      id
      identifier
      title
      updatedAt
      state { name }
      history {
        nodes {
          createdAt
          fromState { name }
          toState { name }
        }
      }
    }
  }
}
"""


class LinearError(RuntimeError):
    pass


@dataclass(frozen=True)
class Transition:
    from_state: str | None
    to_state: str | None
    created_at: datetime


@dataclass(frozen=True)
class Issue:
    identifier: str
    title: str
    state: str | None
    transitions: tuple[Transition, ...] = ()
    updated_at: datetime | None = None

    def __str__(self):
        return f"{self.identifier} {self.title}"


@dataclass
class IssueBuckets:
    in_progress: list[str] = field(default_factory=list)
    submitted: list[str] = field(default_factory=list)
    merged: list[str] = field(default_factory=list)


def _parse_dt(s: str) -> datetime:
    """Parse Linear's ISO timestamps (trailing Z) as aware UTC datetimes."""
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _state_name(node: dict | None) -> str | None:
    return (node or {}).get("name")


def parse_issue(node: dict) -> Issue:
    history = (node.get("history") or {}).get("nodes", [])
    return Issue(
        identifier=node["identifier"],
        title=node["title"],
        state=_state_name(node.get("state")),
        transitions=tuple(
            Transition(
                from_state=_state_name(h.get("fromState")),
                to_state=_state_name(h.get("toState")),
                created_at=_parse_dt(h["createdAt"]),
            )
            for h in history
        ),
        updated_at=_parse_dt(node["updatedAt"]) if node.get("updatedAt") else None,
    )


def fetch_issues(
    settings: Settings,
    window: Window,
    issue_cutoff: datetime,
    in_progress_cutoff: datetime,
) -> list[Issue]:
    """Issues updated inside the window (in-progress ones since in_progress_cutoff)."""
    variables = {
        "start": to_utc_iso(window.start),
        "end": to_utc_iso(window.end),
        "cutoff": to_utc_iso(issue_cutoff),
        "inProgressCutoff": to_utc_iso(in_progress_cutoff),
        "statuses": [settings.in_progress_status, settings.submitted_status, settings.merged_status],
        "inProgress": settings.in_progress_status,
    }
    r = requests.post(
        LINEAR_URL,
        json={"query": ISSUES_QUERY, "variables": variables},
        headers={"Content-Type": "application/json", "Authorization": settings.linear_api_key},
        timeout=settings.http_timeout,
    )
    r.raise_for_status()
    payload = r.json()
    if payload.get("errors"):
        messages = "; ".join(e.get("message", "unknown error") for e in payload["errors"])
        raise LinearError(f"Linear query failed: {messages}")
    nodes = payload["data"]["issues"]["nodes"]
    log.debug("Linear returned %d issues for %s – %s", len(nodes), variables["start"], variables["end"])
    return [parse_issue(n) for n in nodes]


def state_changed_to(issue: Issue, state: str, after: datetime | None = None) -> bool:
    """True if the issue genuinely moved into `state` (optionally at or after `after`)."""
    return any(
        t.to_state == state
        and t.from_state != state
        and (after is None or t.created_at >= after)
        for t in issue.transitions
    )


def classify_issues(
    issues: list[Issue],
    settings: Settings,
    in_progress_cutoff: datetime,
) -> IssueBuckets:
    return IssueBuckets(
        in_progress=[
            str(i) for i in issues
            if state_changed_to(i, settings.in_progress_status, after=in_progress_cutoff)
        ],
        submitted=[str(i) for i in issues if state_changed_to(i, settings.submitted_status)],
        merged=[str(i) for i in issues if state_changed_to(i, settings.merged_status)],
    )


def get_linear_issues(
    settings: Settings,
    window: Window,
    issue_cutoff: datetime,
    in_progress_cutoff: datetime,
) -> IssueBuckets:
    issues = fetch_issues(settings, window, issue_cutoff, in_progress_cutoff)
    return classify_issues(issues, settings, in_progress_cutoff)
