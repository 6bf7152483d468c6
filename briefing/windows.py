"""
Reporting windows and lookback cutoffs for one standup run.
"""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime, timezone

from briefing.business_days import add_business_days, add_months

# Issues created before this many calendar months ago are ignored.
ISSUE_CUTOFF_MONTHS = 2
# In-progress transitions older than this many business days are ignored.
IN_PROGRESS_CUTOFF_DAYS = 7


@dataclass(frozen=True)
class Window:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ReportWindows:
    now: datetime
    today: datetime
    yesterday: datetime
    issue_cutoff: datetime
    in_progress_cutoff: datetime

    @property
    def yesterday_window(self) -> Window:
        """The whole previous business day."""
        return Window(self.yesterday, end_of_day(self.yesterday))

    @property
    def today_window(self) -> Window:
        """Start of today through the moment of invocation."""
        return Window(self.today, self.now)

    @property
    def today_calendar_window(self) -> Window:
        """All of today, so meetings later in the day are listed."""
        return Window(self.today, end_of_day(self.today))

    @property
    def yesterday_activity_window(self) -> Window:
        """Previous business day through midnight today, covering any weekend in between."""
        return Window(self.yesterday, self.today)


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)


def to_utc_iso(dt: datetime) -> str:
    """RFC 3339 UTC timestamp with milliseconds, e.g. 2024-01-08T07:00:00.000Z."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_windows(now: datetime, holidays: Collection[str] = ()) -> ReportWindows:
    """Derive today/yesterday and the two cutoffs from `now` (timezone-aware)."""
    today = start_of_day(now)
    return ReportWindows(
        now=now,
        today=today,
        yesterday=add_business_days(today, -1, holidays),
        issue_cutoff=add_months(today, -ISSUE_CUTOFF_MONTHS),
        in_progress_cutoff=add_business_days(today, -IN_PROGRESS_CUTOFF_DAYS, holidays),
    )
