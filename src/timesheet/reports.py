from __future__ import annotations
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence
from pydantic import BaseModel

from .models import DayTotal, Event, TIME_FORMAT, local_now
from .worktime import (
    compute_worktime,
    day_buckets,
    day_total,
    filter_today,
    format_duration,
    local_date,
    truncate_minutes,
)


class TodaySummary(BaseModel):
    worked: timedelta
    clock_off: datetime


class AllDaysSummary(BaseModel):
    days: List[DayTotal]
    complete_days: int
    expected: timedelta
    actual: timedelta

    @property
    def diff(self) -> timedelta:
        return self.actual - self.expected


def render_event(e: Event) -> str:
    return e.render()


def list_all(events: Iterable[Event]) -> List[str]:
    return [render_event(e) for e in events]


def list_today(events: Iterable[Event], now: Optional[datetime] = None) -> List[str]:
    today = local_date(now or local_now())
    return ["Today:"] + [render_event(e) for e in filter_today(events, today)]


def today_summary(
    events: Sequence[Event], quota: timedelta, now: Optional[datetime] = None
) -> TodaySummary:
    """Worked time so far today and when the quota will be reached.

    The clock-off projection is naive: once past the quota it is in the past.
    """
    now = now or local_now()
    todays = filter_today(events, local_date(now))
    worked = truncate_minutes(compute_worktime(todays, ongoing=True, now=now))
    return TodaySummary(worked=worked, clock_off=now + (quota - worked))


def all_days_summary(events: Sequence[Event], quota: timedelta) -> AllDaysSummary:
    days: List[DayTotal] = []
    actual = timedelta(0)
    complete = 0
    for d, bucket in day_buckets(events).items():
        total = day_total(d, bucket)
        days.append(total)
        if total.complete:
            actual += total.worked
            complete += 1
    return AllDaysSummary(
        days=days, complete_days=complete, expected=quota * complete, actual=actual
    )


def today_lines(summary: TodaySummary) -> List[str]:
    return [
        f"Working for: {format_duration(summary.worked)}",
        f"Clock off at: {summary.clock_off.astimezone().strftime(TIME_FORMAT)}",
    ]


def all_days_lines(summary: AllDaysSummary) -> List[str]:
    lines = []
    for t in summary.days:
        if t.complete:
            lines.append(f"{t.day.isoformat()}: {format_duration(t.worked)}")
        else:
            lines.append(f"{t.day.isoformat()}: No end entry")
    lines.append(f"Expected: {format_duration(summary.expected)}")
    lines.append(f"Actual: {format_duration(summary.actual)}")
    lines.append(f"Diff: {format_duration(summary.diff)}")
    return lines
