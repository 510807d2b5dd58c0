from __future__ import annotations
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from .models import DayTotal, Event, EventKind, local_now

"""Worktime engine.

Pure functions over an event sequence: pairing Start/End into sessions,
grouping by local calendar day and formatting durations. Nothing here
touches storage.
"""

log = logging.getLogger(__name__)


def local_date(ts: datetime) -> date:
    return ts.astimezone().date()


def _sessions(events: Iterable[Event]):
    """Walk the events, returning (completed_total, open_session_start, closed_count)."""
    working = False
    closed = 0
    last_start: Optional[datetime] = None
    worktime = timedelta(0)
    for e in events:
        if e.kind is EventKind.START:
            # duplicate start while working keeps the first one
            if not working:
                working = True
                last_start = e.timestamp
        elif e.kind is EventKind.END:
            if not working:
                log.warning("Ignoring invalid end entry at %s", e.render())
                continue
            working = False
            closed += 1
            worktime += e.timestamp - last_start
    return worktime, (last_start if working else None), closed


def compute_worktime(
    events: Iterable[Event], ongoing: bool, now: Optional[datetime] = None
) -> timedelta:
    """Sum the closed sessions in ``events``.

    A trailing open session is counted up to ``now`` when ``ongoing`` is set
    (today). Otherwise the whole result collapses to zero, since there is no
    reference point to close the session against.
    """
    worktime, open_start, _ = _sessions(events)
    if open_start is not None:
        if ongoing:
            worktime += (now or local_now()) - open_start
        else:
            worktime = timedelta(0)
    return worktime


def day_total(day: date, events: Iterable[Event]) -> DayTotal:
    """Incomplete when a session is left open or none was ever closed."""
    worktime, open_start, closed = _sessions(events)
    if open_start is not None or not closed:
        return DayTotal(day, None)
    return DayTotal(day, worktime)


def day_buckets(events: Iterable[Event]) -> Dict[date, List[Event]]:
    """Group events by local calendar date, oldest day first."""
    buckets: Dict[date, List[Event]] = {}
    for e in events:
        buckets.setdefault(local_date(e.timestamp), []).append(e)
    return {d: buckets[d] for d in sorted(buckets)}


def filter_today(events: Iterable[Event], today: Optional[date] = None) -> List[Event]:
    today = today or local_now().date()
    return [e for e in events if local_date(e.timestamp) == today]


def truncate_minutes(td: timedelta) -> timedelta:
    """Drop seconds and below, rounding toward zero."""
    seconds = int(td.total_seconds())
    minutes = abs(seconds) // 60
    return timedelta(minutes=-minutes if seconds < 0 else minutes)


def format_duration(td: timedelta) -> str:
    total = int(truncate_minutes(td).total_seconds()) // 60
    sign = "-" if total < 0 else ""
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours}h{minutes:02d}m"
