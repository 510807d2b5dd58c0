"""Fuzz harness for the worktime engine and day reports."""
from __future__ import annotations
import atheris
import sys
from datetime import datetime, timedelta

with atheris.instrument_imports():
    from timesheet.models import Event, EventKind
    from timesheet.reports import all_days_summary
    from timesheet.worktime import compute_worktime, day_buckets

_BASE = datetime(2024, 1, 1, 6, 0).astimezone()


def _events(data: bytes):
    # two bytes per event: kind bit + minute offset (bounded to a few days)
    out = []
    for i in range(0, len(data) - 1, 2):
        kind = EventKind.START if data[i] & 1 else EventKind.END
        minutes = ((data[i] >> 1) << 8 | data[i + 1]) % (3 * 24 * 60)
        out.append(Event(timestamp=_BASE + timedelta(minutes=minutes), kind=kind))
    return out


def TestOneInput(data: bytes):  # noqa: N802
    events = _events(data[:256])
    if not events:
        return
    buckets = day_buckets(events)
    if sum(len(b) for b in buckets.values()) != len(events):
        raise RuntimeError("day buckets lost or duplicated events")
    if list(buckets) != sorted(buckets):
        raise RuntimeError("day buckets out of order")
    # append order sorted by time: every closed session is non-negative
    ordered = sorted(events, key=lambda e: e.timestamp)
    for bucket in day_buckets(ordered).values():
        if compute_worktime(bucket, ongoing=False) < timedelta(0):
            raise RuntimeError("negative worktime for time-ordered day")
    summary = all_days_summary(events, timedelta(hours=8))
    if summary.complete_days > len(buckets):
        raise RuntimeError("more complete days than days")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
