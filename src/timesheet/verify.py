from __future__ import annotations
from datetime import date
from typing import List, Optional, Sequence
from pydantic import BaseModel

from .models import Event, EventKind, local_now
from .worktime import day_buckets


ORPHAN_END = "orphan_end"
DUPLICATE_START = "duplicate_start"
OPEN_SESSION = "open_session"
OUT_OF_ORDER = "out_of_order"


class Anomaly(BaseModel):
    code: str
    event: Event
    detail: str

    def render(self) -> str:
        return f"{self.event.render()}  {self.code}: {self.detail}"


def find_anomalies(events: Sequence[Event], today: Optional[date] = None) -> List[Anomaly]:
    """Report events that break the Start/End alternation or append order.

    Read-only: the log itself is never touched. Today's trailing open
    session is a running session, not an anomaly.
    """
    today = today or local_now().date()
    found: List[Anomaly] = []

    prev: Optional[Event] = None
    for e in events:
        if prev is not None and e.timestamp < prev.timestamp:
            found.append(
                Anomaly(code=OUT_OF_ORDER, event=e, detail=f"earlier than {prev.render()}")
            )
        prev = e

    for day, bucket in day_buckets(events).items():
        open_start: Optional[Event] = None
        for e in bucket:
            if e.kind is EventKind.START:
                if open_start is not None:
                    found.append(
                        Anomaly(
                            code=DUPLICATE_START,
                            event=e,
                            detail=f"session already open since {open_start.render()}",
                        )
                    )
                else:
                    open_start = e
            elif open_start is None:
                found.append(Anomaly(code=ORPHAN_END, event=e, detail="no open start"))
            else:
                open_start = None
        if open_start is not None and day != today:
            found.append(
                Anomaly(code=OPEN_SESSION, event=open_start, detail="day has no end entry")
            )
    return found
