from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic import ConfigDict


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMAT = "%H:%M"


def local_now() -> datetime:
    return datetime.now().astimezone()


class EventKind(str, Enum):
    START = "s"
    END = "e"


class Event(BaseModel):
    """A single Start or End marker in the timesheet.

    Stored as ``{"timestamp": ..., "type": "s" | "e"}``. Any other ``type``
    fails validation, so an unknown tag can never reach the worktime engine.
    Timestamps are always timezone-aware; naive values coming from older files
    are taken to be local time.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: datetime
    kind: EventKind = Field(alias="type")

    @field_validator("timestamp")
    @classmethod
    def _assume_local(cls, v: datetime) -> datetime:
        # every timestamp must survive conversion to local time for display
        try:
            local = v.astimezone()
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp out of range: {v}") from e
        return local if v.tzinfo is None else v

    @classmethod
    def now(cls, kind: EventKind, now: Optional[datetime] = None) -> "Event":
        return cls(timestamp=now or local_now(), kind=kind)

    @classmethod
    def at(cls, kind: EventKind, hh_mm: str, now: Optional[datetime] = None) -> "Event":
        """Build an event for ``HH:MM`` on today's local date, seconds zeroed."""
        t = datetime.strptime(hh_mm.strip(), TIME_FORMAT)
        today = (now or local_now()).astimezone().date()
        # naive on purpose: the validator picks the offset in effect at that time
        ts = datetime.combine(today, t.time())
        return cls(timestamp=ts, kind=kind)

    def render(self) -> str:
        return f"{self.timestamp.astimezone().strftime(TIMESTAMP_FORMAT)} | {self.kind.value}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class DayTotal:
    """Worked time for one calendar day.

    ``worked`` is None when the day ends with a session that was never
    closed, or has no closed session at all (only stray end entries). A day
    whose closed sessions add up to nothing carries ``timedelta(0)``.
    """

    day: date
    worked: Optional[timedelta]

    @property
    def complete(self) -> bool:
        return self.worked is not None
