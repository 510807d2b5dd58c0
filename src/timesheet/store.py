from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Sequence

from pydantic import TypeAdapter, ValidationError

from .models import Event

log = logging.getLogger(__name__)

_EVENT_LOG = TypeAdapter(List[Event])


class StoreError(Exception):
    """The timesheet file could not be read, created, parsed or written."""


class EventStore:
    """JSON file holding the full event log.

    Every mutation is a full read-modify-write of the file; there is no
    locking, so two concurrent writers can lose an update.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _ensure_exists(self) -> None:
        if self.path.exists():
            return
        log.info("creating empty timesheet at %s", self.path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(mode=0o600)
        self.path.write_text("[]")

    def load(self) -> List[Event]:
        try:
            self._ensure_exists()
            data = self.path.read_bytes()
        except OSError as e:
            raise StoreError(f"cannot read {self.path}: {e}") from e
        try:
            return _EVENT_LOG.validate_json(data)
        except ValidationError as e:
            raise StoreError(f"malformed timesheet {self.path}: {e}") from e

    def save(self, events: Sequence[Event]) -> None:
        body = [e.model_dump(mode="json", by_alias=True) for e in events]
        try:
            self.path.write_text(json.dumps(body, indent=4))
        except OSError as e:
            raise StoreError(f"cannot write {self.path}: {e}") from e

