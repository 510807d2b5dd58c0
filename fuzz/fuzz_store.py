"""Fuzz harness for loading the timesheet file.

Arbitrary bytes are written to a scratch file and loaded through
``EventStore``. The only acceptable failure is ``StoreError``; anything that
does load must survive a save/load round trip unchanged.
"""
from __future__ import annotations
import atheris
import sys
import tempfile
from pathlib import Path

with atheris.instrument_imports():
    from timesheet.store import EventStore, StoreError

_DIR = Path(tempfile.mkdtemp(prefix="fuzz-timesheet-"))


def TestOneInput(data: bytes):  # noqa: N802 (Atheris signature)
    store = EventStore(_DIR / "timesheet.json")
    store.path.write_bytes(data)
    try:
        events = store.load()
    except StoreError:
        return
    store.save(events)
    if store.load() != events:
        raise RuntimeError("round trip changed the event log")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
