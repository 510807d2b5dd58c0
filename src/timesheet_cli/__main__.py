from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, NoReturn, Optional
import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from timesheet.logutil import setup_logging
from timesheet.models import Event, EventKind
from timesheet.reports import (
    all_days_lines,
    all_days_summary,
    list_all,
    list_today,
    today_lines,
    today_summary,
)
from timesheet.settings import HomeDirectoryError, Settings, resolve_timesheet_path
from timesheet.store import EventStore, StoreError
from timesheet.verify import find_anomalies

app = typer.Typer(add_completion=False, help="Record work start/end times and sum them up.")


def _fail(msg: str) -> NoReturn:
    print(f"[red]{escape(msg)}[/red]")
    raise typer.Exit(code=1)


@dataclass
class Session:
    cfg: Settings
    store: EventStore
    _events: Optional[List[Event]] = field(default=None, init=False, repr=False)

    @property
    def events(self) -> List[Event]:
        # loaded on first use so `--help` on a subcommand leaves the file alone
        if self._events is None:
            try:
                self._events = self.store.load()
            except StoreError as e:
                _fail(str(e))
        return self._events


def _echo(lines) -> None:
    for line in lines:
        print(escape(line))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Timesheet file (default: ~/.timesheet)"
    ),
):
    if ctx.resilient_parsing:
        return
    if ctx.invoked_subcommand is None:
        _fail("Not enough parameters given")
    try:
        cfg = Settings()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")
    setup_logging(cfg.log_level)
    try:
        path = resolve_timesheet_path(cfg, file)
    except HomeDirectoryError as e:
        _fail(str(e))
    ctx.obj = Session(cfg=cfg, store=EventStore(path))


@app.command("l")
@app.command("list", hidden=True)
def list_cmd(ctx: typer.Context):
    """List all entries."""
    _echo(list_all(ctx.obj.events))


@app.command("t")
@app.command("today", hidden=True)
def today_cmd(ctx: typer.Context):
    """List today's entries."""
    _echo(list_today(ctx.obj.events))


def _record(session: Session, kind: EventKind, when: Optional[str]) -> None:
    if when:
        try:
            event = Event.at(kind, when)
        except ValueError as e:
            _fail(f"Invalid time {when!r}, expected HH:MM: {e}")
        print(escape(event.render()))
    else:
        event = Event.now(kind)
    session.events.append(event)
    try:
        session.store.save(session.events)
    except StoreError as e:
        _fail(str(e))


@app.command("s")
@app.command("start", hidden=True)
def start_cmd(
    ctx: typer.Context,
    when: Optional[str] = typer.Argument(None, metavar="[HH:MM]", help="Start time today"),
):
    """Record a start entry, now or at HH:MM today."""
    _record(ctx.obj, EventKind.START, when)


@app.command("e")
@app.command("end", hidden=True)
@app.command("stop", hidden=True)
def end_cmd(
    ctx: typer.Context,
    when: Optional[str] = typer.Argument(None, metavar="[HH:MM]", help="End time today"),
):
    """Record an end entry, now or at HH:MM today."""
    _record(ctx.obj, EventKind.END, when)


@app.command("c")
@app.command("calc", hidden=True)
def calc_cmd(ctx: typer.Context):
    """Show today's worked time and when to clock off."""
    session: Session = ctx.obj
    summary = today_summary(session.events, session.cfg.daily_quota)
    _echo(today_lines(summary))


@app.command("a")
@app.command("all", hidden=True)
def all_cmd(ctx: typer.Context):
    """Show per-day totals against the daily quota."""
    session: Session = ctx.obj
    summary = all_days_summary(session.events, session.cfg.daily_quota)
    _echo(all_days_lines(summary))


@app.command("v")
@app.command("verify", hidden=True)
def verify_cmd(ctx: typer.Context):
    """Check the log for unmatched or out-of-order entries."""
    anomalies = find_anomalies(ctx.obj.events)
    if not anomalies:
        print("[green]No anomalies found[/green]")
        return
    for a in anomalies:
        print(f"[yellow]{escape(a.render())}[/yellow]")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
