from __future__ import annotations

import sys
from typing import Iterable, Optional

import typer
from pydantic import ValidationError

from config.paths import get_paths
from core.timing.clock import use_configured_time_source
from core.timing.stopwatch import Slice
from recording.session import StopwatchSession, read_slices
from sdk.config import load_config
from sdk.logging import configure_logging


app = typer.Typer(add_completion=False, no_args_is_help=True)

KEYS_HELP = "Enter=slice  s=stop/resume  x=stop+slice  r=reset  q=quit"


def _fmt(value: float) -> str:
    return f"{value:.3f}"


def _echo_slice(idx: int, s: Slice) -> None:
    typer.echo(f"  #{idx:<3} {_fmt(s.start_time):>12} -> {_fmt(s.end_time):>12}  ({_fmt(s.duration)})")


def _echo_slices(slices: Iterable[Slice]) -> int:
    n = 0
    for n, s in enumerate(slices, start=1):
        _echo_slice(n, s)
    return n


@app.command()
def run(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Session name, e.g. sprint_1"),
    clock: Optional[str] = typer.Option(
        None,
        help="Time source: wall_ms, monotonic_ms, perf_ms or a 'module:attr' path",
    ),
    record: bool = typer.Option(True, help="Write events.jsonl for the session"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override STOPWATCH_LOG_LEVEL"),
) -> None:
    """Interactive stopwatch driven by lines on stdin."""

    try:
        cfg = load_config(clock=clock, log_level=log_level)
    except ValidationError as exc:
        raise typer.BadParameter(exc.errors()[0]["msg"], param_hint="--log-level")
    configure_logging(cfg.log_level)

    clock_name = cfg.clock
    try:
        use_configured_time_source(cfg)
    except (ValueError, TypeError, ImportError, AttributeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--clock")

    if record:
        try:
            get_paths().verify_writeable()
        except OSError as exc:
            typer.echo(f"[stopwatch] cannot record session: {exc}", err=True)
            raise typer.Exit(code=1)

    with StopwatchSession(name, record=record, clock_name=clock_name) as session:
        sw = session.stopwatch
        session.start()
        typer.echo(f"[stopwatch] '{session.name}' running ({clock_name}). {KEYS_HELP}")

        for line in sys.stdin:
            cmd = line.strip().lower()
            if cmd == "q":
                break
            if cmd == "":
                if sw.is_idle():
                    typer.echo("[stopwatch] idle, press s to start")
                    continue
                _echo_slice(len(sw.get_completed_slices()) + 1, session.slice())
            elif cmd == "s":
                if sw.is_running():
                    typer.echo(f"[stopwatch] stopped at {_fmt(session.stop())}")
                else:
                    session.start()
                    typer.echo("[stopwatch] running")
            elif cmd == "x":
                typer.echo(f"[stopwatch] stopped at {_fmt(session.stop(record_pending_slice=True))}")
            elif cmd == "r":
                session.reset()
                typer.echo("[stopwatch] reset")
            else:
                typer.echo(f"[stopwatch] unknown command '{cmd}'. {KEYS_HELP}", err=True)

        total = session.stop()
        typer.echo(f"[stopwatch] total {_fmt(total)}")
        _echo_slices(sw.get_completed_slices())
        if session.writer is not None:
            typer.echo(f"[stopwatch] events → {session.writer.path}")


@app.command("slices")
def show_slices(name: str = typer.Argument(..., help="Recorded session name")) -> None:
    """Print the slices recorded for a session."""

    events_path = get_paths().session_events_path(name)
    if not events_path.exists():
        typer.echo(f"[stopwatch] no events recorded for '{name}' ({events_path})", err=True)
        raise typer.Exit(code=1)

    if _echo_slices(read_slices(events_path)) == 0:
        typer.echo(f"[stopwatch] '{name}' has no slices")


if __name__ == "__main__":
    app()
