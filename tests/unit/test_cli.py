# tests/unit/test_cli.py
import pytest
from typer.testing import CliRunner

import config.paths as paths_mod
from apps.stopwatch_cli import app
from core.timing import clock
from core.timing.stopwatch import Slice
from recording.session import read_slices

runner = CliRunner()


class TickClock:
    """Advances 100 units on every read."""

    def __init__(self, start=1000, step=100):
        self.now = start - step
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    monkeypatch.setattr(paths_mod, "_paths_singleton", paths_mod.Paths(tmp_path / "data"))
    monkeypatch.setattr(clock, "_default_time_getter", clock._default_time_getter)
    monkeypatch.setattr(clock, "wall_clock_ms", TickClock())
    monkeypatch.delenv("STOPWATCH_LOG_LEVEL", raising=False)
    yield


def test_run_records_slices_and_total():
    result = runner.invoke(app, ["run", "--name", "demo", "--clock", "wall_ms"], input="\n\nq\n")

    assert result.exit_code == 0, result.output
    assert "'demo' running (wall_ms)" in result.output
    assert "0.000 ->      100.000  (100.000)" in result.output
    assert "total 300.000" in result.output

    events = paths_mod.get_paths().session_events_path("demo")
    assert read_slices(events) == [Slice(0, 100, 100), Slice(100, 200, 100)]


def test_run_stop_resume_and_stop_with_slice():
    # start=1000, s->stop 1100, s->resume 1200, x->stop+slice 1300
    result = runner.invoke(app, ["run", "-n", "pauses", "--clock", "wall_ms"], input="s\ns\nx\nq\n")

    assert result.exit_code == 0, result.output
    assert "stopped at 100.000" in result.output
    assert "stopped at 200.000" in result.output
    assert "total 200.000" in result.output
    events = paths_mod.get_paths().session_events_path("pauses")
    assert read_slices(events) == [Slice(0, 200, 200)]


def test_run_without_recording_writes_no_events():
    result = runner.invoke(app, ["run", "-n", "quiet", "--clock", "wall_ms", "--no-record"], input="\n")

    assert result.exit_code == 0, result.output
    assert not paths_mod.get_paths().session_dir("quiet").exists()


def test_run_reset_then_idle_slice_prompts_to_start():
    result = runner.invoke(app, ["run", "-n", "r", "--clock", "wall_ms"], input="r\n\nq\n")

    assert result.exit_code == 0, result.output
    assert "[stopwatch] reset" in result.output
    assert "idle, press s to start" in result.output
    assert "total 0.000" in result.output


def test_run_rejects_unknown_clock():
    result = runner.invoke(app, ["run", "--clock", "sundial"], input="q\n")
    assert result.exit_code == 2


def test_slices_command_lists_recorded_slices():
    runner.invoke(app, ["run", "-n", "laps", "--clock", "wall_ms"], input="\n\n\nq\n")

    result = runner.invoke(app, ["slices", "laps"])

    assert result.exit_code == 0, result.output
    rows = [line for line in result.output.splitlines() if line.strip().startswith("#")]
    assert len(rows) == 3


def test_slices_command_missing_session_exits_1():
    result = runner.invoke(app, ["slices", "nope"])
    assert result.exit_code == 1


def test_run_installs_chosen_clock_as_default():
    result = runner.invoke(app, ["run", "-n", "d", "--clock", "perf_ms", "--no-record"], input="q\n")
    assert result.exit_code == 0, result.output
    assert clock.get_default_system_time_getter() is clock.perf_counter_ms


def test_run_rejects_unknown_log_level():
    result = runner.invoke(app, ["run", "-n", "x", "--clock", "wall_ms", "--log-level", "chatty"], input="q\n")
    assert result.exit_code == 2
    assert not paths_mod.get_paths().session_dir("x").exists()


def test_run_unwriteable_data_root_exits_1(monkeypatch, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a dir", encoding="utf-8")
    monkeypatch.setattr(paths_mod, "_paths_singleton", paths_mod.Paths(blocker))

    result = runner.invoke(app, ["run", "-n", "w", "--clock", "wall_ms"], input="q\n")

    assert result.exit_code == 1
