from __future__ import annotations

import io

import pytest
from rich.console import Console

from segment_exporter.ui import ProgressActivity, ProgressReporter


def test_disabled_reporter_still_counts() -> None:
    reporter = ProgressReporter(enabled=False)
    reporter.start(total=3)
    reporter.advance(rows=5, current_url="https://files.example.com/a.tsv")
    reporter.advance(rows=0)
    reporter.close()
    assert reporter.summary() == {"downloaded": 2, "total": 3, "rows": 5}
    assert reporter.state.current_url == "https://files.example.com/a.tsv"


def test_reporter_falls_back_to_silent_off_terminal() -> None:
    console = Console(file=io.StringIO(), force_terminal=False)
    reporter = ProgressReporter(enabled=True, console=console)
    reporter.start(total=1)
    reporter.advance(rows=1)
    reporter.close()
    assert reporter.enabled is False
    assert console.file.getvalue() == ""


def test_reporter_renders_on_terminal() -> None:
    console = Console(file=io.StringIO(), force_terminal=True, width=120)
    reporter = ProgressReporter(enabled=True, console=console)
    reporter.start(total=2)
    reporter.advance(rows=3, current_url="https://files.example.com/" + "x" * 80)
    reporter.advance(rows=1)
    reporter.close()
    assert reporter.summary()["rows"] == 4


def test_advance_requires_start() -> None:
    with pytest.raises(RuntimeError):
        ProgressReporter(enabled=False).advance()


def test_disabled_activity_is_noop() -> None:
    activity = ProgressActivity(enabled=False, console=Console(file=io.StringIO()))
    activity.start("Checking for results...")
    activity.update("still waiting")
    activity.close()
