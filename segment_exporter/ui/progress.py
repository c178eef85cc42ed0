"""Terminal progress helpers with Rich-based rendering."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.errors import LiveError
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.status import Status


@dataclass
class ProgressState:
    total: int
    downloaded: int = 0
    rows: int = 0
    current_url: str | None = None


class ProgressReporter:
    """Render shard download progress and keep counters for CLI feedback."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.enabled = enabled
        self._console = console
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self.state: ProgressState | None = None

    def start(self, total: int) -> None:
        self.state = ProgressState(total=total)
        if not self.enabled:
            return
        if self._console is None:
            self._console = Console()
        if not self._console.is_terminal:
            # Non-interactive output: stay silent instead of printing every refresh
            self.enabled = False
            return
        self._progress = Progress(
            SpinnerColumn(style="cyan"),
            TextColumn("[bold blue]shards"),
            BarColumn(bar_width=None, complete_style="green", finished_style="green"),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("[green]rows {task.fields[rows]:>8}", justify="right"),
            TextColumn("[dim]{task.fields[current_url]}", justify="left"),
            refresh_per_second=8,
            expand=True,
            transient=True,
            console=self._console,
        )
        try:
            self._progress.__enter__()
        except LiveError:
            self.enabled = False
            self._progress = None
            return
        self._task_id = self._progress.add_task(
            "merge", total=total, rows=0, current_url="waiting..."
        )

    def advance(self, rows: int = 0, current_url: str | None = None) -> None:
        if not self.state:
            raise RuntimeError("ProgressReporter.start must be called before advance")
        self.state.downloaded += 1
        self.state.rows += rows
        if current_url:
            self.state.current_url = current_url
        if self._progress is not None and self._task_id is not None:
            display_url = self.state.current_url or ""
            if len(display_url) > 60:
                display_url = display_url[:57] + "..."
            self._progress.update(
                self._task_id, advance=1, rows=self.state.rows, current_url=display_url
            )

    def close(self) -> None:
        if self._progress is not None:
            self._progress.__exit__(None, None, None)
            self._progress = None
        self._task_id = None

    def summary(self) -> dict[str, int]:
        if not self.state:
            return {"downloaded": 0, "total": 0, "rows": 0}
        return {
            "downloaded": self.state.downloaded,
            "total": self.state.total,
            "rows": self.state.rows,
        }


class ProgressActivity:
    """Indeterminate activity indicator using Rich Status spinner."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.enabled = enabled
        self.console = console or Console()
        self._status: Status | None = None

    def start(self, message: str) -> None:
        if not self.enabled or self._status is not None:
            return
        self._status = self.console.status(message)
        self._status.start()

    def update(self, message: str) -> None:
        if self._status is not None:
            self._status.update(message)

    def close(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


__all__ = ["ProgressActivity", "ProgressReporter", "ProgressState"]
