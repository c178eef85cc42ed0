"""File based exporter writing newline-terminated rows."""

from __future__ import annotations

from pathlib import Path

from ...errors import ConfigurationError, OutputError
from .base import BaseExporter


class FileExporter(BaseExporter):
    """Write rows to a UTF-8 text file as they arrive."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise ConfigurationError(f"Cannot open output file {self.path}: {exc}") from exc
        self.header: str | None = None
        self.rows = 0

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write_header(self, line: str) -> None:
        self.header = line
        self._write(line)

    def export(self, line: str) -> None:
        self._write(line)
        self.rows += 1

    def flush(self) -> None:
        try:
            self._file.flush()
        except OSError as exc:
            raise OutputError(f"Cannot write output file {self.path}: {exc}", path=str(self.path)) from exc

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self._file.close()
        except OSError as exc:
            raise OutputError(f"Cannot write output file {self.path}: {exc}", path=str(self.path)) from exc

    def _write(self, line: str) -> None:
        try:
            self._file.write(line)
            self._file.write("\n")
        except OSError as exc:
            raise OutputError(f"Cannot write output file {self.path}: {exc}", path=str(self.path)) from exc


__all__ = ["FileExporter"]
