"""In-memory exporter, handy for previews and tests."""

from __future__ import annotations

from .base import BaseExporter


class MemoryExporter(BaseExporter):
    """Collect rows in a list instead of writing them anywhere."""

    def __init__(self) -> None:
        self.header: str | None = None
        self.lines: list[str] = []
        self.closed = False

    def write_header(self, line: str) -> None:
        self.header = line
        self.lines.append(line)

    def export(self, line: str) -> None:
        self.lines.append(line)

    def flush(self) -> None:
        return

    def close(self) -> None:
        self.closed = True

    def getvalue(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


__all__ = ["MemoryExporter"]
