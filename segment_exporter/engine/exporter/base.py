"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class BaseExporter(ABC):
    """Line sink receiving one header row followed by data rows."""

    @abstractmethod
    def write_header(self, line: str) -> None:
        """Persist the header row."""

    @abstractmethod
    def export(self, line: str) -> None:
        """Persist a single data row."""

    def export_many(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.export(line)

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "BaseExporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["BaseExporter"]
