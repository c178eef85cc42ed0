"""Exception hierarchy shared by the exporter components."""

from __future__ import annotations


class ExportError(Exception):
    """Base class for every fatal export failure."""


class ConfigurationError(ExportError):
    """A required input, credential or configuration value is missing or invalid."""


class RemoteServiceError(ExportError):
    """The segment admin API reported an application-level error."""

    def __init__(self, message: str, error_code: int | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class TransferError(ExportError):
    """A file download returned a non-success status or failed in transport."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class OutputError(ExportError):
    """The merged output file could not be written."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class IntegrityError(ExportError):
    """A downloaded shard does not start with the expected header row."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


__all__ = [
    "ConfigurationError",
    "ExportError",
    "IntegrityError",
    "OutputError",
    "RemoteServiceError",
    "TransferError",
]
