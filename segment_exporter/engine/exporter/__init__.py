"""Exporter SPI and implementations."""

from .base import BaseExporter
from .file_exporter import FileExporter
from .memory_exporter import MemoryExporter

__all__ = ["BaseExporter", "FileExporter", "MemoryExporter"]
