"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository, load_credentials
from .models import ExportState, ExporterConfig, PlayFabCredentials

__all__ = [
    "ConfigLocator",
    "ConfigRepository",
    "ExportState",
    "ExporterConfig",
    "PlayFabCredentials",
    "load_credentials",
]
