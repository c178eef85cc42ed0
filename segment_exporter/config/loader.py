"""Configuration loading helpers for the segment exporter."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import ExporterConfig, PlayFabCredentials

CONFIG_FILENAME = "exporter_config.yaml"
HOME_ENV = "SEGMENT_EXPORTER_HOME"
SECRET_KEY_ENV = "PLAYFAB_SECRET_KEY"
TITLE_ID_ENV = "PLAYFAB_TITLE_ID"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Configuration file could not be parsed: {path}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    return data


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ())) or "config"
    return f"{location}: {error.get('msg', 'invalid value')}"


def _write_file(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as stream:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(payload, stream, allow_unicode=True, sort_keys=False)
        else:
            json.dump(payload, stream, indent=2, ensure_ascii=False)


def default_home() -> Path:
    """Return the exporter home: ``$SEGMENT_EXPORTER_HOME`` or ``~/.segment_exporter``."""

    env_root = os.environ.get(HOME_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()
    return (Path.home() / ".segment_exporter").resolve()


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the data and log directories under the exporter home."""

    project_root: Path | None = None
    data_dir: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        if os.environ.get(HOME_ENV) or self.project_root is None:
            root = default_home()
        else:
            root = self.project_root.resolve()
        self.project_root = root
        self.data_dir = (root / "data").resolve()
        self.logs_dir = (root / "logs").resolve()
        self.ensure_directories()

    def ensure_directories(self) -> None:
        for directory in (self.data_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def config_path(self) -> Path:
        return self.data_dir / CONFIG_FILENAME


class ConfigRepository:
    """Repository encapsulating config IO and schema validation."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()
        self._cache: ExporterConfig | None = None

    def load_config(self) -> ExporterConfig:
        if self._cache is not None:
            return self._cache
        path = self.locator.config_path()
        if path.exists():
            payload = _read_file(path)
            try:
                config = ExporterConfig.model_validate(payload)
            except ValidationError as exc:
                raise ConfigurationError(
                    f"Invalid exporter configuration in {path}: {_first_error(exc)}"
                ) from exc
        else:
            config = ExporterConfig()
            self.save_config(config)
        self._cache = config
        return config

    def save_config(self, config: ExporterConfig) -> None:
        path = self.locator.config_path()
        _write_file(path, config.model_dump(mode="json"))
        self._cache = config


def load_credentials(
    title_id: str | None = None, environ: Mapping[str, str] | None = None
) -> PlayFabCredentials:
    """Build admin API credentials from the CLI title id and the environment."""

    env = os.environ if environ is None else environ
    title = title_id or env.get(TITLE_ID_ENV)
    if not title:
        raise ConfigurationError("Missing required value for option '--title'")
    secret_key = env.get(SECRET_KEY_ENV)
    if not secret_key:
        raise ConfigurationError(
            f"The PlayFab secret key environment variable ({SECRET_KEY_ENV}) is not set."
        )
    return PlayFabCredentials(title_id=title, secret_key=secret_key)


__all__ = [
    "CONFIG_FILENAME",
    "ConfigLocator",
    "ConfigRepository",
    "SECRET_KEY_ENV",
    "TITLE_ID_ENV",
    "default_home",
    "load_credentials",
]
