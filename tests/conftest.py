"""Shared fixtures: fake transports, recording sleep and sample settings."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import httpx
import pytest

from segment_exporter.config import ConfigLocator, ConfigRepository, ExporterConfig, PlayFabCredentials
from segment_exporter.engine import FetchResponse


class RecordingSleep:
    """Stand-in for ``time.sleep`` that only remembers requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeFetcher:
    """Serve canned bodies keyed by URL and record every request."""

    def __init__(self, files: dict[str, str | tuple[int, str]]) -> None:
        self.files = files
        self.requested: list[str] = []
        self.closed = False

    def fetch(self, url: str) -> FetchResponse:
        self.requested.append(url)
        entry = self.files.get(url, (404, "not found"))
        status, body = entry if isinstance(entry, tuple) else (200, entry)
        return FetchResponse(url=url, status_code=status, text=body)

    def close(self) -> None:
        self.closed = True


class StubAdminClient:
    """Replay scripted admin responses (``SegmentExport`` or exceptions)."""

    def __init__(self, statuses: Iterable = (), export_id: str = "exp42") -> None:
        self.statuses = list(statuses)
        self.export_id = export_id
        self.started: list[str] = []
        self.polled: list[str] = []
        self.closed = False

    def start_export(self, segment_id: str) -> str:
        self.started.append(segment_id)
        return self.export_id

    def get_export(self, export_id: str):
        self.polled.append(export_id)
        outcome = self.statuses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fake_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def stub_admin() -> Callable[..., StubAdminClient]:
    return StubAdminClient


@pytest.fixture
def exporter_config() -> ExporterConfig:
    return ExporterConfig(enable_progress_bar=False)


@pytest.fixture
def credentials() -> PlayFabCredentials:
    return PlayFabCredentials(title_id="ABCD1", secret_key="top-secret")


@pytest.fixture
def mock_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.MockTransport]:
    return httpx.MockTransport


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigRepository:
    monkeypatch.setenv("SEGMENT_EXPORTER_HOME", str(tmp_path))
    return ConfigRepository(ConfigLocator(project_root=tmp_path))
