from __future__ import annotations

import pytest

from segment_exporter.engine import SegmentExport
from segment_exporter.errors import ConfigurationError, IntegrityError, RemoteServiceError
from segment_exporter.orchestrator import ExportOrchestrator

INDEX_URL = "https://files.example.com/exp42/index.txt"
SHARD_1 = "https://files.example.com/exp42/part-1.tsv"
SHARD_2 = "https://files.example.com/exp42/part-2.tsv"


@pytest.fixture
def files() -> dict:
    return {
        INDEX_URL: f"{SHARD_1}\n{SHARD_2}\n",
        SHARD_1: "PlayerId\tName\nP1\tAlice\n",
        SHARD_2: "PlayerId\tName\nP2\tBob\n\n",
    }


def pending() -> SegmentExport:
    return SegmentExport(export_id="exp42", state="Pending")


def complete() -> SegmentExport:
    return SegmentExport(export_id="exp42", state="Complete", index_url=INDEX_URL)


def test_end_to_end_segment_download(tmp_path, files, exporter_config, stub_admin, fake_fetcher, recording_sleep) -> None:
    admin = stub_admin([pending(), complete()], export_id="exp42")
    fetcher = fake_fetcher(files)
    orchestrator = ExportOrchestrator(exporter_config, admin, fetcher, sleep=recording_sleep)
    output = tmp_path / "players.tsv"

    summary = orchestrator.run(output, segment_id="seg1", progress_enabled=False)

    assert output.read_text(encoding="utf-8") == "PlayerId\tName\nP1\tAlice\nP2\tBob\n"
    assert admin.started == ["seg1"]
    assert fetcher.requested == [INDEX_URL, SHARD_1, SHARD_2]
    # one status wait plus one pause per shard
    assert recording_sleep.calls == [10.0, 1.0, 1.0]
    assert summary == {
        "export_id": "exp42",
        "index_url": INDEX_URL,
        "shards": 2,
        "rows": 2,
        "output": str(output),
    }


def test_resume_existing_export_skips_start(tmp_path, files, exporter_config, stub_admin, fake_fetcher, recording_sleep) -> None:
    admin = stub_admin([complete()])
    orchestrator = ExportOrchestrator(exporter_config, admin, fake_fetcher(files), sleep=recording_sleep)
    orchestrator.run(tmp_path / "out.tsv", export_id="exp42", progress_enabled=False)
    assert admin.started == []
    assert admin.polled == ["exp42"]


def test_missing_inputs_raise_configuration_error(tmp_path, exporter_config, stub_admin, fake_fetcher) -> None:
    orchestrator = ExportOrchestrator(exporter_config, stub_admin(), fake_fetcher({}))
    with pytest.raises(ConfigurationError, match="--output"):
        orchestrator.run(None, segment_id="seg1")
    with pytest.raises(ConfigurationError, match="--segment"):
        orchestrator.run(tmp_path / "out.tsv")
    assert not (tmp_path / "out.tsv").exists()


def test_output_is_opened_before_remote_calls(tmp_path, exporter_config, stub_admin, fake_fetcher, recording_sleep) -> None:
    admin = stub_admin([RemoteServiceError("Error getting segment index URL: export expired")])
    orchestrator = ExportOrchestrator(exporter_config, admin, fake_fetcher({}), sleep=recording_sleep)
    output = tmp_path / "out.tsv"
    with pytest.raises(RemoteServiceError):
        orchestrator.run(output, export_id="exp42", progress_enabled=False)
    assert output.exists()
    assert output.read_text(encoding="utf-8") == ""


def test_partial_output_is_left_in_place(tmp_path, files, exporter_config, stub_admin, fake_fetcher, recording_sleep) -> None:
    files[SHARD_2] = "Name\nP2\tBob\n"
    orchestrator = ExportOrchestrator(exporter_config, stub_admin([complete()]), fake_fetcher(files), sleep=recording_sleep)
    output = tmp_path / "out.tsv"
    with pytest.raises(IntegrityError):
        orchestrator.run(output, export_id="exp42", progress_enabled=False)
    assert output.read_text(encoding="utf-8") == "PlayerId\tName\nP1\tAlice\n"


def test_check_status_and_close(exporter_config, stub_admin, fake_fetcher) -> None:
    admin = stub_admin([pending()])
    fetcher = fake_fetcher({})
    orchestrator = ExportOrchestrator(exporter_config, admin, fetcher)
    assert orchestrator.check_status("exp42").state == "Pending"
    with pytest.raises(ConfigurationError):
        orchestrator.check_status("")
    orchestrator.close()
    assert admin.closed and fetcher.closed


def test_unwritable_output_fails_before_remote_calls(tmp_path, exporter_config, stub_admin, fake_fetcher) -> None:
    admin = stub_admin([complete()])
    orchestrator = ExportOrchestrator(exporter_config, admin, fake_fetcher({}))
    with pytest.raises(ConfigurationError, match="Cannot open output file"):
        orchestrator.run(tmp_path, export_id="exp42", progress_enabled=False)
    assert admin.polled == []
