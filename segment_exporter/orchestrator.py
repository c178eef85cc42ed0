"""Export orchestrator wiring coordinator, merger, exporter and progress."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

import structlog

from .config import ExporterConfig
from .engine import ExportCoordinator, Fetcher, PlayFabAdminClient, SegmentExport, ShardMerger
from .engine.exporter import FileExporter
from .errors import ConfigurationError
from .ui import ProgressActivity, ProgressReporter


class ExportOrchestrator:
    """Run one segment export from job start to merged output file."""

    def __init__(
        self,
        config: ExporterConfig,
        admin_client: PlayFabAdminClient,
        fetcher: Fetcher,
        sleep: Callable[[float], None] = time.sleep,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.admin_client = admin_client
        self.fetcher = fetcher
        self.sleep = sleep
        self.logger = logger or structlog.get_logger("segment_exporter.orchestrator")

    def run(
        self,
        output_path: Path | str | None,
        segment_id: str | None = None,
        export_id: str | None = None,
        progress_enabled: bool | None = None,
    ) -> dict:
        if not output_path:
            raise ConfigurationError("Missing required value for option '--output'")
        if not export_id and not segment_id:
            raise ConfigurationError("Missing required value for option '--segment'")
        progress_flag = self.config.enable_progress_bar if progress_enabled is None else progress_enabled
        log = self.logger.bind(segment_id=segment_id, export_id=export_id)

        # The output file is opened up front and stays open until the merge ends
        with FileExporter(Path(output_path)) as sink:
            activity = ProgressActivity(enabled=progress_flag)
            coordinator = ExportCoordinator(
                self.admin_client,
                poll_interval=self.config.poll_interval,
                sleep=self.sleep,
                on_wait=lambda attempt: activity.update(
                    f"Export is not ready yet (check {attempt}). "
                    f"Waiting {self.config.poll_interval:g} seconds before trying again..."
                ),
                logger=log,
            )
            activity.start("Checking for results...")
            try:
                job = coordinator.resolve_manifest(segment_id=segment_id, export_id=export_id)
            finally:
                activity.close()

            merger = ShardMerger(
                self.fetcher,
                shard_delay=self.config.shard_delay,
                header_marker=self.config.header_marker,
                sleep=self.sleep,
                progress=ProgressReporter(enabled=progress_flag),
                logger=log.bind(export_id=job.export_id),
            )
            summary = merger.merge(job.index_url, sink)

        log.info("segment_download_complete", output=str(sink.path), rows=summary.rows)
        return {
            "export_id": job.export_id,
            "index_url": job.index_url,
            "shards": summary.shards,
            "rows": summary.rows,
            "output": str(sink.path),
        }

    def close(self) -> None:
        self.admin_client.close()
        self.fetcher.close()

    def check_status(self, export_id: str) -> SegmentExport:
        if not export_id:
            raise ConfigurationError("Missing required value for option '--export'")
        return self.admin_client.get_export(export_id)


__all__ = ["ExportOrchestrator"]
