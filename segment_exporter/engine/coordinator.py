"""Drive a segment export job until its manifest URL is published."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

import structlog

from ..config import ExportState
from ..errors import ConfigurationError
from .admin_client import PlayFabAdminClient


@dataclass(slots=True)
class ExportJob:
    """An export job as seen by this process."""

    export_id: str
    segment_id: str | None = None
    state: ExportState = ExportState.PENDING
    index_url: str | None = None


class ExportCoordinator:
    """Start or resume an export and poll it to completion.

    ``sleep`` is the only suspension point; tests pass a recorder instead of
    :func:`time.sleep` so the unbounded wait can be fast-forwarded.
    """

    def __init__(
        self,
        admin_client: PlayFabAdminClient,
        poll_interval: float = 10.0,
        sleep: Callable[[float], None] = time.sleep,
        on_wait: Callable[[int], None] | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.admin_client = admin_client
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.on_wait = on_wait
        self.logger = logger or structlog.get_logger("segment_exporter.coordinator")

    def start_export(self, segment_id: str) -> str:
        self.logger.info("export_starting", segment_id=segment_id)
        export_id = self.admin_client.start_export(segment_id)
        self.logger.info("export_started", segment_id=segment_id, export_id=export_id)
        return export_id

    def await_manifest(self, export_id: str) -> str:
        """Poll until the job completes and return its index URL."""

        attempt = 0
        while True:
            attempt += 1
            status = self.admin_client.get_export(export_id)
            if status.state == ExportState.COMPLETE.value and status.index_url:
                self.logger.info(
                    "manifest_ready", export_id=export_id, index_url=status.index_url, attempts=attempt
                )
                return status.index_url
            self.logger.info(
                "export_pending",
                export_id=export_id,
                state=status.state,
                attempt=attempt,
                retry_in=self.poll_interval,
            )
            if self.on_wait is not None:
                self.on_wait(attempt)
            self.sleep(self.poll_interval)

    def resolve_manifest(
        self, segment_id: str | None = None, export_id: str | None = None
    ) -> ExportJob:
        """Resume ``export_id`` if given, otherwise start an export for ``segment_id``."""

        if export_id:
            job = ExportJob(export_id=export_id)
        elif segment_id:
            job = ExportJob(export_id=self.start_export(segment_id), segment_id=segment_id)
        else:
            raise ConfigurationError("Missing required value for option '--segment'")
        job.index_url = self.await_manifest(job.export_id)
        job.state = ExportState.COMPLETE
        return job


__all__ = ["ExportCoordinator", "ExportJob"]
