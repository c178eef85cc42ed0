"""Download the shards listed in an export manifest and merge them into one sink."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

import structlog

from ..errors import IntegrityError, TransferError
from .exporter import BaseExporter
from .fetcher import Fetcher, FetchResponse


class ShardProgress(Protocol):
    """Receiver for per-shard progress, e.g. :class:`~segment_exporter.ui.ProgressReporter`."""

    def start(self, total: int) -> None: ...

    def advance(self, rows: int = 0, current_url: str | None = None) -> None: ...

    def close(self) -> None: ...


@dataclass(slots=True)
class MergeSummary:
    shards: int = 0
    rows: int = 0
    header: str | None = None


def _split_lines(text: str) -> list[str]:
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


class ShardMerger:
    """Fetch a manifest, then stream every shard into a single output.

    Shards are processed strictly in manifest order; only the first shard's
    header row reaches the sink.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        shard_delay: float = 1.0,
        header_marker: str = "PlayerId",
        sleep: Callable[[float], None] = time.sleep,
        progress: ShardProgress | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.shard_delay = shard_delay
        self.header_marker = header_marker
        self.sleep = sleep
        self.progress = progress
        self.logger = logger or structlog.get_logger("segment_exporter.merger")

    def fetch_manifest(self, manifest_url: str) -> list[str]:
        response = self._get(manifest_url, "index file")
        entries = response.text.split("\n")
        self.logger.info("manifest_fetched", url=manifest_url, entries=len(entries))
        return entries

    def merge(self, manifest_url: str, sink: BaseExporter) -> MergeSummary:
        return self.merge_shards(self.fetch_manifest(manifest_url), sink)

    def merge_shards(self, shard_urls: Sequence[str], sink: BaseExporter) -> MergeSummary:
        urls = [url.strip() for url in shard_urls if url.strip()]
        total = len(urls)
        summary = MergeSummary()
        header_written = False
        self.logger.info("merge_started", shards=total)
        if self.progress is not None:
            self.progress.start(total)
        try:
            for index, url in enumerate(urls, start=1):
                lines = _split_lines(self._get(url, "tsv file").text)
                rows = 0
                if lines != [""]:
                    header = lines[0]
                    if self.header_marker not in header:
                        raise IntegrityError(
                            f"First row of exported file {url} did not contain a header row",
                            url=url,
                        )
                    if not header_written:
                        sink.write_header(header)
                        summary.header = header
                        header_written = True
                    for line in lines[1:]:
                        if not line:
                            continue
                        sink.export(line)
                        rows += 1
                else:
                    self.logger.warning("shard_empty", url=url)
                sink.flush()
                summary.shards += 1
                summary.rows += rows
                self.logger.info("shard_merged", url=url, downloaded=index, total=total, rows=rows)
                if self.progress is not None:
                    self.progress.advance(rows=rows, current_url=url)
                self.sleep(self.shard_delay)
        finally:
            if self.progress is not None:
                self.progress.close()
        self.logger.info("merge_complete", shards=summary.shards, rows=summary.rows)
        return summary

    def _get(self, url: str, label: str) -> FetchResponse:
        response = self.fetcher.fetch(url)
        if not response.ok:
            raise TransferError(
                f"Error getting {label}: HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response


__all__ = ["MergeSummary", "ShardMerger", "ShardProgress"]
