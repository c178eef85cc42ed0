"""Reusable HTTP GET capability for manifests and shard files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import httpx
import structlog

from ..config import ExporterConfig
from ..errors import TransferError


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Fetcher:
    """Issue plain GET requests through a single shared client."""

    def __init__(
        self,
        config: ExporterConfig,
        transport: httpx.BaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("segment_exporter.fetcher")
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=config.request_timeout,
            transport=transport,
        )

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(self, url: str) -> FetchResponse:
        """GET ``url`` once; transport failures surface as :class:`TransferError`."""

        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            self.logger.debug("fetch_error", url=url, error=str(exc))
            raise TransferError(f"Error downloading {url}: {exc}", url=url) from exc
        self.logger.debug("fetched", url=url, status=response.status_code, size=len(response.content))
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            text=response.content.decode("utf-8-sig", errors="replace"),
            headers=dict(response.headers),
        )


__all__ = ["FetchResponse", "Fetcher"]
