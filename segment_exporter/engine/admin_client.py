"""Thin client for the PlayFab admin segment export endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from ..config import ExporterConfig, PlayFabCredentials
from ..errors import RemoteServiceError


@dataclass(slots=True)
class SegmentExport:
    """Status snapshot of a server-side segment export job."""

    export_id: str
    state: str
    index_url: str | None = None


class PlayFabAdminClient:
    """Call ``ExportPlayersInSegment`` and ``GetSegmentExport``."""

    def __init__(
        self,
        credentials: PlayFabCredentials,
        config: ExporterConfig,
        transport: httpx.BaseTransport | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.credentials = credentials
        self.logger = logger or structlog.get_logger("segment_exporter.admin")
        self._client = httpx.Client(
            base_url=config.base_url_for(credentials.title_id),
            timeout=config.request_timeout,
            headers={"X-SecretKey": credentials.secret_key},
            transport=transport,
        )

    def __enter__(self) -> "PlayFabAdminClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def start_export(self, segment_id: str) -> str:
        data = self._call("ExportPlayersInSegment", {"SegmentId": segment_id}, "Error exporting segment")
        export_id = data.get("ExportId")
        if not export_id:
            raise RemoteServiceError("Error exporting segment: response did not include an ExportId")
        return str(export_id)

    def get_export(self, export_id: str) -> SegmentExport:
        data = self._call(
            "GetSegmentExport", {"ExportId": export_id}, "Error getting segment index URL"
        )
        return SegmentExport(
            export_id=str(data.get("ExportId") or export_id),
            state=str(data.get("State") or ""),
            index_url=data.get("IndexUrl") or None,
        )

    # ------------------------------------------------------------------
    def _call(self, operation: str, payload: dict[str, Any], context: str) -> dict[str, Any]:
        try:
            response = self._client.post(f"/Admin/{operation}", json=payload)
        except httpx.HTTPError as exc:
            self.logger.debug("admin_call_failed", operation=operation, error=str(exc))
            raise RemoteServiceError(f"{context}: {exc}") from exc

        try:
            envelope = response.json()
        except ValueError:
            envelope = None
        if not isinstance(envelope, dict):
            raise RemoteServiceError(f"{context}: HTTP {response.status_code}")

        if envelope.get("error") or response.is_error:
            message = envelope.get("errorMessage") or envelope.get("error") or f"HTTP {response.status_code}"
            self.logger.debug(
                "admin_call_error",
                operation=operation,
                status=response.status_code,
                error_code=envelope.get("errorCode"),
                message=message,
            )
            raise RemoteServiceError(f"{context}: {message}", error_code=envelope.get("errorCode"))

        data = envelope.get("data")
        if not isinstance(data, dict):
            raise RemoteServiceError(f"{context}: response did not include a data payload")
        return data


__all__ = ["PlayFabAdminClient", "SegmentExport"]
