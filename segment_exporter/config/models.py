"""Pydantic models describing exporter settings and credentials."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ExportState(str, Enum):
    """Lifecycle states reported by the segment export job."""

    PENDING = "Pending"
    COMPLETE = "Complete"


class ExporterConfig(BaseModel):
    """Tunables for polling, downloading and rendering progress."""

    poll_interval: float = Field(default=10.0, gt=0, description="Seconds between export status checks.")
    shard_delay: float = Field(default=1.0, ge=0, description="Pause in seconds after each downloaded shard.")
    request_timeout: float = Field(default=30.0, gt=0)
    api_base_url: str = Field(default="https://{title_id}.playfabapi.com")
    header_marker: str = Field(default="PlayerId", min_length=1)
    enable_progress_bar: bool = True

    @field_validator("api_base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        if "{title_id}" not in value:
            raise ValueError("api_base_url must contain the {title_id} placeholder")
        return value.rstrip("/")

    def base_url_for(self, title_id: str) -> str:
        return self.api_base_url.format(title_id=title_id)


class PlayFabCredentials(BaseModel):
    """Title id and developer secret used to call the admin API."""

    title_id: str = Field(min_length=1)
    secret_key: str = Field(min_length=1, repr=False)


__all__ = ["ExportState", "ExporterConfig", "PlayFabCredentials"]
