"""Engine components: admin calls → export polling → shard fetch → merge."""

from .admin_client import PlayFabAdminClient, SegmentExport
from .coordinator import ExportCoordinator, ExportJob
from .fetcher import FetchResponse, Fetcher
from .merger import MergeSummary, ShardMerger

__all__ = [
    "ExportCoordinator",
    "ExportJob",
    "FetchResponse",
    "Fetcher",
    "MergeSummary",
    "PlayFabAdminClient",
    "SegmentExport",
    "ShardMerger",
]
