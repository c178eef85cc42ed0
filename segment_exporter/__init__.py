"""Segment exporter: start PlayFab segment exports and merge their shard files."""

__version__ = "0.1.0"
