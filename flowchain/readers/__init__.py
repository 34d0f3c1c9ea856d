"""Readers for loading analytics data from external sources."""

from flowchain.readers.snapshot_reader import SnapshotLoadError, SnapshotReader

__all__ = ["SnapshotLoadError", "SnapshotReader"]
