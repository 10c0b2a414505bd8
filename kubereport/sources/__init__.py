"""Data sources that list cluster objects by kind."""

from kubereport.sources.base import DataSource
from kubereport.sources.kubectl import KubectlDataSource
from kubereport.sources.snapshot import SnapshotDataSource

__all__ = [
    "DataSource",
    "KubectlDataSource",
    "SnapshotDataSource",
]
