"""
Data structures for the remote file index and the per-cycle download plan.
"""

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class ManifestRecord:
    """One row of the remote file index."""

    path: str
    mtime: float
    size: int


@dataclass
class SyncPlan:
    """The ordered subset of manifest records to download in one cycle."""

    records: list[ManifestRecord] = field(default_factory=list)

    def __iter__(self) -> Iterator[ManifestRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def paths(self) -> list[str]:
        return [record.path for record in self.records]

    @property
    def total_size(self) -> int:
        """Cumulative declared size of every planned record, in bytes."""
        return sum(record.size for record in self.records)
