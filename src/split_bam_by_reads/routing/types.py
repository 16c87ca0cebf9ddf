"""Shared type definitions for bucket routing."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from split_bam_by_reads.readsets.types import ReadName


class NamedRecord(Protocol):
    """Anything carrying a read name, such as pysam.AlignedSegment."""

    @property
    def query_name(self) -> str | None: ...


class RecordWriter(Protocol):
    """Destination of routed records, such as a pysam.AlignmentFile opened for writing."""

    def write(self, record: NamedRecord) -> object: ...


@dataclass(slots=True)
class Bucket:
    """One read-name set paired with the writer for its output BAM."""

    names: set[ReadName]
    writer: RecordWriter
    source: Path
    output_path: Path
    written: int = 0


@dataclass(frozen=True, slots=True)
class RoutingOutcome:
    """Where a record went: a bucket index, or None when no bucket wanted it."""

    bucket_index: int | None

    @property
    def matched(self) -> bool:
        return self.bucket_index is not None


UNMATCHED = RoutingOutcome(None)


@dataclass(frozen=True, slots=True)
class BucketSummary:
    """Final state of one bucket after the input has been consumed."""

    source: Path
    output_path: Path
    written: int
    leftover: frozenset[ReadName] = field(default_factory=frozenset)

    @property
    def leftover_count(self) -> int:
        return len(self.leftover)
