"""Driving the record stream through the router."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from tqdm import tqdm

from split_bam_by_reads.routing.router import BucketRouter
from split_bam_by_reads.routing.types import BucketSummary, NamedRecord

logger = logging.getLogger(__name__)


class DriverState(Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SplitSummary:
    """Totals for a completed run."""

    records_seen: int = 0
    matched: int = 0
    unmatched: int = 0
    buckets: list[BucketSummary] = field(default_factory=list)

    @property
    def leftover_counts(self) -> list[int]:
        return [bucket.leftover_count for bucket in self.buckets]


class StreamDriver:
    """
    Feed records to a router one at a time, then finalize.

    States: IDLE -> STREAMING -> FINALIZING -> DONE. Any error while the
    stream is being consumed moves the driver to FAILED and propagates; no
    summary is produced. A driver runs once.
    """

    def __init__(self, router: BucketRouter, progress: bool | None = None):
        self.router = router
        # None lets tqdm decide: shown on a TTY, hidden otherwise.
        self.progress = progress
        self.state = DriverState.IDLE

    def run(self, records: Iterable[NamedRecord]) -> SplitSummary:
        if self.state is not DriverState.IDLE:
            raise RuntimeError(f"driver already used (state {self.state.value})")

        try:
            stream = iter(records)
        except BaseException:
            self.state = DriverState.FAILED
            raise

        self.state = DriverState.STREAMING
        seen = 0
        try:
            for record in tqdm(stream, unit=" reads", disable=self._disable_progress()):
                self.router.route(record)
                seen += 1
        except BaseException:
            self.state = DriverState.FAILED
            raise

        logger.debug("Stream done: %d records", seen)

        self.state = DriverState.FINALIZING
        buckets = self.router.finalize()
        summary = SplitSummary(
            records_seen=seen,
            matched=self.router.matched,
            unmatched=self.router.unmatched,
            buckets=buckets,
        )
        self.state = DriverState.DONE
        return summary

    def _disable_progress(self) -> bool | None:
        if self.progress is None:
            return None
        return not self.progress
