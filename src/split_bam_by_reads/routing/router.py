"""First-match routing of records into buckets."""

import logging
from collections.abc import Sequence

from split_bam_by_reads.constants import TRACE
from split_bam_by_reads.errors import WriteFailure
from split_bam_by_reads.routing.types import (
    UNMATCHED,
    Bucket,
    BucketSummary,
    NamedRecord,
    RoutingOutcome,
)

logger = logging.getLogger(__name__)


class BucketRouter:
    """
    Route each record to the first bucket whose set holds its read name.

    Buckets are searched in the order given, so earlier buckets take
    precedence over later ones for names listed in several sets. A name is
    removed from a bucket's set when it matches, so each bucket receives at
    most one record per name.
    """

    def __init__(self, buckets: Sequence[Bucket]):
        self._buckets = list(buckets)
        self.matched = 0
        self.unmatched = 0

    def route(self, record: NamedRecord) -> RoutingOutcome:
        """Write record to the first bucket that wants it and report where it went."""
        name = record.query_name

        for index, bucket in enumerate(self._buckets):
            if name not in bucket.names:
                continue

            bucket.names.remove(name)
            try:
                bucket.writer.write(record)
            except OSError as exc:
                raise WriteFailure(f"failed writing to {bucket.output_path}: {exc}") from exc

            bucket.written += 1
            self.matched += 1
            return RoutingOutcome(index)

        self.unmatched += 1
        return UNMATCHED

    def finalize(self) -> list[BucketSummary]:
        """Report the names each bucket asked for but never received."""
        summaries = []
        for bucket in self._buckets:
            leftover = frozenset(bucket.names)
            logger.info("%s had %d unplaced reads", bucket.output_path, len(leftover))
            if leftover and logger.isEnabledFor(TRACE):
                logger.log(TRACE, "%s unplaced: %s", bucket.output_path, ", ".join(sorted(leftover)))
            summaries.append(
                BucketSummary(
                    source=bucket.source,
                    output_path=bucket.output_path,
                    written=bucket.written,
                    leftover=leftover,
                )
            )
        return summaries
