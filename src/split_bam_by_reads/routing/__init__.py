"""Routing of records into per-list buckets."""

from split_bam_by_reads.routing.router import BucketRouter
from split_bam_by_reads.routing.types import UNMATCHED, Bucket, BucketSummary, RoutingOutcome

__all__ = ["UNMATCHED", "Bucket", "BucketRouter", "BucketSummary", "RoutingOutcome"]
