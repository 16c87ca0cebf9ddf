import logging
import time
from collections.abc import Sequence
from contextlib import ExitStack
from pathlib import Path

from split_bam_by_reads.alignments import (
    check_output_paths,
    iter_records,
    open_buckets,
    open_reader,
)
from split_bam_by_reads.constants import DEFAULT_THREADS
from split_bam_by_reads.driver.stream import SplitSummary, StreamDriver
from split_bam_by_reads.readsets.load import load_read_name_sets
from split_bam_by_reads.readsets.modes import choose_load_mode
from split_bam_by_reads.routing.router import BucketRouter

logger = logging.getLogger(__name__)


def split_bam(
    bam_path: str | Path,
    read_paths: Sequence[str | Path],
    threads: int = DEFAULT_THREADS,
    workers: int | None = None,
    skip_blank: bool = False,
    progress: bool | None = None,
) -> SplitSummary:
    """
    Split a BAM into one output per read-name list.

    Steps:
    1. Check that no two lists (and not the input) share an output path
    2. Load every read-name list, in parallel, keeping command-line order
    3. Open the input BAM and one writer per list with the input's header
    4. Route each record to the first list naming it, then report leftovers
    """
    total_start = time.perf_counter()
    bam_file = Path(bam_path)
    if threads < 1:
        raise ValueError(f"threads must be at least 1, got {threads}")

    load_mode = choose_load_mode(len(read_paths))
    logger.info(
        f"Starting: bam={bam_file.name}, lists={len(read_paths)}, threads={threads}, "
        f"load={load_mode.value}"
    )

    check_output_paths(bam_file, read_paths)

    # Pass 1: load read-name lists.
    t1_start = time.perf_counter()
    read_sets = load_read_name_sets(read_paths, workers=workers, skip_blank=skip_blank)
    t1 = time.perf_counter() - t1_start
    logger.debug("Loaded %d read-name lists in %.2fs", len(read_sets), t1)

    # Pass 2: stream records into buckets.
    t2_start = time.perf_counter()
    with ExitStack() as stack:
        reader = stack.enter_context(open_reader(bam_file, threads))
        buckets = open_buckets(read_sets, reader, threads, stack)
        driver = StreamDriver(BucketRouter(buckets), progress=progress)
        summary = driver.run(iter_records(reader))
    t2 = time.perf_counter() - t2_start

    total_passes = t1 + t2
    if total_passes > 0:
        logger.debug(
            "Timing breakdown: load=%.2fs (%.0f%%), split=%.2fs (%.0f%%)",
            t1,
            100 * t1 / total_passes,
            t2,
            100 * t2 / total_passes,
        )

    total_time = time.perf_counter() - total_start
    logger.info(
        "Split done: %d records, %d written, %d unmatched (total %.2fs)",
        summary.records_seen,
        summary.matched,
        summary.unmatched,
        total_time,
    )
    return summary


def main_split(
    bam_path: str,
    read_paths: Sequence[str],
    threads: int = DEFAULT_THREADS,
    skip_blank: bool = False,
    progress: bool | None = None,
) -> SplitSummary:
    """Main entry point that reports how many reads went to each output."""
    summary = split_bam(
        bam_path,
        read_paths,
        threads=threads,
        skip_blank=skip_blank,
        progress=progress,
    )

    for bucket in summary.buckets:
        logger.info(
            "%s: %d reads written",
            bucket.output_path,
            bucket.written,
        )
    return summary
