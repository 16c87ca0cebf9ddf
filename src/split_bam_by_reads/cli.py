"""Command-line interface for splitting a BAM by read-name lists."""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from split_bam_by_reads.constants import DEFAULT_THREADS, TRACE
from split_bam_by_reads.driver.split import main_split
from split_bam_by_reads.errors import SplitBamError

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure logging to write to stderr."""
    logging.addLevelName(TRACE, "TRACE")
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def verbosity_to_level(verbose: int) -> int:
    """Map the count of -v flags to a log level."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    if verbose == 2:
        return logging.DEBUG
    return TRACE


def _package_version() -> str:
    try:
        return version("split-bam-by-reads")
    except PackageNotFoundError:
        return "unknown"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="split-bam-by-reads",
        description="Split a BAM file into one BAM per list of read names.",
    )

    parser.add_argument(
        "bam",
        help="Input SAM, BAM or CRAM file",
    )

    parser.add_argument(
        "-r",
        "--reads",
        action="append",
        default=[],
        metavar="READS",
        help="Text file with one read name per line; repeat for each file. One output BAM is "
        "written per file (earlier files take priority for reads listed more than once)",
    )

    parser.add_argument(
        "-t",
        "--threads",
        type=int,
        default=DEFAULT_THREADS,
        help=f"Threads for BAM reading and writing (default: {DEFAULT_THREADS})",
    )

    parser.add_argument(
        "--skip-blank-lines",
        action="store_true",
        help="Ignore blank lines in read-name files instead of treating them as an empty name",
    )

    parser.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show a progress counter on stderr (default: only when stderr is a terminal)",
    )

    debug = parser.add_argument_group("Debug-Options")
    debug.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Logging level [-v: Info, -vv: Debug, -vvv: Trace]",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help(sys.stderr)
        return 2

    args = parser.parse_args(argv)

    configure_logging(verbosity_to_level(args.verbose))
    logger.debug("DEBUG logging enabled")
    logger.log(TRACE, "TRACE logging enabled")

    if args.threads < 1:
        parser.error(f"--threads must be at least 1, got {args.threads}")

    try:
        main_split(
            bam_path=args.bam,
            read_paths=args.reads,
            threads=args.threads,
            skip_blank=args.skip_blank_lines,
            progress=args.progress,
        )
    except SplitBamError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
