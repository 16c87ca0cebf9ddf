"""Shared constants."""

# Default htslib thread count for BAM reading and writing.
DEFAULT_THREADS = 16

# Suffix given to every output BAM.
BAM_SUFFIX = ".bam"

# Log level below DEBUG for per-read detail.
TRACE = 5
