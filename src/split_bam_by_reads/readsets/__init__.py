"""Read-name list loading."""

from split_bam_by_reads.readsets.load import load_read_name_sets, read_names_from_file
from split_bam_by_reads.readsets.types import ReadName, ReadNameSet

__all__ = ["ReadName", "ReadNameSet", "load_read_name_sets", "read_names_from_file"]
