"""Split BAM by reads - route alignments into one BAM per list of read names."""

from split_bam_by_reads.driver.split import main_split, split_bam

__all__ = ["split_bam", "main_split"]
