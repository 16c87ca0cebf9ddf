from pathlib import Path

import pysam
import pytest

HEADER = {
    "HD": {"VN": "1.6", "SO": "unsorted"},
    "SQ": [{"SN": "chr1", "LN": 10000}],
}

UNALIGNED_HEADER = {"HD": {"VN": "1.6", "SO": "unknown"}}


def _write_alignments(path: Path, names: list[str], mode: str, unaligned: bool) -> Path:
    header = pysam.AlignmentHeader.from_dict(UNALIGNED_HEADER if unaligned else HEADER)
    with pysam.AlignmentFile(str(path), mode, header=header) as out:
        for i, name in enumerate(names):
            segment = pysam.AlignedSegment(header)
            segment.query_name = name
            segment.query_sequence = "ACGT"
            segment.query_qualities = pysam.qualitystring_to_array("IIII")
            if unaligned:
                segment.flag = 4
                segment.reference_id = -1
                segment.reference_start = -1
            else:
                segment.flag = 0
                segment.reference_id = 0
                # Position encodes input order so outputs can be checked against it.
                segment.reference_start = i * 10
                segment.mapping_quality = 60
                segment.cigartuples = [(0, 4)]
            out.write(segment)
    return path


def _read_bam(path: Path) -> list[tuple[str, int]]:
    with pysam.AlignmentFile(str(path), "rb", check_sq=False) as bam:
        return [(r.query_name, r.reference_start) for r in bam.fetch(until_eof=True)]


@pytest.fixture
def make_bam(tmp_path: Path):
    """Write a small BAM with one record per name, in the given order."""

    def factory(names: list[str], name: str = "input.bam", unaligned: bool = False) -> Path:
        return _write_alignments(tmp_path / name, names, "wb", unaligned)

    return factory


@pytest.fixture
def make_sam(tmp_path: Path):
    """Write a small SAM text file with one record per name."""

    def factory(names: list[str], name: str = "input.sam") -> Path:
        return _write_alignments(tmp_path / name, names, "w", unaligned=False)

    return factory


@pytest.fixture
def read_bam():
    """Read back (name, position) pairs from a BAM in file order."""
    return _read_bam


@pytest.fixture
def write_list(tmp_path: Path):
    """Write a read-name list file from raw text."""

    def factory(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return factory
