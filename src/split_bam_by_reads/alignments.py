"""BAM input and output through pysam."""

import os
from collections.abc import Iterable, Iterator, Sequence
from contextlib import ExitStack
from pathlib import Path

import pysam

from split_bam_by_reads.constants import BAM_SUFFIX
from split_bam_by_reads.errors import DecodeError, SourceUnreadable, WriteFailure
from split_bam_by_reads.readsets.types import ReadNameSet
from split_bam_by_reads.routing.types import Bucket


def output_path_for(source: str | Path) -> Path:
    """Name of the BAM written for a read-name list: its last suffix swapped for .bam."""
    return Path(source).with_suffix(BAM_SUFFIX)


def check_output_paths(bam_path: str | Path, sources: Iterable[str | Path]) -> list[Path]:
    """
    Derive output paths and refuse collisions before anything is opened.

    Two lists mapping to one output, or an output replacing the input BAM,
    would silently lose records.
    """
    input_path = Path(bam_path).resolve()
    seen: dict[Path, Path] = {}
    outputs = []

    for source in sources:
        output = output_path_for(source)
        resolved = output.resolve()
        if resolved == input_path:
            raise WriteFailure(f"output for {source} would overwrite the input BAM {bam_path}")
        if resolved in seen:
            raise WriteFailure(f"{seen[resolved]} and {source} would both write to {output}")
        seen[resolved] = Path(source)
        outputs.append(output)

    return outputs


def open_reader(bam_path: str | Path, threads: int) -> pysam.AlignmentFile:
    """
    Open the input for sequential reading.

    htslib detects SAM, BAM or CRAM from the file contents. Headers without
    @SQ lines (unaligned reads) are accepted.
    """
    try:
        return pysam.AlignmentFile(str(bam_path), "r", threads=threads, check_sq=False)
    except (OSError, ValueError) as exc:
        raise SourceUnreadable(f"cannot open BAM {bam_path}: {exc}") from exc


def iter_records(reader: pysam.AlignmentFile) -> Iterator[pysam.AlignedSegment]:
    """
    Yield every record in file order, without needing an index.

    Decoder failures, including read names that are not valid text, are
    raised as DecodeError.
    """
    try:
        for record in reader.fetch(until_eof=True):
            if record.query_name is None:
                raise DecodeError(f"record without a read name in {os.fsdecode(reader.filename)}")
            yield record
    except (OSError, ValueError, UnicodeDecodeError) as exc:
        raise DecodeError(f"cannot decode record from {os.fsdecode(reader.filename)}: {exc}") from exc


def open_buckets(
    read_sets: Sequence[ReadNameSet],
    template: pysam.AlignmentFile,
    threads: int,
    stack: ExitStack,
) -> list[Bucket]:
    """
    Open one output BAM per read-name set, sharing the template's header.

    Writers are registered on stack so they are closed however the run ends.
    """
    buckets = []
    for read_set in read_sets:
        output = output_path_for(read_set.source)
        try:
            writer = pysam.AlignmentFile(str(output), "wb", template=template, threads=threads)
        except (OSError, ValueError) as exc:
            raise WriteFailure(f"cannot create {output}: {exc}") from exc
        stack.callback(_close_writer, writer, output)
        buckets.append(Bucket(read_set.names, writer, read_set.source, output))
    return buckets


def _close_writer(writer: pysam.AlignmentFile, output: Path) -> None:
    try:
        writer.close()
    except OSError as exc:
        raise WriteFailure(f"cannot finish {output}: {exc}") from exc
