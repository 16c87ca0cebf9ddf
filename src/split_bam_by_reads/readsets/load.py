"""Loading of read-name lists from text files."""

import logging
from collections.abc import Iterable
from functools import partial
from pathlib import Path

from split_bam_by_reads.errors import SourceUnreadable
from split_bam_by_reads.readsets.modes import choose_load_mode, map_in_order
from split_bam_by_reads.readsets.types import ReadNameSet

logger = logging.getLogger(__name__)


def read_names_from_file(path: str | Path, skip_blank: bool = False) -> ReadNameSet:
    """
    Read one name per line into a new set.

    Lines are stripped of surrounding whitespace. A blank line becomes the
    empty-string name unless skip_blank is set.
    """
    source = Path(path)
    names: set[str] = set()

    try:
        with open(source, encoding="utf-8") as handle:
            for line in handle:
                name = line.strip()
                if skip_blank and not name:
                    continue
                names.add(name)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnreadable(f"cannot read read-name list {source}: {exc}") from exc

    return ReadNameSet(source, names)


def load_read_name_sets(
    paths: Iterable[str | Path],
    workers: int | None = None,
    skip_blank: bool = False,
) -> list[ReadNameSet]:
    """
    Load every read-name list, in parallel when there is more than one.

    The returned sets are in the same order as paths; that order is the
    routing priority.
    """
    paths = [Path(p) for p in paths]
    if not paths:
        return []

    load_one = partial(read_names_from_file, skip_blank=skip_blank)
    read_sets = map_in_order(load_one, paths, choose_load_mode(len(paths)), workers=workers)

    for read_set in read_sets:
        logger.info("%s had %d reads", read_set.source, len(read_set))

    return read_sets
