"""How read-name lists are loaded: in the caller, on threads, or on processes."""

import logging
import os
from collections.abc import Callable, Iterable
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from enum import Enum
from typing import TypeVar

logger = logging.getLogger(__name__)

# Environment variable to force a load mode.
LOAD_MODE_ENV = "SPLIT_BAM_LOAD_MODE"

T = TypeVar("T")
R = TypeVar("R")


class LoadMode(Enum):
    SERIAL = "serial"
    THREADS = "threads"
    PROCESSES = "processes"


def choose_load_mode(list_count: int) -> LoadMode:
    """
    Pick how to load list_count read-name lists.

    SPLIT_BAM_LOAD_MODE wins when set to a known mode. Otherwise a single
    list is read in the caller and several lists are read on threads.
    Processes are only used on request: every loaded set is pickled back
    to the parent.
    """
    requested = os.environ.get(LOAD_MODE_ENV, "").strip().lower()
    if requested:
        try:
            return LoadMode(requested)
        except ValueError:
            logger.warning(
                "Ignoring %s=%s (expected serial, threads or processes)", LOAD_MODE_ENV, requested
            )

    if list_count <= 1:
        return LoadMode.SERIAL
    return LoadMode.THREADS


def map_in_order(
    func: Callable[[T], R],
    items: Iterable[T],
    mode: LoadMode,
    workers: int | None = None,
) -> list[R]:
    """Apply func to every item under mode; results keep the order of items."""
    if mode is LoadMode.SERIAL:
        return [func(item) for item in items]

    executor_class = ThreadPoolExecutor if mode is LoadMode.THREADS else ProcessPoolExecutor
    with executor_class(max_workers=workers) as executor:
        return list(executor.map(func, items))
