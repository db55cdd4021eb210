"""Concurrent fan-out of per-file reads into an ordered result list.

Each path gets its own task and its own slot in a pre-sized result list,
so slot ``i`` always holds the result for ``paths[i]`` no matter in which
order the tasks finish. Tasks never share a slot, so the writes need no
lock. Leaving the executor context waits for every task.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from depbuilder.errors import ManifestError

logger = logging.getLogger("depbuilder.runtime.aggregator")

R = TypeVar("R")

# Per-item failures that are logged and skipped instead of failing the batch
SOFT_FAILURES = (ManifestError, OSError, ValueError)


def read_all(
    paths: Sequence[Path],
    reader: Callable[[Path], Optional[R]],
    max_workers: int = 8,
    log: Optional[logging.Logger] = None,
) -> List[Optional[R]]:
    """Read every path concurrently into a slot list aligned with ``paths``.

    Args:
        paths: Files to read.
        reader: Function turning one path into a result.
        max_workers: Maximum concurrent reader threads.
        log: Logger for soft failures (defaults to the module logger).

    Returns:
        List[Optional[R]]: ``len(paths)`` slots; None where reading failed.
    """
    log = log or logger
    slots: List[Optional[R]] = [None] * len(paths)
    if not paths:
        return slots

    def read_into(index: int, path: Path) -> None:
        try:
            slots[index] = reader(path)
        except SOFT_FAILURES as exc:
            log.warning("Error parsing manifest %s: %s", path, exc)

    workers = max(1, min(max_workers, len(paths)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ManifestRead") as executor:
        futures = [
            executor.submit(read_into, index, path) for index, path in enumerate(paths)
        ]
    # Surface programming errors raised inside tasks
    for future in futures:
        future.result()

    return slots


def aggregate(
    paths: Sequence[Path],
    reader: Callable[[Path], Optional[R]],
    max_workers: int = 8,
    log: Optional[logging.Logger] = None,
) -> List[R]:
    """Read every path concurrently and drop the failed reads.

    Args:
        paths: Files to read.
        reader: Function turning one path into a result.
        max_workers: Maximum concurrent reader threads.
        log: Logger for soft failures.

    Returns:
        List[R]: Successful results, in the order of ``paths``.
    """
    slots = read_all(paths, reader, max_workers=max_workers, log=log)
    results = [item for item in slots if item is not None]
    skipped = len(slots) - len(results)
    if skipped:
        (log or logger).warning("Skipped %d unreadable manifest(s)", skipped)
    return results


__all__ = ["aggregate", "read_all", "SOFT_FAILURES"]
