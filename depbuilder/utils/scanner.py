"""Recursive glob scanner for installed dependency manifests."""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from depbuilder.errors import ScanError

logger = logging.getLogger("depbuilder.utils.scanner")


def _match_parts(parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    """Match path segments against glob segments, ``**`` spanning any depth."""
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        return any(_match_parts(parts[i:], rest) for i in range(len(parts) + 1))
    if not parts or not fnmatch.fnmatchcase(parts[0], head):
        return False
    return _match_parts(parts[1:], rest)


def _split_pattern(pattern: str) -> Tuple[str, ...]:
    parts = tuple(p for p in pattern.replace("\\", "/").split("/") if p and p != ".")
    if not parts:
        raise ScanError(f"Empty scan pattern: {pattern!r}")
    return parts


def scan_manifests(root_path: Path, patterns: Iterable[str]) -> List[Path]:
    """Find every file under root_path matching any of the glob patterns.

    Patterns are relative to root_path and may use ``**`` to cross any
    number of directories, e.g. ``**/node_modules/*/package.json`` matches
    manifests inside arbitrarily deep nested installations. ``*`` never
    crosses a directory separator.

    Args:
        root_path: Directory to scan.
        patterns: Glob patterns relative to root_path.

    Returns:
        List[Path]: Matching files, de-duplicated and sorted for a
        deterministic order. Empty when nothing matches.

    Raises:
        ScanError: If root_path is not a directory or any directory under
            it cannot be listed.
    """
    root_path = Path(root_path)
    if not root_path.is_dir():
        raise ScanError(f"Scan root is not a directory: {root_path}")

    compiled = [_split_pattern(p) for p in patterns]
    found = set()
    # Each entry carries the real paths of its ancestors to stop symlink loops
    root_real = os.path.realpath(root_path)
    stack = [(root_path, root_real, frozenset([root_real]))]

    while stack:
        current_dir, current_real, ancestors = stack.pop()

        try:
            with os.scandir(current_dir) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise ScanError(f"Failed to scan {current_dir}: {exc}") from exc

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as exc:
                raise ScanError(f"Failed to stat {path}: {exc}") from exc

            if is_dir:
                if entry.is_symlink():
                    real = os.path.realpath(path)
                else:
                    real = os.path.join(current_real, entry.name)
                if real not in ancestors:
                    stack.append((path, real, ancestors | {real}))
                continue
            if not is_file:
                continue

            rel_parts = path.relative_to(root_path).parts
            if any(_match_parts(rel_parts, parts) for parts in compiled):
                found.add(path)

    results = sorted(found)
    logger.debug("Scanned %s: %d manifest(s) matched", root_path, len(results))
    return results


__all__ = ["scan_manifests"]
