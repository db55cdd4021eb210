"""Tests for concurrent slot-based aggregation."""

from __future__ import annotations

import logging
import random
import threading
import time
from pathlib import Path

import pytest

from depbuilder.errors import ManifestError
from depbuilder.runtime.aggregator import aggregate, read_all


def test_slots_align_with_input_order_regardless_of_completion() -> None:
    """Slot i always holds the result for path i."""

    paths = [Path(f"pkg{i}") for i in range(20)]

    def slow_reader(path: Path) -> str:
        time.sleep(random.uniform(0, 0.01))
        return path.name.upper()

    slots = read_all(paths, slow_reader, max_workers=8)

    assert slots == [f"PKG{i}" for i in range(20)]


def test_failed_reads_leave_empty_slots_and_are_filtered() -> None:
    paths = [Path("good1"), Path("bad"), Path("good2")]

    def reader(path: Path) -> str:
        if path.name == "bad":
            raise ManifestError("corrupt")
        return path.name

    assert read_all(paths, reader) == ["good1", None, "good2"]
    assert aggregate(paths, reader) == ["good1", "good2"]


def test_soft_failures_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    def reader(path: Path) -> str:
        raise OSError("permission denied")

    with caplog.at_level(logging.WARNING, logger="depbuilder.runtime.aggregator"):
        result = aggregate([Path("a"), Path("b")], reader)

    assert result == []
    assert sum("Error parsing manifest" in r.getMessage() for r in caplog.records) == 2


def test_injected_logger_receives_warnings(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("tests.custom")

    def reader(path: Path) -> str:
        raise ValueError("bad json")

    with caplog.at_level(logging.WARNING, logger="tests.custom"):
        aggregate([Path("a")], reader, log=log)

    assert any(r.name == "tests.custom" for r in caplog.records)


def test_programming_errors_propagate() -> None:
    def reader(path: Path) -> str:
        raise TypeError("bug")

    with pytest.raises(TypeError):
        aggregate([Path("a")], reader)


def test_empty_input_returns_empty_list() -> None:
    assert aggregate([], lambda p: p) == []


def test_all_reads_finish_before_return() -> None:
    """Every task has completed when aggregate returns."""

    finished = []
    lock = threading.Lock()

    def reader(path: Path) -> str:
        time.sleep(0.005)
        with lock:
            finished.append(path)
        return path.name

    paths = [Path(str(i)) for i in range(16)]
    result = aggregate(paths, reader, max_workers=4)

    assert len(finished) == 16
    assert len(result) == 16
