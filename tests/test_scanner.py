"""Tests for the installed-manifest scanner."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from depbuilder.errors import ScanError
from depbuilder.utils.scanner import scan_manifests

PATTERNS = [
    "**/node_modules/*/package.json",
    "**/node_modules/@*/*/package.json",
]


def test_scan_finds_top_level_and_nested_installs(tmp_path: Path, write_package) -> None:
    """Nested node_modules trees are crossed at any depth."""

    top = write_package(tmp_path, "lodash", {"name": "lodash", "version": "4.17.0"})
    nested = write_package(
        tmp_path,
        "ms",
        {"name": "ms", "version": "2.1.3"},
        prefix="node_modules/debug",
    )
    deep = write_package(
        tmp_path,
        "inner",
        {"name": "inner", "version": "0.0.1"},
        prefix="node_modules/a/node_modules/b",
    )

    found = scan_manifests(tmp_path, PATTERNS)

    assert set(found) == {top, nested, deep}


def test_scan_includes_scoped_packages(tmp_path: Path, write_package) -> None:
    scoped = write_package(tmp_path, "@babel/core", {"name": "@babel/core", "version": "7.0.0"})

    assert scan_manifests(tmp_path, PATTERNS) == [scoped]


def test_scan_ignores_manifests_outside_package_roots(tmp_path: Path) -> None:
    """Only manifests exactly one level inside node_modules count."""

    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    deep_file = tmp_path / "node_modules" / "lodash" / "lib" / "package.json"
    deep_file.parent.mkdir(parents=True)
    deep_file.write_text("{}", encoding="utf-8")

    assert scan_manifests(tmp_path, PATTERNS) == []


def test_scan_returns_empty_list_without_matches(tmp_path: Path) -> None:
    assert scan_manifests(tmp_path, PATTERNS) == []


def test_scan_results_are_sorted(tmp_path: Path, write_package) -> None:
    for name in ("zeta", "alpha", "mid"):
        write_package(tmp_path, name, {"name": name, "version": "1.0.0"})

    found = scan_manifests(tmp_path, PATTERNS)

    assert found == sorted(found)
    assert [p.parent.name for p in found] == ["alpha", "mid", "zeta"]


def test_scan_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(ScanError):
        scan_manifests(tmp_path / "missing", PATTERNS)


def test_scan_file_root_raises(tmp_path: Path) -> None:
    root = tmp_path / "file.txt"
    root.write_text("x", encoding="utf-8")

    with pytest.raises(ScanError):
        scan_manifests(root, PATTERNS)


def test_scan_unreadable_directory_raises(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, write_package
) -> None:
    """A directory that cannot be listed aborts the scan instead of being skipped."""

    write_package(tmp_path, "lodash", {"name": "lodash", "version": "4.17.0"})
    locked = tmp_path / "node_modules"
    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    with pytest.raises(ScanError, match="Permission denied"):
        scan_manifests(tmp_path, PATTERNS)


def test_scan_follows_symlinked_packages_without_looping(tmp_path: Path, write_package) -> None:
    target = tmp_path / "packages" / "linked"
    target.mkdir(parents=True)
    (target / "package.json").write_text('{"name": "linked", "version": "1.0.0"}', encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    try:
        (tmp_path / "node_modules" / "linked").symlink_to(target, target_is_directory=True)
        (target / "loop").symlink_to(tmp_path, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    found = scan_manifests(tmp_path, PATTERNS)

    assert found == [tmp_path / "node_modules" / "linked" / "package.json"]
