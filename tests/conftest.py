"""Shared fixtures for builder tests."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Dict, List, Tuple

import pytest


class FakeRunner:
    """Stand-in for subprocess.run answering from a table of argv tuples.

    Commands not in the table behave like a missing binary.
    """

    def __init__(self) -> None:
        self.responses: Dict[Tuple[str, ...], Tuple[int, str, str]] = {}
        self.calls: List[List[str]] = []
        self.kwargs: List[dict] = []
        self.hooks: Dict[Tuple[str, ...], object] = {}

    def set(self, *argv: str, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self.responses[tuple(argv)] = (returncode, stdout, stderr)

    def on_call(self, *argv: str, hook) -> None:
        self.hooks[tuple(argv)] = hook

    def __call__(self, cmd, **kwargs):
        argv = list(cmd)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        key = tuple(argv)
        if key in self.hooks:
            self.hooks[key]()
        if key not in self.responses:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        returncode, stdout, stderr = self.responses[key]
        if kwargs.get("check") and returncode != 0:
            raise subprocess.CalledProcessError(returncode, argv, output=stdout, stderr=stderr)
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    """Patch subprocess.run with a FakeRunner."""

    runner = FakeRunner()
    monkeypatch.setattr(subprocess, "run", runner)
    return runner


@pytest.fixture
def node_toolchain(fake_run: FakeRunner) -> FakeRunner:
    """FakeRunner where node, npm and yarn all answer version probes."""

    fake_run.set("node", "-v", stdout="v20.11.1\n")
    fake_run.set("npm", "-v", stdout="10.2.4\n")
    fake_run.set("yarn", "-v", stdout="1.22.19\n")
    return fake_run


@pytest.fixture
def write_package():
    """Write a package.json under ``root/node_modules/<name>``."""

    def _write(root: Path, name: str, content, *, prefix: str = "") -> Path:
        pkg_dir = root / prefix / "node_modules" / name
        pkg_dir.mkdir(parents=True, exist_ok=True)
        manifest = pkg_dir / "package.json"
        if isinstance(content, str):
            manifest.write_text(content, encoding="utf-8")
        else:
            manifest.write_text(json.dumps(content), encoding="utf-8")
        return manifest

    return _write
