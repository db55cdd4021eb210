"""package.json reader for installed Node.js dependencies."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from depbuilder.errors import ManifestError


@dataclass(frozen=True)
class NodeModule:
    """An installed npm package, identified by name and version."""

    name: str
    version: str

    @property
    def fetcher(self) -> str:
        return "npm"

    @property
    def package(self) -> str:
        return self.name

    @property
    def revision(self) -> str:
        return self.version

    def to_dict(self) -> dict:
        return {
            "fetcher": self.fetcher,
            "package": self.package,
            "revision": self.revision,
        }


def read_manifest(path: Path) -> NodeModule:
    """Read the identity fields of a package.json.

    Only the top-level ``name`` and ``version`` strings are consumed; all
    other fields are ignored.

    Args:
        path: Path to a package.json file.

    Returns:
        NodeModule: The package identity.

    Raises:
        ManifestError: If the file cannot be read, is not valid JSON, or
            lacks a non-empty string ``name`` or ``version``.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Cannot read {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"Top-level value in {path} is not an object")

    name = data.get("name")
    version = data.get("version")
    if not isinstance(name, str) or not name:
        raise ManifestError(f"Missing package name in {path}")
    if not isinstance(version, str) or not version:
        raise ManifestError(f"Missing version for {name} in {path}")

    return NodeModule(name=name, version=version)


__all__ = ["NodeModule", "read_manifest"]
