"""Generic module and dependency contracts consumed by builders.

A :class:`Module` is the project under analysis; builders only read its
root directory. Builders return objects satisfying the :class:`Dependency`
protocol from ``analyze()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@dataclass
class Module:
    """A project handed to a builder.

    Attributes:
        name: Display name of the module.
        type: Builder type identifier (e.g. ``nodejs``).
        dir: Root directory of the module.
        target: Optional build target inside the module.
    """

    name: str
    type: str
    dir: Path
    target: Optional[str] = None

    @classmethod
    def from_path(cls, path: str | Path, module_type: str) -> "Module":
        """Create a module rooted at ``path``, named after its directory."""
        root = Path(path).expanduser().resolve()
        return cls(name=root.name, type=module_type, dir=root)


@runtime_checkable
class Dependency(Protocol):
    """Identity accessors every discovered dependency exposes."""

    @property
    def fetcher(self) -> str:
        """Source kind the dependency was fetched from (e.g. ``npm``)."""
        ...

    @property
    def package(self) -> str:
        """Package name."""
        ...

    @property
    def revision(self) -> str:
        """Installed version."""
        ...


def dependency_locator(dep: Dependency) -> str:
    """Render a dependency as ``fetcher+package$revision``."""
    return f"{dep.fetcher}+{dep.package}${dep.revision}"


__all__ = ["Module", "Dependency", "dependency_locator"]
