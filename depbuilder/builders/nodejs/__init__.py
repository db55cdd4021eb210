"""Node.js builder package.

Builds Node.js modules with npm or Yarn and discovers the packages they
installed, including:
- Toolchain lookup for node, npm and yarn
- Lockfile-driven package manager selection
- Concurrent package.json reading across nested node_modules trees
"""

from depbuilder.builders.nodejs.builder import NodeJSBuilder
from depbuilder.builders.nodejs.manifest import NodeModule, read_manifest

__all__ = [
    "NodeJSBuilder",
    "NodeModule",
    "read_manifest",
]
