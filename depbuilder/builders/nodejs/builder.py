"""Node.js module builder.

Drives npm or Yarn to install a module's production dependencies and then
enumerates what landed in ``node_modules``. Yarn is preferred whenever the
module carries a ``yarn.lock``; otherwise npm is used.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

from depbuilder.builders.base import BaseBuilder, BuilderState
from depbuilder.builders.nodejs.manifest import NodeModule, read_manifest
from depbuilder.config.schema import NodeJSBuilderConfig, ToolchainConfig
from depbuilder.errors import (
    CleanupError,
    InstallError,
    PreconditionError,
    ToolchainNotFoundError,
)
from depbuilder.module import Module
from depbuilder.runtime.aggregator import aggregate
from depbuilder.utils.scanner import scan_manifests
from depbuilder.utils.toolchain import (
    NODE_VERSION_PATTERN,
    SEMVER_PATTERN,
    Toolchain,
    candidates_from_env,
    locate,
)

NPM_INSTALL_ARGS = ["install", "--production"]
YARN_INSTALL_ARGS = ["install", "--production", "--frozen-lockfile"]


class NodeJSBuilder(BaseBuilder):
    """Builder for Node.js modules managed by npm or Yarn.

    Attributes:
        node: Located Node.js runtime.
        npm: Located npm, possibly unavailable.
        yarn: Located Yarn, possibly unavailable.
    """

    NAME = "nodejs"
    MODULE_TYPE = "nodejs"

    def __init__(
        self,
        config: Optional[NodeJSBuilderConfig] = None,
        logger: Optional[logging.Logger] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize builder.

        Args:
            config: Node.js builder configuration; defaults when omitted.
            logger: Logger for this builder.
            environ: Environment used for binary overrides (defaults to
                ``os.environ`` at initialize() time).
        """
        super().__init__(config or NodeJSBuilderConfig(), logger)
        self.environ = environ
        self.node = Toolchain.missing("node")
        self.npm = Toolchain.missing("npm")
        self.yarn = Toolchain.missing("yarn")

    def _locate(self, name: str, tool: ToolchainConfig, pattern) -> Toolchain:
        environ = os.environ if self.environ is None else self.environ
        candidates = candidates_from_env(tool.env_var, tool.candidates, environ)
        return locate(
            name,
            candidates,
            version_flag=tool.version_flag,
            pattern=pattern,
            timeout=self.config.probe_timeout,
        )

    def initialize(self) -> None:
        """Locate node, npm and yarn.

        Raises:
            ToolchainNotFoundError: If node is missing, or if neither npm
                nor yarn is available.
        """
        self.log.debug("Initializing Nodejs builder...")
        cfg = self.config
        self.state = BuilderState.UNINITIALIZED
        self.npm = Toolchain.missing("npm")
        self.yarn = Toolchain.missing("yarn")

        self.node = self._locate("node", cfg.node, NODE_VERSION_PATTERN)
        if not self.node.available:
            raise ToolchainNotFoundError(
                f"could not find Nodejs binary (try setting ${cfg.node.env_var})",
                tool="node",
                env_vars=[cfg.node.env_var],
            )

        self.npm = self._locate("npm", cfg.npm, SEMVER_PATTERN)
        self.yarn = self._locate("yarn", cfg.yarn, SEMVER_PATTERN)

        if not self.npm.available and not self.yarn.available:
            raise ToolchainNotFoundError(
                "could not find NPM binary or Yarn binary "
                f"(try setting ${cfg.npm.env_var} or ${cfg.yarn.env_var})",
                tool="npm",
                env_vars=[cfg.npm.env_var, cfg.yarn.env_var],
            )

        self.state = BuilderState.INITIALIZED
        self.log.debug(
            "Initialized Nodejs builder: node=%s npm=%s yarn=%s",
            self.node,
            self.npm,
            self.yarn,
        )

    def _install_dir(self, module: Module) -> Path:
        return Path(module.dir) / self.config.install_dir

    def build(self, module: Module, force: bool = False) -> None:
        """Install production dependencies with Yarn or npm.

        Args:
            module: Module to build.
            force: Remove ``node_modules`` before installing.

        Raises:
            CleanupError: If ``node_modules`` could not be removed.
            PreconditionError: If the selected package manager is missing.
            InstallError: If the install command fails.
        """
        self.log.debug("Running Nodejs build...")
        root = Path(module.dir)

        if force:
            self.log.debug("`force` flag is set; clearing `%s`...", self.config.install_dir)
            self._clean(module)

        if (root / self.config.lockfile).exists():
            self.log.debug("Yarn lockfile detected.")
            if not self.yarn.available:
                raise PreconditionError(
                    "Yarn lockfile found but could not find Yarn binary "
                    f"(try setting ${self.config.yarn.env_var})"
                )
            # TODO: refuse Yarn 2+ here, `--frozen-lockfile` is deprecated there
            command = [self.yarn.command, *YARN_INSTALL_ARGS]
        else:
            if not self.npm.available:
                raise PreconditionError(
                    "could not find NPM binary "
                    f"(try setting ${self.config.npm.env_var})"
                )
            command = [self.npm.command, *NPM_INSTALL_ARGS]

        self._run_install(command, root)

    def _clean(self, module: Module) -> None:
        install_dir = self._install_dir(module)
        if not install_dir.exists() and not install_dir.is_symlink():
            return
        try:
            if install_dir.is_dir() and not install_dir.is_symlink():
                shutil.rmtree(install_dir)
            else:
                install_dir.unlink()
        except OSError as exc:
            raise CleanupError(
                f"Failed to remove {install_dir}; build not attempted: {exc}"
            ) from exc

    def _run_install(self, command: List[str], cwd: Path) -> None:
        self.log.debug("Running `%s` in %s.", " ".join(command), cwd)
        try:
            subprocess.run(
                command,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self.config.install_timeout,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            raise InstallError(
                f"`{' '.join(command)}` exited with status {exc.returncode}: "
                f"{(exc.stderr or '').strip()}",
                command=command,
                returncode=exc.returncode,
                stderr=exc.stderr or "",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise InstallError(
                f"`{' '.join(command)}` timed out after {exc.timeout}s",
                command=command,
            ) from exc
        except OSError as exc:
            raise InstallError(
                f"Failed to run `{' '.join(command)}`: {exc}",
                command=command,
            ) from exc

    def analyze(self, module: Module, allow_unresolved: bool = False) -> List[NodeModule]:
        """List the packages installed under the module's node_modules trees.

        Unreadable manifests are logged and skipped.

        Raises:
            ScanError: If the module root cannot be scanned.
        """
        self.log.debug("Running analysis on Nodejs module...")
        manifests = scan_manifests(Path(module.dir), self.config.manifest_patterns)
        self.log.debug("Found %d package manifests.", len(manifests))

        return aggregate(
            manifests,
            read_manifest,
            max_workers=self.config.max_workers,
            log=self.log,
        )

    def is_built(self, module: Module, allow_unresolved: bool = False) -> bool:
        install_dir = self._install_dir(module)
        self.log.debug("Checking node_modules at %s", install_dir)
        # TODO: compare installed packages against package.json
        return install_dir.exists()


__all__ = ["NodeJSBuilder", "NPM_INSTALL_ARGS", "YARN_INSTALL_ARGS"]
