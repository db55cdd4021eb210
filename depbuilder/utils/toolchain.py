"""Locate external toolchains by probing candidate binaries for a version.

A toolchain is found by walking an ordered list of candidate commands,
running each with a version flag and accepting the first one that exits
cleanly and prints something shaped like that tool's version.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Pattern, Sequence, Union

logger = logging.getLogger("depbuilder.utils.toolchain")

# `node -v` prints "v20.11.1"; npm and yarn print a bare "10.2.4"
NODE_VERSION_PATTERN = re.compile(r"^v(\d+\.\d+\.\d+\S*)$")
SEMVER_PATTERN = re.compile(r"^(\d+\.\d+\.\d+\S*)$")

DEFAULT_PROBE_TIMEOUT = 10.0


@dataclass(frozen=True)
class Toolchain:
    """A located (or missing) external tool.

    Attributes:
        name: Tool name (node, npm, yarn, ...).
        command: Command that answered the version probe, None if missing.
        version: Version reported by the tool, None if missing.
    """

    name: str
    command: Optional[str] = None
    version: Optional[str] = None

    @property
    def available(self) -> bool:
        return bool(self.command) and self.version is not None

    @classmethod
    def missing(cls, name: str) -> "Toolchain":
        return cls(name=name)


def candidates_from_env(
    env_var: Optional[str],
    defaults: Iterable[str],
    environ: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Build the ordered candidate list for a tool.

    The environment override (if any) always comes first, followed by the
    well-known binary names. Empty entries are kept; :func:`locate` skips
    them without spawning a process.

    Args:
        env_var: Name of the overriding environment variable.
        defaults: Default binary names in priority order.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        List[str]: Candidate commands in priority order.
    """
    env = os.environ if environ is None else environ
    override = env.get(env_var, "") if env_var else ""
    return [override, *defaults]


def probe_version(
    command: str,
    version_flag: str,
    pattern: Pattern[str],
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> Optional[str]:
    """Run ``command version_flag`` and extract a version string.

    Args:
        command: Binary name or path.
        version_flag: Flag that prints the version.
        pattern: Regex the stripped stdout must match; group 1 is the version.
        timeout: Probe timeout in seconds.

    Returns:
        Optional[str]: The version, or None when the probe failed.
    """
    try:
        proc = subprocess.run(
            [command, version_flag],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Probe `%s %s` failed: %s", command, version_flag, exc)
        return None

    if proc.returncode != 0:
        logger.debug(
            "Probe `%s %s` exited with %d", command, version_flag, proc.returncode
        )
        return None

    output = (proc.stdout or "").strip()
    match = pattern.match(output)
    if not match:
        logger.debug(
            "Probe `%s %s` printed unexpected output: %r",
            command,
            version_flag,
            output[:80],
        )
        return None
    return match.group(1)


def locate(
    name: str,
    candidates: Sequence[str],
    version_flag: str = "-v",
    pattern: Union[str, Pattern[str]] = SEMVER_PATTERN,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> Toolchain:
    """Find the first candidate that answers a version probe.

    Args:
        name: Tool name recorded on the result.
        candidates: Commands to try, highest priority first.
        version_flag: Flag that prints the version.
        pattern: Expected version shape; group 1 is recorded.
        timeout: Per-probe timeout in seconds.

    Returns:
        Toolchain: The located tool, or ``Toolchain.missing(name)``.
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    for candidate in candidates:
        candidate = (candidate or "").strip()
        if not candidate:
            continue
        version = probe_version(candidate, version_flag, pattern, timeout=timeout)
        if version is not None:
            logger.debug("Located %s: %s (version %s)", name, candidate, version)
            return Toolchain(name=name, command=candidate, version=version)

    logger.debug("Could not locate %s among %s", name, list(candidates))
    return Toolchain.missing(name)


__all__ = [
    "Toolchain",
    "NODE_VERSION_PATTERN",
    "SEMVER_PATTERN",
    "candidates_from_env",
    "probe_version",
    "locate",
]
