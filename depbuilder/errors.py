"""Exception hierarchy shared by all module builders.

Every builder raises subclasses of :class:`BuilderError` so callers can
handle any builder failure with a single ``except`` clause, while still
telling the categories apart:

1. ConfigurationError - the environment cannot support this builder
2. PreconditionError - the module cannot be built with what was found
3. BuildError - an install or cleanup step failed
4. ScanError - installed dependencies could not be enumerated
5. ManifestError - a single manifest is unreadable (soft failure)
6. UnsupportedOperationError - the builder does not offer the operation
"""

from typing import Optional, Sequence


class BuilderError(Exception):
    """Base class for all builder errors."""
    pass


class ConfigurationError(BuilderError):
    """The environment lacks something the builder needs to run at all."""
    pass


class ToolchainNotFoundError(ConfigurationError):
    """No candidate for a required toolchain responded to a version probe.

    Attributes:
        tool: Name of the missing tool (e.g. ``node``).
        env_vars: Environment variables the user may set to point at it.
    """

    def __init__(self, message: str, tool: str, env_vars: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.tool = tool
        self.env_vars = tuple(env_vars)


class PreconditionError(BuilderError):
    """The module requires a toolchain that was not found.

    Raised e.g. when a lockfile selects a package manager whose binary is
    missing. No subprocess has been started when this is raised.
    """
    pass


class BuildError(BuilderError):
    """A build step failed."""
    pass


class InstallError(BuildError):
    """The install subprocess could not be spawned or exited non-zero.

    Attributes:
        command: The argv that was executed.
        returncode: Exit status, or None when the process never ran.
        stderr: Captured standard error, if any.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class CleanupError(BuildError):
    """Removing previous install artifacts failed; no install was attempted."""
    pass


class ScanError(BuilderError):
    """Installed dependency manifests could not be enumerated."""
    pass


class ManifestError(BuilderError):
    """A single dependency manifest is unreadable or malformed.

    Aggregation treats this as a per-item soft failure.
    """
    pass


class UnsupportedOperationError(BuilderError, NotImplementedError):
    """The builder deliberately does not implement this operation."""
    pass


__all__ = [
    "BuilderError",
    "ConfigurationError",
    "ToolchainNotFoundError",
    "PreconditionError",
    "BuildError",
    "InstallError",
    "CleanupError",
    "ScanError",
    "ManifestError",
    "UnsupportedOperationError",
]
