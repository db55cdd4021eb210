"""Base builder interface.

Each ecosystem implements one builder that drives its native toolchain:

1. initialize() - locate the toolchains the ecosystem needs
2. build() - install dependencies, optionally from a clean slate
3. analyze() - enumerate the installed dependencies
4. is_built() - cheap check whether build() already ran

A builder instance is owned by a single caller for a single run. The
caller invokes the methods sequentially; only initialize() mutates state.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional

from depbuilder.errors import UnsupportedOperationError
from depbuilder.module import Dependency, Module


class BuilderState(Enum):
    """Lifecycle state of a builder."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class BaseBuilder(ABC):
    """Base class for module builders.

    Subclasses set ``NAME`` and ``MODULE_TYPE`` and implement the abstract
    operations. ``is_module`` and ``infer_module`` are optional capabilities.
    """

    NAME: str = "base"
    MODULE_TYPE: str = "base"

    def __init__(
        self,
        config: Optional[Any] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize builder.

        Args:
            config: Optional per-builder configuration slice.
            logger: Logger for this builder; defaults to a module logger.
        """
        self.config = config
        self.log = logger or logging.getLogger(f"depbuilder.builders.{self.NAME}")
        self.state = BuilderState.UNINITIALIZED
        self.log.debug("Builder %s (%s) created", self.NAME, self.MODULE_TYPE)

    @abstractmethod
    def initialize(self) -> None:
        """Locate toolchains and record their versions.

        Raises:
            ConfigurationError: If a required toolchain is missing.
        """
        raise NotImplementedError

    @abstractmethod
    def build(self, module: Module, force: bool = False) -> None:
        """Install the module's dependencies.

        Args:
            module: Module to build.
            force: Remove previous install artifacts first.

        Raises:
            PreconditionError: If the module needs a missing toolchain.
            BuildError: If cleanup or the install step fails.
        """
        raise NotImplementedError

    @abstractmethod
    def analyze(self, module: Module, allow_unresolved: bool = False) -> List[Dependency]:
        """Enumerate the module's installed dependencies.

        Args:
            module: Module to analyze.
            allow_unresolved: Ecosystem-specific leniency flag.

        Returns:
            List[Dependency]: Discovered dependencies.

        Raises:
            ScanError: If dependencies could not be enumerated.
        """
        raise NotImplementedError

    @abstractmethod
    def is_built(self, module: Module, allow_unresolved: bool = False) -> bool:
        """Check whether build() appears to have run for the module."""
        raise NotImplementedError

    def is_module(self, target: str) -> bool:
        """Check whether target is a module this builder handles."""
        raise UnsupportedOperationError(f"is_module is not implemented for {type(self).__name__}")

    def infer_module(self, target: str) -> Module:
        """Construct a Module for target."""
        raise UnsupportedOperationError(
            f"infer_module is not implemented for {type(self).__name__}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self.state.value})"
