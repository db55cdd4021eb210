"""Builder registry mapping module types to builder classes."""

import logging
from typing import Dict, List, Optional, Sequence, Type

from depbuilder.builders.base import BaseBuilder
from depbuilder.config.schema import BuilderConfig

logger = logging.getLogger("depbuilder.builders.registry")


class BuilderRegistry:
    """Global registry of builder implementations.

    Each module type (and its aliases) maps to one builder class. Builders
    are instantiated fresh for every run.
    """

    _instance: Optional["BuilderRegistry"] = None

    def __init__(self) -> None:
        """Initialize the registry."""
        # module type -> Builder class
        self._builders: Dict[str, Type[BaseBuilder]] = {}

    @classmethod
    def get_instance(cls) -> "BuilderRegistry":
        """Get singleton instance.

        Returns:
            BuilderRegistry: Global registry instance.
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(
        self,
        module_type: str,
        builder_class: Type[BaseBuilder],
        aliases: Sequence[str] = (),
    ) -> None:
        """Register a builder for a module type.

        Args:
            module_type: Module type identifier (e.g. 'nodejs').
            builder_class: Builder class to register.
            aliases: Additional identifiers resolving to the same builder.
        """
        for key in (module_type, *aliases):
            if key in self._builders:
                logger.warning(
                    "Overwriting existing builder for '%s': %s -> %s",
                    key,
                    self._builders[key].__name__,
                    builder_class.__name__,
                )
            self._builders[key] = builder_class
        logger.debug("Registered builder for '%s': %s", module_type, builder_class.__name__)

    def get(self, module_type: str) -> Optional[Type[BaseBuilder]]:
        """Get builder class for a module type, or None if not found."""
        return self._builders.get(module_type)

    def create(
        self,
        module_type: str,
        config: Optional[BuilderConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> BaseBuilder:
        """Instantiate the builder for a module type.

        Args:
            module_type: Module type identifier.
            config: Top-level configuration; the builder's slice is passed on.
            logger: Optional logger injected into the builder.

        Returns:
            BaseBuilder: A new, uninitialized builder.

        Raises:
            KeyError: If no builder is registered for module_type.
        """
        builder_class = self.get(module_type)
        if builder_class is None:
            raise KeyError(
                f"No builder registered for module type '{module_type}' "
                f"(available: {', '.join(self.list_types()) or 'none'})"
            )
        config = config or BuilderConfig.default()
        return builder_class(config=config.for_builder(module_type), logger=logger)

    def list_types(self) -> List[str]:
        """List all registered module types, including aliases."""
        return sorted(self._builders)


def register_builder(
    module_type: str,
    builder_class: Type[BaseBuilder],
    aliases: Sequence[str] = (),
) -> None:
    """Register a builder on the global registry.

    Convenience wrapper around BuilderRegistry.register().
    """
    BuilderRegistry.get_instance().register(module_type, builder_class, aliases)
