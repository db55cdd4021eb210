"""Builders package.

Ecosystem-specific module builders are registered from here.
"""

import logging

from depbuilder.builders.base import BaseBuilder, BuilderState
from depbuilder.builders.nodejs import NodeJSBuilder
from depbuilder.builders.registry import BuilderRegistry, register_builder

logger = logging.getLogger("depbuilder.builders")

register_builder("nodejs", NodeJSBuilder, aliases=("npm", "node"))
logger.debug("Registered builders: %s", ", ".join(BuilderRegistry.get_instance().list_types()))


def get_registered_types():
    """Get list of module types with a registered builder.

    Returns:
        list: Module type identifiers, including aliases.
    """
    return BuilderRegistry.get_instance().list_types()


__all__ = [
    "BaseBuilder",
    "BuilderState",
    "BuilderRegistry",
    "NodeJSBuilder",
    "register_builder",
    "get_registered_types",
]
