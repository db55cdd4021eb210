"""Helpers shared by CLI commands."""

import logging
from pathlib import Path
from typing import Tuple

from depbuilder.builders import BuilderRegistry
from depbuilder.builders.base import BaseBuilder
from depbuilder.config import load_builder_config
from depbuilder.module import Module

logger = logging.getLogger("depbuilder.cli.common")


def prepare(args, initialize: bool = True) -> Tuple[Module, BaseBuilder]:
    """Resolve the module and an (optionally initialized) builder from args.

    Args:
        args: Parsed command-line arguments with ``path``, ``type`` and
            ``config`` attributes.
        initialize: Whether to run builder.initialize().

    Returns:
        Tuple[Module, BaseBuilder]: The module and its builder.

    Raises:
        FileNotFoundError: If the module path is not a directory.
        KeyError: If no builder exists for the module type.
        BuilderError: If initialization fails.
    """
    root = Path(args.path)
    if not root.is_dir():
        raise FileNotFoundError(f"Module directory not found: {root}")

    config = load_builder_config(getattr(args, "config", None))
    module = Module.from_path(root, args.type)
    builder = BuilderRegistry.get_instance().create(module.type, config=config)
    logger.debug("Using %r for module %s at %s", builder, module.name, module.dir)

    if initialize:
        builder.initialize()
    return module, builder
