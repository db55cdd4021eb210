"""Configuration schema and loading for depbuilder."""

from .schema import (
    BuilderConfig,
    NodeJSBuilderConfig,
    ToolchainConfig,
)
from .loader import load_builder_config

__all__ = [
    "BuilderConfig",
    "NodeJSBuilderConfig",
    "ToolchainConfig",
    "load_builder_config",
]
