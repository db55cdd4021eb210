"""Helpers for loading builder configuration from TOML/JSON sources.

This module provides a single entry point `load_builder_config`
that accepts various configuration sources:

* None -> default BuilderConfig
* dict -> BuilderConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Tuple, Union
import json
import logging
import tomllib

from depbuilder.config.schema import BuilderConfig

logger = logging.getLogger("depbuilder.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _parse_text(text: str) -> Tuple[Any, str]:
    """Decode text as JSON, falling back to TOML.

    TOML documents usually open with a ``[table]`` header, so the leading
    character cannot tell the two formats apart.
    """
    try:
        return json.loads(text), "json"
    except json.JSONDecodeError:
        return tomllib.loads(text), "toml"


def load_builder_config(source: ConfigSource) -> BuilderConfig:
    """Load BuilderConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns BuilderConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (JSON tried first)

    Returns:
        BuilderConfig instance.

    Raises:
        ValueError: If the source does not decode to a mapping.
        TypeError: If the source type is unsupported.
    """
    if source is None:
        logger.debug("No config source provided; using default BuilderConfig")
        return BuilderConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading BuilderConfig from provided dict")
        return BuilderConfig.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)

        if path.is_file():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                data, fmt = tomllib.loads(text), "toml"
            elif suffix == ".json":
                data, fmt = json.loads(text), "json"
            else:
                data, fmt = _parse_text(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            data, fmt = _parse_text(str(source))
            logger.info("Loading configuration from inline %s string", fmt)

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return BuilderConfig.from_dict(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["load_builder_config"]
