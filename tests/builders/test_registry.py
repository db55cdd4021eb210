"""Tests for the builder registry."""

from __future__ import annotations

import logging

import pytest

from depbuilder.builders import BuilderRegistry, NodeJSBuilder, get_registered_types
from depbuilder.builders.base import BaseBuilder, BuilderState
from depbuilder.config import BuilderConfig


def test_nodejs_builder_registered_with_aliases() -> None:
    types = get_registered_types()

    assert {"nodejs", "npm", "node"} <= set(types)
    registry = BuilderRegistry.get_instance()
    assert registry.get("npm") is NodeJSBuilder


def test_create_passes_config_slice_and_logger() -> None:
    config = BuilderConfig.from_dict({"nodejs": {"max_workers": 2}})
    log = logging.getLogger("tests.registry")

    builder = BuilderRegistry.get_instance().create("nodejs", config=config, logger=log)

    assert isinstance(builder, NodeJSBuilder)
    assert builder.config.max_workers == 2
    assert builder.log is log
    assert builder.state is BuilderState.UNINITIALIZED


def test_create_returns_fresh_instances() -> None:
    registry = BuilderRegistry.get_instance()

    assert registry.create("nodejs") is not registry.create("nodejs")


def test_create_unknown_type_raises() -> None:
    with pytest.raises(KeyError, match="No builder registered"):
        BuilderRegistry.get_instance().create("cobol")


def test_register_overwrites_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    class DummyBuilder(BaseBuilder):
        NAME = "dummy"

        def initialize(self) -> None:  # noqa: D401 - test stub
            return None

        def build(self, module, force=False) -> None:
            return None

        def analyze(self, module, allow_unresolved=False):
            return []

        def is_built(self, module, allow_unresolved=False) -> bool:
            return False

    registry = BuilderRegistry()
    registry.register("dummy", DummyBuilder)
    with caplog.at_level(logging.WARNING, logger="depbuilder.builders.registry"):
        registry.register("dummy", DummyBuilder)

    assert any("Overwriting" in r.getMessage() for r in caplog.records)
    assert registry.list_types() == ["dummy"]
