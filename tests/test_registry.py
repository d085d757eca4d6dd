"""
Tests for ToolRegistry
"""

import pytest

from cotflow.config.exceptions import NotFoundError
from cotflow.config.schema import ToolSpec
from cotflow.tools.registry import ToolRegistry
from tests.conftest import RecordingTool


@pytest.fixture
def registry():
    registry = ToolRegistry()
    registry.register("echo", lambda params: RecordingTool("echo", output=params.get("value")), "Echo tool")
    return registry


def test_create_passes_static_parameters(registry):
    tool = registry.create("echo", {"value": "x"})
    assert tool.name == "echo"
    assert tool.output == "x"


def test_unknown_type_raises_not_found(registry):
    with pytest.raises(NotFoundError, match="Tool not found: nope"):
        registry.create("nope")


def test_create_from_spec_applies_alias_and_description(registry):
    tool = registry.create_from_spec(ToolSpec(type="echo", alias="repeat", description="Repeats input"))
    assert tool.alias == "repeat"
    assert tool.description == "Repeats input"

    plain = registry.create_from_spec(ToolSpec(type="echo"))
    assert plain.description == "echo tool"


def test_list_tools_in_registration_order(registry):
    registry.register("second", lambda params: RecordingTool("second"))
    assert registry.list_available() == ["echo", "second"]
    metadata = registry.list_tools()
    assert metadata[0].name == "echo"
    assert metadata[0].description == "Echo tool"


def test_frozen_registry_is_read_only(registry):
    registry.freeze()
    assert registry.frozen
    with pytest.raises(RuntimeError):
        registry.register("late", lambda params: RecordingTool("late"))
    with pytest.raises(RuntimeError):
        registry.unregister("echo")
    assert registry.is_registered("echo")


def test_unregister(registry):
    assert registry.unregister("echo") is True
    assert registry.unregister("echo") is False
    assert not registry.is_registered("echo")
