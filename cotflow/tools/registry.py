"""
Tool Registry - explicit mapping from tool type to factory.

Provides:
- Factory registration at start-up
- Tool instantiation with static parameters
- Tool listing for the HTTP API
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from cotflow.config.exceptions import NotFoundError
from cotflow.config.schema import ToolSpec
from cotflow.tools.base import BaseTool, ToolMetadata
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)

ToolFactory = Callable[[dict[str, str]], BaseTool]


class ToolRegistry:
    """
    Central registry for all available tool types.

    Registration happens before any agent runs; once frozen the registry is
    read-only and can be shared between concurrent executions.
    """

    def __init__(self) -> None:
        self._factories: dict[str, ToolFactory] = {}
        self._descriptions: dict[str, str | None] = {}
        self._frozen = False

    def register(
        self,
        tool_type: str,
        factory: ToolFactory,
        description: str | None = None,
    ) -> None:
        """Register a tool factory under a type key."""
        if self._frozen:
            raise RuntimeError(f"Tool registry is frozen, cannot register: {tool_type}")
        if tool_type in self._factories:
            logger.warning("tool_factory_overridden", tool_type=tool_type)
        self._factories[tool_type] = factory
        self._descriptions[tool_type] = description
        logger.debug("tool_factory_registered", tool_type=tool_type)

    def unregister(self, tool_type: str) -> bool:
        if self._frozen:
            raise RuntimeError(f"Tool registry is frozen, cannot unregister: {tool_type}")
        if tool_type in self._factories:
            del self._factories[tool_type]
            self._descriptions.pop(tool_type, None)
            return True
        return False

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def create(self, tool_type: str, params: dict[str, Any] | None = None) -> BaseTool:
        """Create a tool instance from its static parameters."""
        factory = self._factories.get(tool_type)
        if factory is None:
            raise NotFoundError(
                f"Tool not found: {tool_type}. Available: {self.list_available()}"
            )
        return factory(dict(params or {}))

    def create_from_spec(self, spec: ToolSpec) -> BaseTool:
        """Create a tool for one agent slot, applying alias and description override."""
        tool = self.create(spec.type, spec.parameters)
        tool.alias = spec.alias
        if spec.description is not None:
            tool.description = spec.description
        return tool

    def is_registered(self, tool_type: str) -> bool:
        return tool_type in self._factories

    def list_available(self) -> list[str]:
        """List all registered tool types, in registration order."""
        return list(self._factories)

    def list_tools(self) -> list[ToolMetadata]:
        return [
            ToolMetadata(name=tool_type, description=self._descriptions.get(tool_type))
            for tool_type in self._factories
        ]


__all__ = [
    "ToolFactory",
    "ToolRegistry",
]
