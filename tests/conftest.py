"""
Shared fixtures: a scripted model client and configurable tools.
"""

import asyncio
from typing import Any

import pytest

from cotflow.config.settings import CotflowSettings
from cotflow.domain.output import ExecutionResult
from cotflow.llm.base import ModelClient
from cotflow.memory import ConversationMemory, MemoryRegistry
from cotflow.tools.base import BaseTool
from cotflow.tools.registry import ToolRegistry


class ScriptedModelClient(ModelClient):
    """Returns canned responses in order and records every call."""

    def __init__(self, responses: list[str], delay: float = 0.0):
        self.responses = list(responses)
        self.delay = delay
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def predict(self, model_id: str, parameters: dict[str, str]) -> ExecutionResult:
        self.calls.append((model_id, dict(parameters)))
        if self.delay:
            await asyncio.sleep(self.delay)
        index = min(len(self.calls), len(self.responses)) - 1
        return ExecutionResult.of_response(self.responses[index])


class RecordingTool(BaseTool):
    """Tool returning a fixed output and recording the parameters it saw."""

    def __init__(self, name: str, output: Any = "ok", valid: bool = True, error: Exception | None = None):
        self._name = name
        self.output = output
        self.valid = valid
        self.error = error
        self.calls: list[dict[str, str]] = []
        super().__init__()

    def get_name(self) -> str:
        return self._name

    def get_description(self) -> str:
        return f"{self._name} tool"

    async def run(self, parameters: dict[str, str]) -> Any:
        self.calls.append(dict(parameters))
        if self.error is not None:
            raise self.error
        return self.output

    def validate(self, parameters: dict[str, str]) -> bool:
        return self.valid


@pytest.fixture
def fast_settings():
    return CotflowSettings(
        agent_lookup_timeout=1.0,
        model_call_timeout=1.0,
        tool_call_timeout=1.0,
    )


@pytest.fixture
def tool_registry():
    return ToolRegistry()


@pytest.fixture
def memory():
    return ConversationMemory()


@pytest.fixture
def memory_registry(memory):
    registry = MemoryRegistry()
    registry.register(memory)
    return registry


@pytest.fixture
def register_tool(tool_registry):
    """Register a RecordingTool under a type key and return the instance."""

    def _register(tool_type: str, **kwargs) -> RecordingTool:
        tool = RecordingTool(tool_type, **kwargs)
        tool_registry.register(tool_type, lambda params: tool)
        return tool

    return _register


@pytest.fixture
def scripted_model():
    return ScriptedModelClient
