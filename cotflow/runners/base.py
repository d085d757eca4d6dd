"""
Shared machinery of the agent runners.

Responsibilities:
- Instantiate the tools of an agent, keyed by alias/name/type
- Derive the parameters a tool sees from static and caller parameters
- Await model and tool calls under a timeout, mapping failures to AgentError
"""

import asyncio
import json
import uuid
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from cotflow.config.exceptions import AgentError, ExecutionTimeoutError, InternalError
from cotflow.config.schema import AgentDefinition, ToolSpec
from cotflow.domain.output import ExecutionResult
from cotflow.tools.base import BaseTool
from cotflow.tools.registry import ToolRegistry
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SESSION_ID = "session_id"
MEMORY_ID = "memory_id"
PARENT_INTERACTION_ID = "parent_interaction_id"


class AgentRunner(ABC):
    """Execution strategy for one agent type."""

    @abstractmethod
    async def run(self, agent: AgentDefinition, parameters: Mapping[str, str]) -> ExecutionResult:
        """Run the agent with the caller's parameters."""


def instantiate_tools(registry: ToolRegistry, specs: list[ToolSpec]) -> dict[str, BaseTool]:
    """Create one tool per spec; iteration order follows the agent definition."""
    tools: dict[str, BaseTool] = {}
    for spec in specs:
        tools[spec.key] = registry.create_from_spec(spec)
    return tools


def prefixed_parameters(spec: ToolSpec, parameters: Mapping[str, str]) -> dict[str, str]:
    """Caller parameters addressed to this tool, prefix stripped.

    ``<type>.`` keys apply first so ``<key>.`` keys win.
    """
    scoped: dict[str, str] = {}
    for prefix in dict.fromkeys((f"{spec.type}.", f"{spec.key}.")):
        for key, value in parameters.items():
            if key.startswith(prefix) and len(key) > len(prefix):
                scoped[key[len(prefix):]] = value
    return scoped


def tool_parameters(
    spec: ToolSpec,
    parameters: Mapping[str, str],
    include_unprefixed: bool = False,
) -> dict[str, str]:
    """
    Build the parameter map one tool invocation sees.

    Args:
        spec: Tool slot of the agent
        parameters: Caller (or running) parameters
        include_unprefixed: Also overlay caller parameters without a tool prefix

    Returns:
        Static spec parameters overlaid with caller parameters
    """
    merged = dict(spec.parameters)
    if include_unprefixed:
        merged.update(parameters)
    merged.update(prefixed_parameters(spec, parameters))
    return merged


def resolve_session_id(parameters: Mapping[str, str]) -> str:
    return parameters.get(SESSION_ID) or parameters.get(MEMORY_ID) or str(uuid.uuid4())


def serialize_output(value: Any) -> str:
    """Serialize a step output so it can be interpolated into another parameter."""
    if isinstance(value, str):
        return json.dumps(value)[1:-1]
    if isinstance(value, BaseModel):
        return value.model_dump_json(exclude_none=True)
    return json.dumps(value, default=str)


def output_text(value: Any) -> str:
    """Render a tool output as observation text."""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json(exclude_none=True)
    return json.dumps(value, default=str)


def is_true(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


async def guarded_call(awaitable: Awaitable[T], timeout: float, what: str) -> T:
    """
    Await a model or tool call under a timeout.

    Raises:
        ExecutionTimeoutError: The call did not complete in time
        InternalError: The call raised anything other than an AgentError
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error("call_timed_out", target=what, timeout=timeout)
        raise ExecutionTimeoutError(f"{what} timed out after {timeout}s") from None
    except AgentError:
        raise
    except Exception as e:
        logger.error("call_failed", target=what, error=str(e), exc_info=True)
        raise InternalError(f"{what} failed: {e}") from e


__all__ = [
    "AgentRunner",
    "SESSION_ID",
    "MEMORY_ID",
    "PARENT_INTERACTION_ID",
    "instantiate_tools",
    "prefixed_parameters",
    "tool_parameters",
    "resolve_session_id",
    "serialize_output",
    "output_text",
    "is_true",
    "guarded_call",
]
