"""
Agent definition schema.

This module contains the documents an agent store hands to the dispatcher:
- AgentDefinition: the agent itself
- ToolSpec, LLMSpec, MemorySpec: its parts
- AgentType: the two execution strategies
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cotflow.config.exceptions import InvalidArgumentError


def _stringify_parameters(value: Any) -> Any:
    """Flatten a parameter mapping to str -> str.

    Structured values are JSON-encoded, scalars are stringified, so YAML
    documents can be written naturally.
    """
    if value is None:
        return {}
    if not isinstance(value, dict):
        return value
    flattened = {}
    for key, item in value.items():
        if isinstance(item, str):
            flattened[str(key)] = item
        elif isinstance(item, bool):
            flattened[str(key)] = "true" if item else "false"
        elif isinstance(item, (dict, list)):
            flattened[str(key)] = json.dumps(item)
        elif item is None:
            continue
        else:
            flattened[str(key)] = str(item)
    return flattened


# ============================================================================
# Agent type
# ============================================================================


class AgentType(str, Enum):
    """Execution strategy of an agent."""

    FLOW = "flow"
    COT = "cot"

    @classmethod
    def parse(cls, value: str | None) -> "AgentType":
        normalized = (value or "").strip().lower()
        if normalized == "react":
            return cls.COT
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidArgumentError(f"Unsupported agent type: {value}") from None


# ============================================================================
# Specs
# ============================================================================


class ToolSpec(BaseModel):
    """One tool slot of an agent."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str | None = None
    alias: str | None = None
    parameters: dict[str, str] = Field(default_factory=dict)
    description: str | None = None
    include_output_in_agent_response: bool = False

    @field_validator("parameters", mode="before")
    @classmethod
    def normalize_parameters(cls, value: Any) -> Any:
        return _stringify_parameters(value)

    @property
    def key(self) -> str:
        """Address of this tool inside a running agent."""
        return tool_key(self)


class LLMSpec(BaseModel):
    """Model bound to a reasoning agent."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str
    parameters: dict[str, str] = Field(default_factory=dict)

    @field_validator("parameters", mode="before")
    @classmethod
    def normalize_parameters(cls, value: Any) -> Any:
        return _stringify_parameters(value)


class MemorySpec(BaseModel):
    """Conversation memory attached to an agent."""

    model_config = ConfigDict(frozen=True)

    type: str
    window_size: int | None = Field(default=None, ge=1)


class AgentDefinition(BaseModel):
    """
    Agent definition loaded from an agent store.

    Immutable for the duration of an execution.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    type: str
    description: str | None = None
    llm: LLMSpec | None = None
    tools: list[ToolSpec] = Field(default_factory=list)
    memory: MemorySpec | None = None
    app_type: str | None = None

    @property
    def agent_type(self) -> AgentType:
        return AgentType.parse(self.type)


def tool_key(spec: ToolSpec) -> str:
    """Resolve the addressing key of a tool: alias, then name, then type."""
    return spec.alias or spec.name or spec.type


__all__ = [
    "AgentType",
    "ToolSpec",
    "LLMSpec",
    "MemorySpec",
    "AgentDefinition",
    "tool_key",
]
