"""
Configuration module - settings, agent definition schema and errors.
"""

from .exceptions import (
    AgentError,
    ExecutionTimeoutError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
)
from .schema import (
    AgentDefinition,
    AgentType,
    LLMSpec,
    MemorySpec,
    ToolSpec,
    tool_key,
)
from .settings import CotflowSettings, settings

__all__ = [
    # Settings
    "CotflowSettings",
    "settings",
    # Schema
    "AgentDefinition",
    "AgentType",
    "LLMSpec",
    "MemorySpec",
    "ToolSpec",
    "tool_key",
    # Exceptions
    "AgentError",
    "NotFoundError",
    "InvalidArgumentError",
    "ExecutionTimeoutError",
    "InternalError",
]
