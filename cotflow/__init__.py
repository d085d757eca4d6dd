"""
cotflow - Agent orchestration core

Top-level exports for easy access to core functionality.
"""

# Dispatcher
from cotflow.runtime import AgentExecutor, build_executor

# Runners
from cotflow.runners import CoTAgentRunner, FlowAgentRunner

# Domain models
from cotflow.domain import ExecutionResult, Message, MessageRole, ResultBlock

# Definitions and errors
from cotflow.config import (
    AgentDefinition,
    AgentError,
    AgentType,
    ExecutionTimeoutError,
    InternalError,
    InvalidArgumentError,
    LLMSpec,
    MemorySpec,
    NotFoundError,
    ToolSpec,
    settings,
)

# Tools, memory, models, stores
from cotflow.tools import BaseTool, ToolRegistry
from cotflow.memory import ConversationMemory, InMemoryStorage, RedisStorage
from cotflow.llm import ModelClient, OpenAIModelClient
from cotflow.storage import InMemoryAgentStore, YamlAgentStore

__version__ = "0.1.0"

__all__ = [
    # Dispatcher
    "AgentExecutor",
    "build_executor",
    # Runners
    "CoTAgentRunner",
    "FlowAgentRunner",
    # Domain
    "ExecutionResult",
    "ResultBlock",
    "Message",
    "MessageRole",
    # Config
    "AgentDefinition",
    "AgentType",
    "LLMSpec",
    "MemorySpec",
    "ToolSpec",
    "settings",
    # Errors
    "AgentError",
    "NotFoundError",
    "InvalidArgumentError",
    "ExecutionTimeoutError",
    "InternalError",
    # Tools
    "BaseTool",
    "ToolRegistry",
    # Memory
    "ConversationMemory",
    "InMemoryStorage",
    "RedisStorage",
    # LLM
    "ModelClient",
    "OpenAIModelClient",
    # Stores
    "InMemoryAgentStore",
    "YamlAgentStore",
]
