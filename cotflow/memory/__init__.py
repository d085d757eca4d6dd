"""
Memory module - conversation history per session.
"""

from cotflow.memory.base import Memory, MemoryPersistenceError
from cotflow.memory.conversation import (
    CONVERSATION_BUFFER_WINDOW,
    DEFAULT_WINDOW_SIZE,
    ConversationMemory,
)
from cotflow.memory.registry import MemoryRegistry
from cotflow.memory.storage import InMemoryStorage, MemoryStorage, RedisStorage
from cotflow.memory.views import final_answer_view, tool_observation_view

__all__ = [
    "Memory",
    "MemoryPersistenceError",
    "ConversationMemory",
    "CONVERSATION_BUFFER_WINDOW",
    "DEFAULT_WINDOW_SIZE",
    "MemoryRegistry",
    "MemoryStorage",
    "InMemoryStorage",
    "RedisStorage",
    "final_answer_view",
    "tool_observation_view",
]
