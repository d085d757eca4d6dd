"""
Memory abstractions.

Memory keeps the conversation of a session as an append-only log; the
window, if any, is applied when messages are read back.
"""

from abc import ABC, abstractmethod

from cotflow.config.exceptions import AgentError
from cotflow.domain.messages import Message


class MemoryPersistenceError(AgentError):
    """A message could not be persisted; earlier messages are unaffected."""

    pass


class Memory(ABC):
    """Session-scoped message log."""

    @property
    @abstractmethod
    def type(self) -> str:
        """Registry key of this memory type."""

    @abstractmethod
    async def append(self, session_id: str, message: Message) -> None:
        """Append one message to the session."""

    @abstractmethod
    async def list(self, session_id: str, window_size: int | None = None) -> list[Message]:
        """Return the most recent messages of a session, oldest first."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every session."""

    @abstractmethod
    async def remove(self, session_id: str) -> None:
        """Drop one session."""

    async def close(self) -> None:
        return None


__all__ = ["Memory", "MemoryPersistenceError"]
