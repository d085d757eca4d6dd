"""
Memory storage backends
"""

from abc import ABC, abstractmethod

from cotflow.domain.messages import Message


class MemoryStorage(ABC):
    """Abstract storage backend for memory."""

    @abstractmethod
    async def append_message(self, session_id: str, message: Message) -> None:
        """Append a message to a session."""
        pass

    @abstractmethod
    async def get_messages(self, session_id: str, limit: int | None = None) -> list[Message]:
        """Get messages from storage, oldest first."""
        pass

    @abstractmethod
    async def clear_messages(self, session_id: str) -> None:
        """Clear all messages for a session."""
        pass

    @abstractmethod
    async def clear_all(self) -> None:
        """Clear every session."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close storage connection."""
        pass
