"""
In-memory storage backend
"""

from cotflow.domain.messages import Message

from .base import MemoryStorage


class InMemoryStorage(MemoryStorage):
    """Simple in-memory storage backend."""

    def __init__(self) -> None:
        self.sessions: dict[str, list[Message]] = {}

    async def append_message(self, session_id: str, message: Message) -> None:
        self.sessions.setdefault(session_id, []).append(message)

    async def get_messages(self, session_id: str, limit: int | None = None) -> list[Message]:
        """Get a copy of the session's messages."""
        messages = self.sessions.get(session_id, [])
        if limit:
            return list(messages[-limit:])
        return list(messages)

    async def clear_messages(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)

    async def clear_all(self) -> None:
        self.sessions.clear()

    async def close(self) -> None:
        """No-op for in-memory storage."""
        pass
