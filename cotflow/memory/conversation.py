"""
Conversation buffer window memory.
"""

import asyncio
import weakref

from cotflow.domain.messages import Message
from cotflow.memory.base import Memory, MemoryPersistenceError
from cotflow.memory.storage import InMemoryStorage, MemoryStorage
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)

CONVERSATION_BUFFER_WINDOW = "conversation_buffer_window"
DEFAULT_WINDOW_SIZE = 5


class ConversationMemory(Memory):
    """
    Conversation memory with:
    - Pluggable storage backends (memory, redis)
    - Append-only history, windowed on read
    - Appends serialized per session
    """

    def __init__(
        self,
        storage: MemoryStorage | None = None,
        window_size: int = DEFAULT_WINDOW_SIZE,
        memory_type: str = CONVERSATION_BUFFER_WINDOW,
    ) -> None:
        self.storage = storage or InMemoryStorage()
        self.window_size = window_size
        self._type = memory_type
        # Entries vanish once no append holds the lock.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    @property
    def type(self) -> str:
        return self._type

    async def append(self, session_id: str, message: Message) -> None:
        async with self._lock(session_id):
            try:
                await self.storage.append_message(session_id, message)
            except Exception as e:
                logger.error(
                    "memory_append_failed",
                    session_id=session_id,
                    role=message.role.value,
                    error=str(e),
                )
                raise MemoryPersistenceError(
                    f"Failed to persist message for session {session_id}: {e}"
                ) from e

    async def list(self, session_id: str, window_size: int | None = None) -> list[Message]:
        return await self.storage.get_messages(session_id, limit=window_size or self.window_size)

    async def clear(self) -> None:
        await self.storage.clear_all()
        self._locks.clear()

    async def remove(self, session_id: str) -> None:
        async with self._lock(session_id):
            await self.storage.clear_messages(session_id)

    async def close(self) -> None:
        await self.storage.close()
