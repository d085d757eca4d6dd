"""
Memory registry - memory instances addressed by type key.
"""

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.config.schema import MemorySpec
from cotflow.memory.base import Memory

MEMORY_TYPE_PREFIX = "conversation"


class MemoryRegistry:
    """Maps memory type keys to shared memory instances."""

    def __init__(self) -> None:
        self._memories: dict[str, Memory] = {}

    def register(self, memory: Memory, memory_type: str | None = None) -> None:
        self._memories[memory_type or memory.type] = memory

    def get(self, memory_type: str) -> Memory | None:
        return self._memories.get(memory_type)

    def resolve(self, spec: MemorySpec) -> Memory:
        """Return the memory for an agent's memory spec."""
        memory = self._memories.get(spec.type)
        if not spec.type.startswith(MEMORY_TYPE_PREFIX) or memory is None:
            raise InvalidArgumentError(f"Invalid memory type: {spec.type}")
        return memory

    def list_types(self) -> list[str]:
        return list(self._memories)

    async def close(self) -> None:
        for memory in self._memories.values():
            await memory.close()


__all__ = ["MemoryRegistry", "MEMORY_TYPE_PREFIX"]
