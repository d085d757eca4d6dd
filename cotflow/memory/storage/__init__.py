from .base import MemoryStorage
from .memory import InMemoryStorage
from .redis import RedisStorage

__all__ = ["MemoryStorage", "InMemoryStorage", "RedisStorage"]
