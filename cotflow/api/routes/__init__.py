from . import agents, health, tools

__all__ = ["agents", "health", "tools"]
