"""
Tools module - tool contract, registry and built-in tools.
"""

from cotflow.tools.base import BaseTool, ToolMetadata
from cotflow.tools.registry import ToolFactory, ToolRegistry

__all__ = [
    "BaseTool",
    "ToolMetadata",
    "ToolFactory",
    "ToolRegistry",
]
