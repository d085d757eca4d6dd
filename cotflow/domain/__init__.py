"""
Domain models - conversation messages and execution results.
"""

from .messages import Message, MessageRole, ai_message, human_message, tool_message
from .output import ExecutionResult, ResultBlock

__all__ = [
    "Message",
    "MessageRole",
    "human_message",
    "ai_message",
    "tool_message",
    "ExecutionResult",
    "ResultBlock",
]
