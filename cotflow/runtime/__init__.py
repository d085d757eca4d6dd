"""
Runtime module - agent dispatch.
"""

from cotflow.runtime.executor import AgentExecutor, build_executor, normalize_output

__all__ = ["AgentExecutor", "build_executor", "normalize_output"]
