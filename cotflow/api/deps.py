"""
API dependency injection.

The executor is attached to ``app.state`` by ``create_app`` or built by the
application lifespan.
"""

from fastapi import HTTPException, Request

from cotflow.runtime.executor import AgentExecutor
from cotflow.tools.registry import ToolRegistry


def get_executor(request: Request) -> AgentExecutor:
    executor = getattr(request.app.state, "executor", None)
    if executor is None:
        raise HTTPException(status_code=503, detail="Agent executor not initialized")
    return executor


def get_tool_registry(request: Request) -> ToolRegistry:
    return get_executor(request).tool_registry
