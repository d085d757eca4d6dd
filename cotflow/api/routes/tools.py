"""
Tool listing routes.
"""

from fastapi import APIRouter, Depends

from cotflow.api.deps import get_tool_registry
from cotflow.tools.base import ToolMetadata
from cotflow.tools.registry import ToolRegistry

router = APIRouter(prefix="/tools")


@router.get("", response_model=list[ToolMetadata])
async def list_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    """List every registered tool type."""
    return registry.list_tools()
