"""
Built-in tools and their registration.
"""

from cotflow.llm.base import ModelClient
from cotflow.storage.search import SearchClient
from cotflow.tools.builtin.agent_tool import AgentRunner, AgentTool
from cotflow.tools.builtin.math_tool import MathTool, SafeExpressionEvaluator
from cotflow.tools.builtin.model_tool import MLModelTool
from cotflow.tools.builtin.search_index_tool import DEFAULT_SIZE, SearchIndexTool
from cotflow.tools.registry import ToolRegistry
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)


def register_builtin_tools(
    registry: ToolRegistry,
    *,
    model_client: ModelClient | None = None,
    search_client: SearchClient | None = None,
) -> None:
    """
    Register the built-in tool factories.

    Tools whose collaborator is missing are skipped: MLModelTool needs a
    model client, SearchIndexTool a search client.
    """
    registry.register(
        MathTool.NAME,
        lambda params: MathTool(),
        description="Use this tool to calculate any math problem.",
    )

    if model_client is not None:
        registry.register(
            MLModelTool.NAME,
            lambda params: MLModelTool(model_client, params.get("model_id", "")),
            description="Use this tool to run any model.",
        )

    if search_client is not None:
        registry.register(
            SearchIndexTool.NAME,
            lambda params: SearchIndexTool(
                search_client, size=int(params.get("size", DEFAULT_SIZE))
            ),
            description="Use this tool to query OpenSearch index.",
        )

    logger.info("builtin_tools_registered", tools=registry.list_available())


def register_agent_tool(registry: ToolRegistry, run_agent: AgentRunner) -> None:
    """Register AgentTool once an executor exists to run nested agents."""
    registry.register(
        AgentTool.NAME,
        lambda params: AgentTool(run_agent, params.get("agent_id", "")),
        description="Use this tool to run any agent.",
    )


__all__ = [
    "AgentTool",
    "MathTool",
    "MLModelTool",
    "SafeExpressionEvaluator",
    "SearchIndexTool",
    "register_agent_tool",
    "register_builtin_tools",
]
