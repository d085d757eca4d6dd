"""
AgentExecutor - resolves an agent and dispatches it to its runner.

Responsibilities:
- Look the agent definition up under a timeout
- Pick the runner for the agent type
- Normalize whatever the runner returns into an ExecutionResult

Does NOT handle:
- The reasoning loop or pipeline themselves (see cotflow.runners)
"""

import asyncio
import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from cotflow.config.exceptions import (
    AgentError,
    ExecutionTimeoutError,
    InternalError,
    NotFoundError,
)
from cotflow.config.schema import AgentDefinition, AgentType
from cotflow.config.settings import CotflowSettings, settings as default_settings
from cotflow.domain.output import ExecutionResult, ResultBlock
from cotflow.llm.base import ModelClient
from cotflow.memory import ConversationMemory, MemoryRegistry, MemoryStorage
from cotflow.runners import AgentRunner, CoTAgentRunner, FlowAgentRunner
from cotflow.storage.agents import AgentStore
from cotflow.storage.interactions import InteractionStore
from cotflow.storage.search import SearchClient
from cotflow.tools.builtin import register_agent_tool, register_builtin_tools
from cotflow.tools.registry import ToolRegistry
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_output(output: Any) -> ExecutionResult:
    """Turn a runner output into an ExecutionResult."""
    if isinstance(output, ExecutionResult):
        return output
    if isinstance(output, ResultBlock):
        return ExecutionResult(blocks=[output])
    if isinstance(output, list) and output and all(isinstance(b, ResultBlock) for b in output):
        return ExecutionResult(blocks=list(output))
    if isinstance(output, list) and output and all(isinstance(r, ExecutionResult) for r in output):
        return ExecutionResult(blocks=[block for r in output for block in r.blocks])
    text = output if isinstance(output, str) else json.dumps(output, default=str)
    return ExecutionResult().add(name="response", result=text)


class AgentExecutor:
    """
    Entry point for agent execution.

    Examples:
        >>> executor = AgentExecutor(store, {AgentType.FLOW: flow_runner})
        >>> result = await executor.execute("my-agent", {"question": "hi"})
    """

    def __init__(
        self,
        agent_store: AgentStore,
        runners: Mapping[AgentType, AgentRunner],
        config: CotflowSettings | None = None,
        tool_registry: ToolRegistry | None = None,
    ) -> None:
        self.agent_store = agent_store
        self.runners = dict(runners)
        self.tool_registry = tool_registry or ToolRegistry()
        self.config = config or default_settings

    async def get_agent(self, agent_id: str) -> AgentDefinition:
        try:
            agent = await asyncio.wait_for(
                self.agent_store.get_agent(agent_id),
                timeout=self.config.agent_lookup_timeout,
            )
        except asyncio.TimeoutError:
            logger.error("agent_lookup_timed_out", agent_id=agent_id)
            raise ExecutionTimeoutError(
                f"Timed out loading agent {agent_id} after {self.config.agent_lookup_timeout}s"
            ) from None
        except AgentError:
            raise
        except Exception as e:
            logger.error("agent_lookup_failed", agent_id=agent_id, error=str(e), exc_info=True)
            raise InternalError(f"Failed to load agent {agent_id}: {e}") from e

        if agent is None:
            raise NotFoundError(f"Agent not found: {agent_id}")
        return agent

    async def execute(self, agent_id: str, parameters: Mapping[str, str] | None = None) -> ExecutionResult:
        """
        Run an agent.

        Args:
            agent_id: Id of the agent definition
            parameters: Flat caller parameters

        Returns:
            ExecutionResult of the agent

        Raises:
            NotFoundError: Unknown agent id or tool type
            InvalidArgumentError: Unsupported agent type or unusable parameters
            ExecutionTimeoutError: Lookup, model or tool call timed out
            InternalError: Any other failure
        """
        agent = await self.get_agent(agent_id)
        agent_type = agent.agent_type

        runner = self.runners.get(agent_type)
        if runner is None:
            raise InternalError(f"No runner configured for agent type {agent_type.value}")

        caller = MappingProxyType(dict(parameters or {}))
        logger.info("agent_execution_started", agent_id=agent_id, agent_type=agent_type.value)
        try:
            output = await runner.run(agent, caller)
        except AgentError as e:
            logger.warning(
                "agent_execution_failed",
                agent_id=agent_id,
                error_type=type(e).__name__,
                error=e.message,
            )
            raise
        except Exception as e:
            logger.error("agent_execution_crashed", agent_id=agent_id, error=str(e), exc_info=True)
            raise InternalError(f"Agent {agent_id} failed: {e}") from e

        logger.info("agent_execution_completed", agent_id=agent_id)
        return normalize_output(output)


def build_executor(
    agent_store: AgentStore,
    model_client: ModelClient,
    *,
    tool_registry: ToolRegistry | None = None,
    memory_storage: MemoryStorage | None = None,
    interaction_store: InteractionStore | None = None,
    search_client: SearchClient | None = None,
    config: CotflowSettings | None = None,
) -> AgentExecutor:
    """
    Wire an executor with the built-in tools and conversation memory.

    The tool registry is frozen once the executor exists.
    """
    config = config or default_settings
    tool_registry = tool_registry or ToolRegistry()
    register_builtin_tools(tool_registry, model_client=model_client, search_client=search_client)

    memory_registry = MemoryRegistry()
    memory_registry.register(ConversationMemory(storage=memory_storage))

    executor = AgentExecutor(
        agent_store,
        {
            AgentType.COT: CoTAgentRunner(model_client, tool_registry, memory_registry, config),
            AgentType.FLOW: FlowAgentRunner(
                tool_registry, memory_registry, interaction_store, config
            ),
        },
        config=config,
        tool_registry=tool_registry,
    )
    register_agent_tool(tool_registry, executor.execute)
    tool_registry.freeze()
    return executor


__all__ = ["AgentExecutor", "build_executor", "normalize_output"]
