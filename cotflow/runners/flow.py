"""
FlowAgentRunner - fixed pipeline of tools.

Each step runs only after the previous one has produced its output; that
output is published to later steps as ``<tool-key>.output``.
"""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.config.schema import AgentDefinition
from cotflow.config.settings import CotflowSettings, settings as default_settings
from cotflow.domain.messages import ai_message
from cotflow.domain.output import ExecutionResult
from cotflow.memory import Memory, MemoryPersistenceError, MemoryRegistry
from cotflow.prompt.substitutor import substitute
from cotflow.runners.base import (
    MEMORY_ID,
    PARENT_INTERACTION_ID,
    SESSION_ID,
    AgentRunner,
    guarded_call,
    output_text,
    serialize_output,
    tool_parameters,
)
from cotflow.storage.interactions import InteractionStore
from cotflow.tools.registry import ToolRegistry
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)


def _add_block(result: ExecutionResult, name: str, output: Any) -> None:
    if isinstance(output, str):
        result.add(name=name, result=output)
    elif isinstance(output, dict):
        result.add(name=name, data=output)
    elif isinstance(output, BaseModel):
        result.add(name=name, data=output.model_dump(mode="json", exclude_none=True))
    else:
        result.add(name=name, result=json.dumps(output, default=str))


class FlowAgentRunner(AgentRunner):
    """Runs the tools of a ``flow`` agent strictly in order."""

    def __init__(
        self,
        tool_registry: ToolRegistry,
        memory_registry: MemoryRegistry | None = None,
        interaction_store: InteractionStore | None = None,
        config: CotflowSettings | None = None,
    ) -> None:
        self.tool_registry = tool_registry
        self.memory_registry = memory_registry or MemoryRegistry()
        self.interaction_store = interaction_store
        self.config = config or default_settings

    async def run(self, agent: AgentDefinition, parameters: Mapping[str, str]) -> ExecutionResult:
        if not agent.tools:
            raise InvalidArgumentError(f"Flow agent {agent.id} has no tools")

        memory = self.memory_registry.resolve(agent.memory) if agent.memory else None

        running = dict(parameters)
        outputs: dict[str, str] = {}
        result = ExecutionResult()
        last_index = len(agent.tools) - 1
        last_output: Any = None

        for i, spec in enumerate(agent.tools):
            tool = self.tool_registry.create_from_spec(spec)
            step_params = tool_parameters(spec, running, include_unprefixed=True)
            if "input" in step_params:
                step_params["input"] = substitute(step_params["input"], step_params)

            logger.debug("flow_step_started", agent_id=agent.id, step=i, tool=spec.key)
            last_output = await guarded_call(
                tool.run(step_params), self.config.tool_call_timeout, f"Tool {spec.key}"
            )

            output_key = f"{spec.key}.output"
            outputs[output_key] = serialize_output(last_output)
            running[output_key] = outputs[output_key]

            if spec.include_output_in_agent_response or i == last_index:
                _add_block(result, spec.key, last_output)

        logger.info("flow_completed", agent_id=agent.id, steps=len(agent.tools))

        if memory is not None:
            await self._persist(memory, parameters, output_text(last_output), outputs)
        return result

    async def _persist(
        self,
        memory: Memory,
        parameters: Mapping[str, str],
        final_answer: str,
        outputs: dict[str, str],
    ) -> None:
        session_id = parameters.get(SESSION_ID) or parameters.get(MEMORY_ID)
        if not session_id:
            return

        try:
            await memory.append(session_id, ai_message(final_answer, session_id, is_final_answer=True))
        except MemoryPersistenceError as e:
            logger.warning("memory_write_skipped", session_id=session_id, error=e.message)

        interaction_id = parameters.get(PARENT_INTERACTION_ID)
        if interaction_id and self.interaction_store is not None:
            try:
                await self.interaction_store.update_interaction(
                    interaction_id, {"additional_info": outputs}
                )
            except Exception as e:
                logger.error(
                    "interaction_update_failed",
                    interaction_id=interaction_id,
                    error=str(e),
                )


__all__ = ["FlowAgentRunner"]
