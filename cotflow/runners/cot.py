"""
CoTAgentRunner - Thought/Action/Observation reasoning loop.

Responsibilities:
- Compose the prompt once per execution, refreshing only the scratchpad
- Call the model, parse its action and run the chosen tool
- Stop on a final answer, on a missing tool (if asked to) or after
  ``max_iteration`` rounds
- Record the conversation in memory when the agent has one

Rounds are strictly sequential: round i+1 sees the scratchpad of round i.
"""

import asyncio
from collections.abc import Mapping
from types import MappingProxyType

from cotflow.config.exceptions import InternalError, InvalidArgumentError
from cotflow.config.schema import AgentDefinition
from cotflow.config.settings import CotflowSettings, settings as default_settings
from cotflow.domain.messages import Message, ai_message, human_message, tool_message
from cotflow.domain.output import ExecutionResult
from cotflow.llm.base import ModelClient
from cotflow.memory import Memory, MemoryPersistenceError, MemoryRegistry
from cotflow.memory.views import final_answer_view, tool_observation_view
from cotflow.prompt import templates as t
from cotflow.prompt.composer import (
    add_scratchpad,
    compose_prompt,
    parse_json_list,
    render_chat_history,
)
from cotflow.runners.base import (
    AgentRunner,
    guarded_call,
    instantiate_tools,
    is_true,
    output_text,
    resolve_session_id,
    tool_parameters,
)
from cotflow.runners.parsing import (
    action_patterns,
    clean_thought,
    extract_final_answer,
    has_final_answer,
    map_action_to_tool,
    parse_action,
    stop_parameters,
)
from cotflow.tools.registry import ToolRegistry
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)

MAX_ITERATION = "max_iteration"
STOP_WHEN_NO_TOOL_FOUND = "stop_when_no_tool_found"
STEP_INTERVAL_MILLIS = "cot.step_interval_millis"
VERBOSE = "verbose"
ONLY_FINAL_ANSWER_HISTORY = "only_include_final_answer_in_chat_history"
ONLY_OBSERVATION_HISTORY = "only_include_observation_in_chat_history"


class CoTAgentRunner(AgentRunner):
    """
    Reasoning loop runner for ``cot`` (alias ``react``) agents.

    Examples:
        >>> runner = CoTAgentRunner(model_client, ToolRegistry(), memories)
        >>> result = await runner.run(agent, {"question": "What is 2+2?"})
        >>> result.last("response").result
        '4'
    """

    def __init__(
        self,
        model_client: ModelClient,
        tool_registry: ToolRegistry,
        memory_registry: MemoryRegistry | None = None,
        config: CotflowSettings | None = None,
    ) -> None:
        self.model_client = model_client
        self.tool_registry = tool_registry
        self.memory_registry = memory_registry or MemoryRegistry()
        self.config = config or default_settings

    async def run(self, agent: AgentDefinition, parameters: Mapping[str, str]) -> ExecutionResult:
        if agent.llm is None:
            raise InvalidArgumentError(f"Agent {agent.id} has no llm configured")

        params = dict(parameters)
        memory: Memory | None = None
        session_id: str | None = None

        if agent.memory is not None:
            memory = self.memory_registry.resolve(agent.memory)
            session_id = resolve_session_id(params)
            history = await self._load_history(memory, session_id, agent.memory.window_size, params)
            if history:
                params[t.CHAT_HISTORY] = history

        tools = instantiate_tools(self.tool_registry, agent.tools)
        specs = {spec.key: spec for spec in agent.tools}

        return await self._run_loop(
            agent=agent,
            caller=MappingProxyType(params),
            tools=tools,
            specs=specs,
            memory=memory,
            session_id=session_id,
        )

    async def _load_history(
        self,
        memory: Memory,
        session_id: str,
        window_size: int | None,
        params: Mapping[str, str],
    ) -> str:
        messages: list[Message] = await memory.list(session_id, window_size)
        if params.get(ONLY_FINAL_ANSWER_HISTORY) == "true":
            messages = final_answer_view(messages)
        if params.get(ONLY_OBSERVATION_HISTORY) == "true":
            messages = tool_observation_view(messages)
        return render_chat_history(messages)

    async def _run_loop(self, agent, caller, tools, specs, memory, session_id) -> ExecutionResult:
        llm = agent.llm
        llm_params = {**llm.parameters, **caller}
        llm_params.update(stop_parameters(llm_params))

        template = caller.get(t.PROMPT) or t.AGENT_TEMPLATE_WITH_CONTEXT
        if t.TOOLS in caller:
            input_tools = parse_json_list(caller, t.TOOLS)
        else:
            input_tools = list(tools)
        prompt = compose_prompt(template, caller, tools, input_tools)

        max_iteration = self._max_iteration(llm_params)
        stop_when_no_tool = is_true(llm_params.get(STOP_WHEN_NO_TOOL_FOUND))
        verbose = is_true(caller.get(VERBOSE))
        interval = self._step_interval(caller)
        patterns = action_patterns(caller)
        question = caller.get(t.QUESTION, "")

        result = ExecutionResult()
        if memory is not None:
            result.add(name="session_id", result=session_id)
            await self._remember(memory, human_message(question, session_id))

        scratchpad = ""
        last_round = ""
        for i in range(max_iteration):
            round_params = {**llm_params, t.PROMPT: add_scratchpad(prompt, scratchpad)}
            logger.debug("cot_round_started", agent_id=agent.id, round=i)

            output = await guarded_call(
                self.model_client.predict(llm.model_id, round_params),
                self.config.model_call_timeout,
                f"Model {llm.model_id}",
            )
            thought = output.response_text()
            round_text = thought if i > 0 or "Thought:" in thought else f"Thought: {thought}"

            if has_final_answer(thought):
                if memory is not None:
                    await self._remember(
                        memory, ai_message(thought, session_id, is_final_answer=True)
                    )
                logger.info("cot_final_answer", agent_id=agent.id, rounds=i + 1)
                return result.add(name="response", result=extract_final_answer(thought))

            parsed = parse_action(thought, patterns)
            if parsed is None:
                if stop_when_no_tool:
                    logger.info("cot_stopped_no_tool", agent_id=agent.id, rounds=i + 1)
                    return result.add(name="response", result=extract_final_answer(thought))
                action = None
                observation = "tool not found"
            else:
                action = map_action_to_tool(parsed.action, tools)
                if action in tools and action in input_tools:
                    observation = await self._invoke_tool(
                        tools[action], specs[action], caller, action, parsed.action_input
                    )
                else:
                    logger.info("cot_tool_not_allowed", agent_id=agent.id, action=action)
                    observation = f"no access to this tool {action}"
                    action = None

            cleaned = clean_thought(thought)
            scratchpad += f"{cleaned}\nObservation: {observation}\n\n"
            if memory is not None and action is not None:
                await self._remember(memory, ai_message(cleaned, session_id))
                await self._remember(
                    memory, tool_message(f"{action} Observation: {observation}", session_id)
                )

            last_round = f"{round_text}\nObservation: {observation}"
            if verbose:
                result.add(name="response", result=last_round)

            if interval and i < max_iteration - 1:
                await self._pause(interval)

        logger.info("cot_max_iterations_reached", agent_id=agent.id, max_iteration=max_iteration)
        if not verbose:
            result.add(name="response", result=last_round)
        return result

    async def _invoke_tool(self, tool, spec, caller, action: str, action_input: str) -> str:
        invocation = {**tool_parameters(spec, caller), "input": action_input}
        if not tool.validate(invocation):
            return f"Tool {action} can't work for input: {action_input}"
        logger.debug("cot_tool_invoked", tool=action)
        raw = await guarded_call(
            tool.run(invocation), self.config.tool_call_timeout, f"Tool {action}"
        )
        return output_text(raw)

    def _max_iteration(self, params: Mapping[str, str]) -> int:
        raw = params.get(MAX_ITERATION)
        if raw is None:
            return self.config.default_max_iteration
        try:
            value = int(raw)
        except ValueError:
            raise InvalidArgumentError(f"{MAX_ITERATION} must be an integer: {raw}") from None
        if value < 1:
            raise InvalidArgumentError(f"{MAX_ITERATION} must be at least 1: {raw}")
        return value

    @staticmethod
    def _step_interval(params: Mapping[str, str]) -> float:
        raw = params.get(STEP_INTERVAL_MILLIS)
        if raw is None:
            return 0.0
        try:
            return max(int(raw), 0) / 1000
        except ValueError:
            raise InvalidArgumentError(f"{STEP_INTERVAL_MILLIS} must be an integer: {raw}") from None

    @staticmethod
    async def _pause(seconds: float) -> None:
        try:
            await asyncio.sleep(seconds)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.error("cot_step_interval_interrupted", seconds=seconds)
            raise InternalError("Reasoning loop interrupted between rounds") from None

    @staticmethod
    async def _remember(memory: Memory, message: Message) -> None:
        try:
            await memory.append(message.session_id, message)
        except MemoryPersistenceError as e:
            logger.warning("memory_write_skipped", session_id=message.session_id, error=e.message)


__all__ = ["CoTAgentRunner"]
