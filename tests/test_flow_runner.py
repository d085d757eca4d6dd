"""
Tests for the sequential pipeline runner
"""

import asyncio

import pytest

from cotflow.config.exceptions import ExecutionTimeoutError, InternalError, InvalidArgumentError, NotFoundError
from cotflow.config.schema import AgentDefinition, MemorySpec, ToolSpec
from cotflow.runners.flow import FlowAgentRunner
from cotflow.storage.interactions import InMemoryInteractionStore, Interaction
from cotflow.tools.base import BaseTool


def make_agent(tools, memory=None):
    return AgentDefinition(id="flow-agent", type="flow", tools=tools, memory=memory)


class OrderedTool(BaseTool):
    """Tool that logs when it starts and finishes."""

    def __init__(self, key: str, events: list, output, delay: float = 0.0):
        self.key = key
        self.events = events
        self.output = output
        self.delay = delay
        self.seen: list[dict] = []
        super().__init__()

    def get_name(self) -> str:
        return self.key

    def get_description(self) -> str:
        return "ordered"

    async def run(self, parameters):
        self.events.append(f"{self.key}:start")
        self.seen.append(dict(parameters))
        await asyncio.sleep(self.delay)
        self.events.append(f"{self.key}:end")
        return self.output


@pytest.fixture
def interactions():
    return InMemoryInteractionStore()


@pytest.fixture
def runner(tool_registry, memory_registry, interactions, fast_settings):
    return FlowAgentRunner(tool_registry, memory_registry, interactions, fast_settings)


@pytest.mark.asyncio
async def test_result_is_chained_into_next_input(runner, register_tool):
    register_tool("first", output="7")
    second = register_tool("second", output="done")
    agent = make_agent(
        [
            ToolSpec(type="first", name="tool1"),
            ToolSpec(type="second", name="tool2", parameters={"input": "Result: ${parameters.tool1.output}"}),
        ]
    )

    result = await runner.run(agent, {})

    assert second.calls[0]["input"] == "Result: 7"
    assert len(result.blocks) == 1
    assert result.blocks[0].name == "tool2"
    assert result.blocks[0].result == "done"


@pytest.mark.asyncio
async def test_steps_run_strictly_in_order(runner, tool_registry):
    events: list[str] = []
    tools = {
        "a": OrderedTool("a", events, {"rows": 3}, delay=0.02),
        "b": OrderedTool("b", events, "second", delay=0.01),
        "c": OrderedTool("c", events, "third"),
    }
    for key, tool in tools.items():
        tool_registry.register(key, lambda params, tool=tool: tool)

    result = await runner.run(make_agent([ToolSpec(type=k) for k in tools]), {})

    assert events == ["a:start", "a:end", "b:start", "b:end", "c:start", "c:end"]
    assert tools["b"].seen[0]["a.output"] == '{"rows": 3}'
    assert tools["c"].seen[0]["b.output"] == "second"
    assert result.blocks[-1].result == "third"


@pytest.mark.asyncio
async def test_string_outputs_are_escaped(runner, register_tool):
    register_tool("first", output='say "hi"\nbye')
    second = register_tool("second")

    await runner.run(make_agent([ToolSpec(type="first"), ToolSpec(type="second")]), {})

    assert second.calls[0]["first.output"] == 'say \\"hi\\"\\nbye'


@pytest.mark.asyncio
async def test_step_parameters_layering(runner, register_tool):
    tool = register_tool("search")
    agent = make_agent(
        [ToolSpec(type="search", name="web", parameters={"size": "1", "index": "a", "mode": "x"})]
    )

    await runner.run(
        agent,
        {"size": "2", "search.index": "b", "web.index": "c", "question": "q"},
    )

    assert tool.calls[0] == {
        "size": "2",
        "index": "c",
        "mode": "x",
        "question": "q",
        "search.index": "b",
        "web.index": "c",
    }


@pytest.mark.asyncio
async def test_include_output_in_response(runner, register_tool):
    register_tool("first", output="one")
    register_tool("second", output={"answer": 2})
    register_tool("third", output="three")
    agent = make_agent(
        [
            ToolSpec(type="first", include_output_in_agent_response=True),
            ToolSpec(type="second"),
            ToolSpec(type="third"),
        ]
    )

    result = await runner.run(agent, {})

    assert [b.name for b in result.blocks] == ["first", "third"]
    assert result.blocks[0].result == "one"


@pytest.mark.asyncio
async def test_structured_last_output_goes_to_data(runner, register_tool):
    register_tool("only", output={"answer": 2})

    result = await runner.run(make_agent([ToolSpec(type="only")]), {})

    assert result.blocks[0].data == {"answer": 2}
    assert result.blocks[0].result is None


@pytest.mark.asyncio
async def test_empty_pipeline_fails_fast(runner):
    with pytest.raises(InvalidArgumentError):
        await runner.run(make_agent([]), {})


@pytest.mark.asyncio
async def test_failure_short_circuits(runner, register_tool):
    register_tool("first", output="1")
    register_tool("second", error=RuntimeError("broken"))
    third = register_tool("third")

    with pytest.raises(InternalError, match="broken"):
        await runner.run(
            make_agent([ToolSpec(type="first"), ToolSpec(type="second"), ToolSpec(type="third")]),
            {},
        )

    assert third.calls == []


@pytest.mark.asyncio
async def test_step_timeout(runner, tool_registry, fast_settings):
    fast_settings.tool_call_timeout = 0.01
    tool_registry.register("slow", lambda params: OrderedTool("slow", [], "x", delay=1.0))

    with pytest.raises(ExecutionTimeoutError):
        await runner.run(make_agent([ToolSpec(type="slow")]), {})


@pytest.mark.asyncio
async def test_unregistered_tool_type(runner):
    with pytest.raises(NotFoundError):
        await runner.run(make_agent([ToolSpec(type="missing")]), {})


@pytest.mark.asyncio
async def test_final_answer_and_interaction_update(runner, register_tool, memory, interactions):
    register_tool("first", output="7")
    register_tool("second", output="Result: 7")
    await interactions.create_interaction(Interaction(id="i1", session_id="s1"))
    agent = make_agent(
        [ToolSpec(type="first"), ToolSpec(type="second")],
        memory=MemorySpec(type="conversation_buffer_window"),
    )

    result = await runner.run(agent, {"session_id": "s1", "parent_interaction_id": "i1"})

    assert result.blocks[-1].result == "Result: 7"
    messages = await memory.list("s1")
    assert len(messages) == 1
    assert messages[0].content == "Result: 7"
    assert messages[0].is_final_answer

    interaction = await interactions.get_interaction("i1")
    assert interaction.additional_info == {"first.output": "7", "second.output": "Result: 7"}


@pytest.mark.asyncio
async def test_interaction_update_failure_is_logged_only(runner, register_tool):
    register_tool("only", output="ok")
    agent = make_agent([ToolSpec(type="only")], memory=MemorySpec(type="conversation_buffer_window"))

    result = await runner.run(agent, {"memory_id": "s1", "parent_interaction_id": "missing"})

    assert result.blocks[0].result == "ok"


@pytest.mark.asyncio
async def test_no_persistence_without_session(runner, register_tool, memory):
    register_tool("only", output="ok")
    agent = make_agent([ToolSpec(type="only")], memory=MemorySpec(type="conversation_buffer_window"))

    await runner.run(agent, {})

    assert memory.storage.sessions == {}
