"""
Tests for MLModelTool and AgentTool
"""

from unittest.mock import AsyncMock

import pytest

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.domain.output import ExecutionResult
from cotflow.tools.builtin import register_builtin_tools
from cotflow.tools.builtin.agent_tool import AgentTool
from cotflow.tools.builtin.model_tool import MLModelTool
from cotflow.tools.registry import ToolRegistry


@pytest.mark.asyncio
async def test_model_tool_returns_response():
    client = AsyncMock()
    client.predict.return_value = ExecutionResult.of_response("summary")
    tool = MLModelTool(client, "model-1")

    assert await tool.run({"prompt": "summarize"}) == "summary"
    client.predict.assert_awaited_once_with("model-1", {"prompt": "summarize"})


@pytest.mark.asyncio
async def test_model_tool_list_response():
    client = AsyncMock()
    client.predict.return_value = ExecutionResult.of_response(["first", "second"])
    assert await MLModelTool(client, "m").run({"prompt": "p"}) == "first"


def test_model_tool_validation():
    tool = MLModelTool(AsyncMock(), "m")
    assert tool.validate({"input": "x"})
    assert not tool.validate({})


def test_model_tool_requires_model_id():
    with pytest.raises(InvalidArgumentError):
        MLModelTool(AsyncMock(), "")


@pytest.mark.asyncio
async def test_agent_tool_returns_final_response():
    run_agent = AsyncMock(
        return_value=ExecutionResult()
        .add(name="session_id", result="s1")
        .add(name="response", result="done")
    )
    tool = AgentTool(run_agent, "inner")

    assert await tool.run({"question": "q"}) == "done"
    run_agent.assert_awaited_once_with("inner", {"question": "q"})


@pytest.mark.asyncio
async def test_agent_tool_structured_response():
    run_agent = AsyncMock(return_value=ExecutionResult().add(name="response", data={"response": "x"}))
    assert await AgentTool(run_agent, "inner").run({}) == "x"


def test_register_builtin_tools_skips_missing_collaborators():
    registry = ToolRegistry()
    register_builtin_tools(registry)
    assert registry.list_available() == ["MathTool"]

    registry = ToolRegistry()
    register_builtin_tools(registry, model_client=AsyncMock(), search_client=AsyncMock())
    assert registry.list_available() == ["MathTool", "MLModelTool", "SearchIndexTool"]
    assert registry.create("MLModelTool", {"model_id": "m"}).model_id == "m"
    assert registry.create("SearchIndexTool", {"size": "4"}).size == 4
