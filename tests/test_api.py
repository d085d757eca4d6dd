"""
API tests for the FastAPI application.
"""

import pytest
from fastapi.testclient import TestClient

from cotflow.api.app import _build_from_settings, create_app
from cotflow.config.settings import CotflowSettings
from cotflow.config.schema import AgentDefinition, AgentType, LLMSpec, ToolSpec
from cotflow.runtime.executor import build_executor
from cotflow.storage.agents import InMemoryAgentStore
from tests.conftest import ScriptedModelClient


@pytest.fixture
def client(fast_settings):
    store = InMemoryAgentStore(
        [
            AgentDefinition(id="adder", type="flow", tools=[ToolSpec(type="MathTool")]),
            AgentDefinition(
                id="thinker",
                type="cot",
                llm=LLMSpec(model_id="m"),
                tools=[ToolSpec(type="MathTool")],
            ),
            AgentDefinition(id="odd", type="planner"),
        ]
    )
    model = ScriptedModelClient(["Thought: easy\nFinal Answer: 42"])
    executor = build_executor(store, model, config=fast_settings)
    return TestClient(create_app(executor, config=fast_settings))


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "timestamp" in data


class TestToolEndpoints:
    def test_list_tools(self, client):
        response = client.get("/tools")
        assert response.status_code == 200

        names = [tool["name"] for tool in response.json()]
        assert "MathTool" in names
        assert "AgentTool" in names


class TestAgentEndpoints:
    """Test agent endpoints."""

    def test_list_agents(self, client):
        response = client.get("/agents")
        assert response.status_code == 200
        assert {a["id"] for a in response.json()} == {"adder", "thinker", "odd"}

    def test_execute_flow_agent(self, client):
        response = client.post("/agents/adder/_execute", json={"parameters": {"input": "2+3"}})
        assert response.status_code == 200

        data = response.json()
        assert data["agent_id"] == "adder"
        assert data["output"] == [{"name": "MathTool", "result": "Answer: 5"}]

    def test_execute_cot_agent(self, client):
        response = client.post("/agents/thinker/_execute", json={"parameters": {"question": "?"}})
        assert response.status_code == 200
        assert response.json()["output"][-1]["result"] == "42"

    def test_unknown_agent(self, client):
        response = client.post("/agents/ghost/_execute", json={"parameters": {}})
        assert response.status_code == 404
        assert "ghost" in response.json()["detail"]

    def test_unsupported_agent_type(self, client):
        response = client.post("/agents/odd/_execute", json={})
        assert response.status_code == 400

    def test_parameters_must_be_strings(self, client):
        response = client.post("/agents/adder/_execute", json={"parameters": {"input": [1]}})
        assert response.status_code == 422


class TestServerWiring:
    def test_flow_runner_has_no_interaction_store(self):
        config = CotflowSettings(
            openai_api_key="sk-test", agents_dir=None, redis_url=None, search_base_url=None
        )
        executor, resources = _build_from_settings(config)

        assert executor.runners[AgentType.FLOW].interaction_store is None
        assert len(resources) == 2

    def test_flow_with_parent_interaction_id(self, client):
        response = client.post(
            "/agents/adder/_execute",
            json={"parameters": {"input": "1+1", "parent_interaction_id": "i-1"}},
        )
        assert response.status_code == 200
        assert response.json()["output"] == [{"name": "MathTool", "result": "Answer: 2"}]
