"""
Agent routes.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from cotflow.api.deps import get_executor
from cotflow.config.exceptions import (
    AgentError,
    ExecutionTimeoutError,
    InvalidArgumentError,
    NotFoundError,
)
from cotflow.domain.output import ResultBlock
from cotflow.runtime.executor import AgentExecutor
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/agents")


class ExecuteRequest(BaseModel):
    parameters: dict[str, str] = Field(default_factory=dict)


class ExecuteResponse(BaseModel):
    agent_id: str
    output: list[ResultBlock]


class AgentSummary(BaseModel):
    id: str
    name: str | None = None
    type: str
    description: str | None = None
    tools: list[str] = []


def _status_code(error: AgentError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, InvalidArgumentError):
        return 400
    if isinstance(error, ExecutionTimeoutError):
        return 504
    return 500


@router.get("", response_model=list[AgentSummary])
async def list_agents(executor: AgentExecutor = Depends(get_executor)):
    """List all agent definitions."""
    agents = await executor.agent_store.list_agents()
    return [
        AgentSummary(
            id=agent.id,
            name=agent.name,
            type=agent.type,
            description=agent.description,
            tools=[spec.key for spec in agent.tools],
        )
        for agent in agents
    ]


@router.post("/{agent_id}/_execute", response_model=ExecuteResponse, response_model_exclude_none=True)
async def execute_agent(
    agent_id: str,
    request: ExecuteRequest,
    executor: AgentExecutor = Depends(get_executor),
):
    """Run an agent with flat string parameters."""
    try:
        result = await executor.execute(agent_id, request.parameters)
    except AgentError as e:
        logger.info("execute_request_failed", agent_id=agent_id, error=e.message)
        raise HTTPException(status_code=_status_code(e), detail=e.message)
    return ExecuteResponse(agent_id=agent_id, output=result.blocks)
