"""
AgentTool - runs another agent as a tool step.
"""

from collections.abc import Awaitable, Callable

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.domain.output import ExecutionResult
from cotflow.tools.base import BaseTool

AgentRunner = Callable[[str, dict[str, str]], Awaitable[ExecutionResult]]


class AgentTool(BaseTool):
    """Delegates to the agent identified by ``agent_id``."""

    NAME = "AgentTool"

    def __init__(
        self,
        run_agent: AgentRunner,
        agent_id: str,
        alias: str | None = None,
        description: str | None = None,
    ) -> None:
        super().__init__(alias=alias, description=description)
        if not agent_id:
            raise InvalidArgumentError("AgentTool requires an agent_id parameter")
        self._run_agent = run_agent
        self.agent_id = agent_id

    def get_name(self) -> str:
        return self.NAME

    def get_description(self) -> str:
        return "Use this tool to run any agent."

    async def run(self, parameters: dict[str, str]) -> str:
        result = await self._run_agent(self.agent_id, dict(parameters))
        block = result.last("response")
        if block is None:
            return result.model_dump_json(exclude_none=True)
        if block.result is not None:
            return block.result
        return ExecutionResult(blocks=[block]).response_text()
