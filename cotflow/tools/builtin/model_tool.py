"""
MLModelTool - runs a model prediction as a tool step.
"""

from typing import Any

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.llm.base import ModelClient
from cotflow.tools.base import BaseTool


class MLModelTool(BaseTool):
    """Sends the invocation parameters to a model and returns its response."""

    NAME = "MLModelTool"

    def __init__(
        self,
        model_client: ModelClient,
        model_id: str,
        alias: str | None = None,
        description: str | None = None,
    ) -> None:
        super().__init__(alias=alias, description=description)
        if not model_id:
            raise InvalidArgumentError("MLModelTool requires a model_id parameter")
        self.model_client = model_client
        self.model_id = model_id

    def get_name(self) -> str:
        return self.NAME

    def get_description(self) -> str:
        return "Use this tool to run any model."

    async def run(self, parameters: dict[str, str]) -> Any:
        output = await self.model_client.predict(self.model_id, dict(parameters))
        return output.response_text()

    def validate(self, parameters: dict[str, str]) -> bool:
        return bool(parameters)
