"""
Execution result - the tensor-like output shared by every agent type.
"""

import json
from typing import Any

from pydantic import BaseModel, Field


class ResultBlock(BaseModel):
    """A named result: either a scalar string or a structured map."""

    name: str | None = None
    result: str | None = None
    data: dict[str, Any] | None = None


class ExecutionResult(BaseModel):
    """Ordered list of result blocks."""

    blocks: list[ResultBlock] = Field(default_factory=list)

    def add(
        self,
        name: str | None = None,
        result: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> "ExecutionResult":
        self.blocks.append(ResultBlock(name=name, result=result, data=data))
        return self

    def first(self, name: str) -> ResultBlock | None:
        for block in self.blocks:
            if block.name == name:
                return block
        return None

    def last(self, name: str) -> ResultBlock | None:
        for block in reversed(self.blocks):
            if block.name == name:
                return block
        return None

    @classmethod
    def of_response(cls, response: str) -> "ExecutionResult":
        """Build the model-response shape returned by a model client."""
        return cls(blocks=[ResultBlock(name="response", data={"response": response})])

    def response_text(self) -> str:
        """
        Extract the text of a model response.

        The first block's ``data["response"]`` may be a string or a list;
        for lists the first element is used, JSON-encoded unless a string.
        """
        if not self.blocks:
            return ""
        data = self.blocks[0].data or {}
        response = data.get("response")
        if isinstance(response, str):
            return response
        if isinstance(response, list) and response:
            value = response[0]
            return value if isinstance(value, str) else json.dumps(value)
        if response is None:
            return self.blocks[0].result or ""
        return json.dumps(response)


__all__ = ["ResultBlock", "ExecutionResult"]
