"""Base abstractions for tools used by agents."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class ToolMetadata(BaseModel):
    """Tool entry exposed by the tool listing."""

    name: str
    description: str | None = None


class BaseTool(ABC):
    """Common interface that every concrete tool must implement."""

    def __init__(self, alias: str | None = None, description: str | None = None) -> None:
        self.name = self.get_name()
        self.description = description or self.get_description()
        self.alias = alias

    @abstractmethod
    def get_name(self) -> str:
        """Return the tool type name."""

    @abstractmethod
    def get_description(self) -> str:
        """Return the tool description used for prompting."""

    @abstractmethod
    async def run(self, parameters: dict[str, str]) -> Any:
        """
        Execute the tool.

        Args:
            parameters: Flat parameter map; reasoning agents pass the parsed
                action input as ``input``

        Returns:
            Tool output (string, mapping or any JSON-serializable value)
        """

    def validate(self, parameters: dict[str, str]) -> bool:
        """Check whether the tool can work on these parameters."""
        return True

    def get_metadata(self) -> ToolMetadata:
        return ToolMetadata(name=self.name, description=self.description)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, alias={self.alias!r})"


__all__ = ["BaseTool", "ToolMetadata"]
