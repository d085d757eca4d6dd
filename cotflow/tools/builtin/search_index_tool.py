"""
SearchIndexTool - queries an index with a query DSL body.

Expected ``input``: ``Index: <index-name>, Query: {<json query>}``
"""

import json
import re
from typing import Any

from cotflow.storage.search import SearchClient
from cotflow.tools.base import BaseTool

INPUT_PATTERN = re.compile(r"\S*Index:\s*([\w-]+),\s*Query:\s*(\{.*\})", re.DOTALL)

DEFAULT_SIZE = 2


def parse_search_input(text: str) -> tuple[str, dict[str, Any]] | None:
    """Extract index name and decoded query; None when the input is unusable."""
    match = INPUT_PATTERN.search(text or "")
    if not match:
        return None
    try:
        query = json.loads(match.group(2))
    except json.JSONDecodeError:
        return None
    if not isinstance(query, dict):
        return None
    return match.group(1), query


def _field_text(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


class SearchIndexTool(BaseTool):
    """Runs a search and renders hits as plain-text documents."""

    NAME = "SearchIndexTool"

    def __init__(
        self,
        search_client: SearchClient,
        size: int = DEFAULT_SIZE,
        alias: str | None = None,
        description: str | None = None,
    ) -> None:
        super().__init__(alias=alias, description=description)
        self.search_client = search_client
        self.size = size

    def get_name(self) -> str:
        return self.NAME

    def get_description(self) -> str:
        return "Use this tool to query OpenSearch index."

    async def run(self, parameters: dict[str, str]) -> str:
        parsed = parse_search_input(parameters.get("input", ""))
        if parsed is None:
            raise ValueError(f"Invalid search input: {parameters.get('input')}")
        index, query = parsed

        hits = await self.search_client.search(index, query, self.size)
        if not hits:
            return ""

        context = []
        for hit in hits:
            fields = "".join(f"{key}: {_field_text(value)}" for key, value in hit.source.items())
            context.append(f"document_id: {hit.id}\nDocument context:{fields}\n")
        return json.dumps("".join(context))

    def validate(self, parameters: dict[str, str]) -> bool:
        return parse_search_input(parameters.get("input", "")) is not None
