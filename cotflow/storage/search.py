"""
Search client used by SearchIndexTool.

The agent core only consumes search hits; any OpenSearch-compatible
``_search`` endpoint can serve them.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from cotflow.utils.logging import get_logger
from cotflow.utils.retry import retry_async

logger = get_logger(__name__)


class SearchHit(dict):
    """A single hit: ``_id`` plus ``_source``."""

    @property
    def id(self) -> str:
        return str(self.get("_id", ""))

    @property
    def source(self) -> dict[str, Any]:
        return self.get("_source") or {}


class SearchClient(ABC):
    """Runs a query DSL body against one index."""

    @abstractmethod
    async def search(self, index: str, query: dict[str, Any], size: int) -> list[SearchHit]:
        """Return at most ``size`` hits."""

    async def close(self) -> None:
        return None


class HttpSearchClient(SearchClient):
    """Search client for an OpenSearch-compatible REST endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: Cluster URL, e.g. ``http://localhost:9200``
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
            client: Pre-built httpx client (tests inject a mock transport)
        """
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json", **(headers or {})},
        )

    @retry_async(max_attempts=3, exceptions=(httpx.TransportError,))
    async def _post(self, url: str, body: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.post(url, json=body)
        response.raise_for_status()
        return response.json()

    async def search(self, index: str, query: dict[str, Any], size: int) -> list[SearchHit]:
        url = f"{self._base_url}/{index}/_search"
        body = {**query, "size": size}
        logger.debug("search_request", url=url, size=size)
        try:
            payload = await self._post(url, body)
        except httpx.HTTPError as e:
            logger.error("search_request_failed", url=url, error=str(e))
            raise
        hits = payload.get("hits", {}).get("hits", []) or []
        logger.info("search_request_success", index=index, hits=len(hits))
        return [SearchHit(hit) for hit in hits]

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["SearchHit", "SearchClient", "HttpSearchClient"]
