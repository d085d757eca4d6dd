"""
Agent stores - where the dispatcher looks agent definitions up.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cotflow.config.schema import AgentDefinition
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)


class AgentStore(ABC):
    """Read access to agent definitions."""

    @abstractmethod
    async def get_agent(self, agent_id: str) -> AgentDefinition | None:
        """Return the definition, or None when no such agent exists."""

    @abstractmethod
    async def list_agents(self) -> list[AgentDefinition]:
        pass


class InMemoryAgentStore(AgentStore):
    """Agent definitions registered in process."""

    def __init__(self, agents: list[AgentDefinition] | None = None) -> None:
        self.agents: dict[str, AgentDefinition] = {}
        for agent in agents or []:
            self.save_agent(agent)

    def save_agent(self, agent: AgentDefinition) -> None:
        self.agents[agent.id] = agent

    def delete_agent(self, agent_id: str) -> bool:
        return self.agents.pop(agent_id, None) is not None

    async def get_agent(self, agent_id: str) -> AgentDefinition | None:
        return self.agents.get(agent_id)

    async def list_agents(self) -> list[AgentDefinition]:
        return list(self.agents.values())


class YamlAgentStore(AgentStore):
    """
    Agent definitions loaded from YAML files.

    Scans ``agents_dir`` recursively; every ``*.yaml``/``*.yml`` file holds
    one definition, or a list of them under ``agents``. Invalid documents
    are skipped with a warning. Call ``reload()`` to pick up changes.
    """

    def __init__(self, agents_dir: str | Path):
        """
        Args:
            agents_dir: Root directory of the agent definition files
        """
        self.agents_dir = Path(agents_dir)
        if not self.agents_dir.exists():
            raise ValueError(f"Agents directory not found: {agents_dir}")
        self._agents: dict[str, AgentDefinition] | None = None
        self._lock = asyncio.Lock()

    async def get_agent(self, agent_id: str) -> AgentDefinition | None:
        agents = await self._ensure_loaded()
        return agents.get(agent_id)

    async def list_agents(self) -> list[AgentDefinition]:
        agents = await self._ensure_loaded()
        return list(agents.values())

    async def reload(self) -> int:
        async with self._lock:
            self._agents = await asyncio.to_thread(self._load_all)
            return len(self._agents)

    async def _ensure_loaded(self) -> dict[str, AgentDefinition]:
        if self._agents is None:
            await self.reload()
        return self._agents

    def _load_all(self) -> dict[str, AgentDefinition]:
        agents: dict[str, AgentDefinition] = {}
        files = sorted([*self.agents_dir.rglob("*.yaml"), *self.agents_dir.rglob("*.yml")])
        logger.info("agent_files_found", count=len(files), agents_dir=str(self.agents_dir))

        for path in files:
            relative = str(path.relative_to(self.agents_dir))
            for document in self._load_file(path):
                try:
                    agent = AgentDefinition.model_validate(document)
                except ValidationError as e:
                    logger.warning("agent_definition_invalid", file=relative, error=str(e))
                    continue
                if agent.id in agents:
                    logger.warning("agent_definition_duplicate", agent_id=agent.id, file=relative)
                agents[agent.id] = agent
                logger.debug("agent_definition_loaded", agent_id=agent.id, file=relative)

        logger.info("agent_definitions_loaded", count=len(agents))
        return agents

    @staticmethod
    def _load_file(path: Path) -> list[dict[str, Any]]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error("agent_file_unreadable", file=str(path), error=str(e))
            return []

        if not data:
            return []
        if isinstance(data, dict) and isinstance(data.get("agents"), list):
            return [item for item in data["agents"] if isinstance(item, dict)]
        if isinstance(data, dict):
            return [data]
        logger.warning("agent_file_unsupported", file=str(path))
        return []


__all__ = ["AgentStore", "InMemoryAgentStore", "YamlAgentStore"]
