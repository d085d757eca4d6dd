"""
Interaction store - records of the requests an agent served.

The flow runner attaches step outputs to the originating interaction as
``additional_info``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from cotflow.config.exceptions import NotFoundError


class Interaction(BaseModel):
    """One request/response exchange within a conversation."""

    id: str
    session_id: str | None = None
    input: str | None = None
    response: str | None = None
    additional_info: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime | None = None


class InteractionStore(ABC):
    """Persistence of interaction records."""

    @abstractmethod
    async def create_interaction(self, interaction: Interaction) -> Interaction:
        pass

    @abstractmethod
    async def get_interaction(self, interaction_id: str) -> Interaction | None:
        pass

    @abstractmethod
    async def update_interaction(self, interaction_id: str, updates: dict[str, Any]) -> Interaction:
        """
        Apply a partial update.

        ``additional_info`` is merged key by key; other fields are replaced.

        Raises:
            NotFoundError: No interaction with this id
        """


class InMemoryInteractionStore(InteractionStore):
    """In-memory implementation for tests and single-process use."""

    def __init__(self) -> None:
        self.interactions: dict[str, Interaction] = {}

    async def create_interaction(self, interaction: Interaction) -> Interaction:
        self.interactions[interaction.id] = interaction
        return interaction

    async def get_interaction(self, interaction_id: str) -> Interaction | None:
        return self.interactions.get(interaction_id)

    async def update_interaction(self, interaction_id: str, updates: dict[str, Any]) -> Interaction:
        current = self.interactions.get(interaction_id)
        if current is None:
            raise NotFoundError(f"Interaction not found: {interaction_id}")

        changes = dict(updates)
        if "additional_info" in changes:
            changes["additional_info"] = {
                **current.additional_info,
                **(changes["additional_info"] or {}),
            }
        changes["updated_at"] = datetime.now()
        updated = current.model_copy(update=changes)
        self.interactions[interaction_id] = updated
        return updated


__all__ = ["Interaction", "InteractionStore", "InMemoryInteractionStore"]
