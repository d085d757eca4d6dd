"""
Storage module - agent definitions, interaction records and search backends.
"""

from cotflow.storage.agents import AgentStore, InMemoryAgentStore, YamlAgentStore
from cotflow.storage.interactions import InMemoryInteractionStore, Interaction, InteractionStore
from cotflow.storage.search import HttpSearchClient, SearchClient, SearchHit

__all__ = [
    "AgentStore",
    "InMemoryAgentStore",
    "YamlAgentStore",
    "Interaction",
    "InteractionStore",
    "InMemoryInteractionStore",
    "SearchClient",
    "SearchHit",
    "HttpSearchClient",
]
