"""
Runners module - execution strategies per agent type.
"""

from cotflow.runners.base import AgentRunner
from cotflow.runners.cot import CoTAgentRunner
from cotflow.runners.flow import FlowAgentRunner

__all__ = ["AgentRunner", "CoTAgentRunner", "FlowAgentRunner"]
