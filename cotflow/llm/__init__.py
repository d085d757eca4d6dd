"""
LLM module - model client contract and providers.
"""

from cotflow.llm.base import ModelClient
from cotflow.llm.openai import OpenAIModelClient

__all__ = ["ModelClient", "OpenAIModelClient"]
