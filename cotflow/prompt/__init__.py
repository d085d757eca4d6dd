"""
Prompt module - placeholder substitution and section assembly.
"""

from .composer import (
    add_chat_history,
    add_context,
    add_examples,
    add_indices,
    add_prefix_suffix,
    add_scratchpad,
    add_tools,
    compose_prompt,
    parse_json_list,
    render_chat_history,
)
from .substitutor import DEFAULT_CLOSE_TOKEN, DEFAULT_OPEN_TOKEN, placeholders, substitute
from .templates import AGENT_TEMPLATE_WITH_CONTEXT

__all__ = [
    "substitute",
    "placeholders",
    "DEFAULT_OPEN_TOKEN",
    "DEFAULT_CLOSE_TOKEN",
    "AGENT_TEMPLATE_WITH_CONTEXT",
    "add_prefix_suffix",
    "add_tools",
    "add_indices",
    "add_examples",
    "add_chat_history",
    "add_context",
    "add_scratchpad",
    "compose_prompt",
    "parse_json_list",
    "render_chat_history",
]
