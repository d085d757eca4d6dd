"""
Prompt composition for the reasoning loop.

Each pass fills exactly one section of the template and leaves every other
placeholder untouched, so passes must run in this order:

    prefix/suffix -> tools -> indices -> examples -> chat history -> context -> scratchpad

A later section may embed placeholder text of an earlier one (an example that
quotes ``${parameters.chat_history}`` is resolved by the chat-history pass).
"""

import json
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.domain.messages import Message
from cotflow.prompt import templates as t
from cotflow.prompt.substitutor import substitute

if TYPE_CHECKING:
    from cotflow.tools.base import BaseTool


def parse_json_list(parameters: Mapping[str, str], key: str) -> list[str]:
    """Decode a JSON list parameter such as ``tools`` or ``examples``."""
    raw = parameters.get(key)
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"Parameter {key} must be a JSON list: {e}") from e
    if not isinstance(value, list):
        raise InvalidArgumentError(f"Parameter {key} must be a JSON list")
    return [item if isinstance(item, str) else json.dumps(item) for item in value]


def add_prefix_suffix(parameters: Mapping[str, str], prompt: str) -> str:
    return substitute(
        prompt,
        {
            t.PROMPT_PREFIX: parameters.get(t.PROMPT_PREFIX, ""),
            t.PROMPT_SUFFIX: parameters.get(t.PROMPT_SUFFIX, ""),
        },
    )


def add_tools(
    tools: Mapping[str, "BaseTool"],
    parameters: Mapping[str, str],
    input_tools: Iterable[str],
    prompt: str,
) -> str:
    tools_prefix = parameters.get("agent.tools.prefix", t.DEFAULT_TOOLS_PREFIX)
    tools_suffix = parameters.get("agent.tools.suffix", t.DEFAULT_TOOLS_SUFFIX)
    tool_prefix = parameters.get("agent.tools.tool.prefix", t.DEFAULT_TOOL_PREFIX)
    tool_suffix = parameters.get("agent.tools.tool.suffix", t.DEFAULT_TOOL_SUFFIX)

    descriptions = [tools_prefix]
    names = []
    for tool_name in input_tools:
        if tool_name not in tools:
            raise InvalidArgumentError(f"Tool [{tool_name}] not registered for model")
        descriptions.append(
            f"{tool_prefix}{tool_name}: {tools[tool_name].description}{tool_suffix}"
        )
        names.append(tool_name)
    descriptions.append(tools_suffix)

    mapping = {
        t.TOOL_DESCRIPTIONS: parameters.get(t.TOOL_DESCRIPTIONS, "".join(descriptions)),
        t.TOOL_NAMES: parameters.get(t.TOOL_NAMES, ", ".join(names)),
    }
    return substitute(prompt, mapping)


def add_indices(parameters: Mapping[str, str], prompt: str) -> str:
    rendered = ""
    if t.OS_INDICES in parameters:
        indices = parse_json_list(parameters, t.OS_INDICES)
        prefix = parameters.get("opensearch_indices.prefix", t.DEFAULT_INDICES_PREFIX)
        suffix = parameters.get("opensearch_indices.suffix", t.DEFAULT_INDICES_SUFFIX)
        index_prefix = parameters.get("opensearch_indices.index.prefix", t.DEFAULT_INDEX_PREFIX)
        index_suffix = parameters.get("opensearch_indices.index.suffix", t.DEFAULT_INDEX_SUFFIX)
        body = "".join(f"{index_prefix}{index}{index_suffix}" for index in indices)
        rendered = f"{prefix}{body}{suffix}"
    return substitute(prompt, {t.OS_INDICES: rendered})


def add_examples(parameters: Mapping[str, str], prompt: str) -> str:
    rendered = ""
    if t.EXAMPLES in parameters:
        examples = parse_json_list(parameters, t.EXAMPLES)
        prefix = parameters.get("examples.prefix", t.DEFAULT_EXAMPLES_PREFIX)
        suffix = parameters.get("examples.suffix", t.DEFAULT_EXAMPLES_SUFFIX)
        example_prefix = parameters.get("examples.example.prefix", t.DEFAULT_EXAMPLE_PREFIX)
        example_suffix = parameters.get("examples.example.suffix", t.DEFAULT_EXAMPLE_SUFFIX)
        body = "".join(f"{example_prefix}{example}{example_suffix}" for example in examples)
        rendered = f"{prefix}{body}{suffix}"
    return substitute(prompt, {t.EXAMPLES: rendered})


def add_chat_history(parameters: Mapping[str, str], prompt: str) -> str:
    return substitute(prompt, {t.CHAT_HISTORY: parameters.get(t.CHAT_HISTORY, "")})


def add_context(parameters: Mapping[str, str], prompt: str) -> str:
    return substitute(prompt, {t.CONTEXT: parameters.get(t.CONTEXT, "")})


def add_scratchpad(prompt: str, scratchpad: str) -> str:
    return substitute(prompt, {t.SCRATCHPAD: scratchpad, t.AGENT_SCRATCHPAD: scratchpad})


def compose_prompt(
    template: str,
    parameters: Mapping[str, str],
    tools: Mapping[str, "BaseTool"],
    input_tools: Iterable[str],
) -> str:
    """Run every section pass except the scratchpad, which changes per round."""
    prompt = add_prefix_suffix(parameters, template)
    prompt = add_tools(tools, parameters, input_tools, prompt)
    prompt = add_indices(parameters, prompt)
    prompt = add_examples(parameters, prompt)
    prompt = add_chat_history(parameters, prompt)
    prompt = add_context(parameters, prompt)
    return prompt


def render_chat_history(messages: Iterable[Message]) -> str:
    """Frame stored messages for the ``chat_history`` placeholder."""
    messages = list(messages)
    if not messages:
        return ""
    parts = [t.CHAT_HISTORY_HEADER, "<chat_history>\n"]
    for message in messages:
        parts.append(f"<message>\n{message}\n</message>\n")
    parts.append("</chat_history>\n")
    return "".join(parts)
