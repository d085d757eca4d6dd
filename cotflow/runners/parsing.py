"""
Parsing of free-form model output in the reasoning loop.

Model text is matched best-effort: action patterns are tried in order and
the first one that captures both an action and its input wins.
"""

import json
import re
from collections.abc import Iterable, Mapping
from typing import NamedTuple

from cotflow.config.exceptions import InvalidArgumentError

DEFAULT_ACTION_PATTERNS = (
    r"Action:\s*(\w+)\s*Action Input:\s*(.*)",
    r"action[:=]*\s*([^\n]+)\s*action input[:=]*\s*([^\n]+)",
)

ACTION_REGEX_PARAMETER = "cot.action_regex"

FINAL_ANSWER_MARKER = "Final Answer:"

# Continuation artifacts a model may emit after its answer.
ANSWER_TERMINATORS = ("\n\nQuestion:", "\nHuman:")

DEFAULT_STOP = ["\nObservation:", "\n\tObservation:"]
DEFAULT_STOP_SEQUENCES = [
    "\n\nHuman:",
    "\nObservation:",
    "\n\tObservation:",
    "\nObservation",
    "\n\tObservation",
    "\n\nQuestion",
]

_OBSERVATION_LINE = re.compile(r"Observation:.+\n?")


class ParsedAction(NamedTuple):
    action: str
    action_input: str


def action_patterns(parameters: Mapping[str, str]) -> list[str]:
    """Patterns from ``cot.action_regex`` (JSON list) or the defaults."""
    raw = parameters.get(ACTION_REGEX_PARAMETER)
    if raw is None:
        return list(DEFAULT_ACTION_PATTERNS)
    try:
        patterns = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"{ACTION_REGEX_PARAMETER} must be a JSON list: {e}") from e
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise InvalidArgumentError(f"{ACTION_REGEX_PARAMETER} must be a JSON list of strings")
    return patterns


def parse_action(text: str, patterns: Iterable[str]) -> ParsedAction | None:
    """Return the action of the first pattern that captures two groups."""
    for pattern in patterns:
        try:
            match = re.search(pattern, text)
        except re.error as e:
            raise InvalidArgumentError(f"Invalid action pattern {pattern!r}: {e}") from e
        if match is None or match.re.groups < 2:
            continue
        action, action_input = match.group(1), match.group(2)
        if action is not None and action_input is not None:
            return ParsedAction(action.strip(), action_input.strip())
    return None


def map_action_to_tool(action: str, tool_keys: Iterable[str]) -> str:
    """
    Map raw action text to a tool key.

    Every key contained case-insensitively in the action replaces it, so the
    last matching key in iteration order wins.
    """
    resolved = action
    lowered = action.lower()
    for key in tool_keys:
        if key.lower() in lowered:
            resolved = key
    return resolved


def has_final_answer(text: str) -> bool:
    return "final answer:" in text.lower()


def extract_final_answer(text: str) -> str:
    index = text.find(FINAL_ANSWER_MARKER)
    answer = text[index + len(FINAL_ANSWER_MARKER):] if index >= 0 else text
    for terminator in ANSWER_TERMINATORS:
        cut = answer.find(terminator)
        if cut >= 0:
            answer = answer[:cut]
    return answer.strip()


def clean_thought(text: str) -> str:
    """Drop any observation the model hallucinated and trim."""
    return _OBSERVATION_LINE.sub("", text).strip()


def stop_parameters(parameters: Mapping[str, str]) -> dict[str, str]:
    """Stop sequences to inject, skipping the ones the caller supplied."""
    injected = {}
    if "stop" not in parameters:
        injected["stop"] = json.dumps(DEFAULT_STOP)
    if "stop_sequences" not in parameters:
        injected["stop_sequences"] = json.dumps(DEFAULT_STOP_SEQUENCES)
    return injected


__all__ = [
    "DEFAULT_ACTION_PATTERNS",
    "DEFAULT_STOP",
    "DEFAULT_STOP_SEQUENCES",
    "ParsedAction",
    "action_patterns",
    "parse_action",
    "map_action_to_tool",
    "has_final_answer",
    "extract_final_answer",
    "clean_thought",
    "stop_parameters",
]
