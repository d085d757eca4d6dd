"""
Placeholder substitution for prompt templates.

Placeholders look like ``${parameters.name}``. A pass replaces only names
present in the mapping, leaves everything else as literal text and never
re-scans text it has just inserted.
"""

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

DEFAULT_OPEN_TOKEN = "${parameters."
DEFAULT_CLOSE_TOKEN = "}"


@lru_cache(maxsize=32)
def _placeholder_pattern(open_token: str, close_token: str) -> re.Pattern:
    return re.compile(re.escape(open_token) + r"(.*?)" + re.escape(close_token))


def substitute(
    template: str,
    mapping: Mapping[str, Any],
    open_token: str = DEFAULT_OPEN_TOKEN,
    close_token: str = DEFAULT_CLOSE_TOKEN,
) -> str:
    if not template or not mapping:
        return template

    def replace_var(match: re.Match) -> str:
        name = match.group(1)
        if name in mapping and mapping[name] is not None:
            return str(mapping[name])
        return match.group(0)

    return _placeholder_pattern(open_token, close_token).sub(replace_var, template)


def placeholders(
    template: str,
    open_token: str = DEFAULT_OPEN_TOKEN,
    close_token: str = DEFAULT_CLOSE_TOKEN,
) -> list[str]:
    """Names referenced by a template, in order of appearance."""
    return _placeholder_pattern(open_token, close_token).findall(template or "")
