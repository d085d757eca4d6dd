"""
Tests for prompt section passes
"""

import json

import pytest

from cotflow.config.exceptions import InvalidArgumentError
from cotflow.domain.messages import ai_message, human_message
from cotflow.prompt import templates as t
from cotflow.prompt.composer import (
    add_chat_history,
    add_examples,
    add_indices,
    add_prefix_suffix,
    add_scratchpad,
    add_tools,
    compose_prompt,
    parse_json_list,
    render_chat_history,
)
from tests.conftest import RecordingTool


@pytest.fixture
def tools():
    return {
        "calculator": RecordingTool("calculator"),
        "search": RecordingTool("search"),
    }


def test_prefix_and_suffix_default_to_empty():
    prompt = "${parameters.prompt_prefix}body${parameters.prompt_suffix}"
    assert add_prefix_suffix({}, prompt) == "body"
    assert add_prefix_suffix({"prompt_prefix": "<", "prompt_suffix": ">"}, prompt) == "<body>"


def test_add_tools_renders_descriptions_and_names(tools):
    prompt = "${parameters.tool_descriptions}|${parameters.tool_names}"
    result = add_tools(tools, {}, ["calculator", "search"], prompt)

    descriptions, names = result.split("|")
    assert descriptions == (
        t.DEFAULT_TOOLS_PREFIX
        + "<tool>\ncalculator: calculator tool\n</tool>\n"
        + "<tool>\nsearch: search tool\n</tool>\n"
        + t.DEFAULT_TOOLS_SUFFIX
    )
    assert names == "calculator, search"


def test_add_tools_wrappers_and_overrides(tools):
    params = {
        "agent.tools.prefix": "[",
        "agent.tools.suffix": "]",
        "agent.tools.tool.prefix": "(",
        "agent.tools.tool.suffix": ")",
        "tool_names": "custom",
    }
    result = add_tools(tools, params, ["search"], "${parameters.tool_descriptions} ${parameters.tool_names}")
    assert result == "[(search: search tool)] custom"


def test_add_tools_rejects_unknown_tool(tools):
    with pytest.raises(InvalidArgumentError, match=r"Tool \[missing\] not registered"):
        add_tools(tools, {}, ["missing"], "${parameters.tool_names}")


def test_indices_rendered_when_present():
    params = {"opensearch_indices": json.dumps(["logs", "metrics"])}
    result = add_indices(params, "${parameters.opensearch_indices}")
    assert result == (
        t.DEFAULT_INDICES_PREFIX
        + "<index>\nlogs\n</index>\n<index>\nmetrics\n</index>\n"
        + t.DEFAULT_INDICES_SUFFIX
    )


def test_indices_and_examples_absent_render_empty():
    assert add_indices({}, "a${parameters.opensearch_indices}b") == "ab"
    assert add_examples({}, "a${parameters.examples}b") == "ab"


def test_examples_with_custom_wrappers():
    params = {
        "examples": json.dumps(["one", "two"]),
        "examples.prefix": "",
        "examples.suffix": "",
        "examples.example.prefix": "- ",
        "examples.example.suffix": "\n",
    }
    assert add_examples(params, "${parameters.examples}") == "- one\n- two\n"


def test_parse_json_list_rejects_non_lists():
    with pytest.raises(InvalidArgumentError):
        parse_json_list({"tools": "not json"}, "tools")
    with pytest.raises(InvalidArgumentError):
        parse_json_list({"tools": '{"a": 1}'}, "tools")


def test_scratchpad_fills_both_placeholders():
    prompt = "${parameters.scratchpad}/${parameters.agent_scratchpad}"
    assert add_scratchpad(prompt, "notes") == "notes/notes"


def test_compose_prompt_leaves_round_placeholders(tools):
    prompt = compose_prompt(t.AGENT_TEMPLATE_WITH_CONTEXT, {"context": "ctx"}, tools, ["calculator"])

    assert "${parameters.question}" in prompt
    assert "${parameters.scratchpad}" in prompt
    assert "${parameters.tool_names}" not in prompt
    assert "[calculator]" in prompt
    assert "ctx" in prompt


def test_chat_history_section_passes_through():
    history = render_chat_history(
        [human_message("hi", "s"), ai_message("hello", "s", is_final_answer=True)]
    )
    assert history == (
        "Below is Chat History between Human and AI in <chat_history>:\n"
        "<chat_history>\n"
        "<message>\nHuman: hi\n</message>\n"
        "<message>\nAI: hello\n</message>\n"
        "</chat_history>\n"
    )
    assert add_chat_history({"chat_history": history}, "${parameters.chat_history}") == history


def test_empty_history_renders_nothing():
    assert render_chat_history([]) == ""
