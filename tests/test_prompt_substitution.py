"""
Tests for placeholder substitution
"""

from cotflow.prompt.substitutor import placeholders, substitute


def test_substitute_known_placeholders():
    result = substitute("Hello ${parameters.name}!", {"name": "world"})
    assert result == "Hello world!"


def test_unknown_placeholders_stay_literal():
    template = "${parameters.known} and ${parameters.unknown}"
    assert substitute(template, {"known": "x"}) == "x and ${parameters.unknown}"


def test_none_values_stay_literal():
    assert substitute("${parameters.a}", {"a": None}) == "${parameters.a}"


def test_inserted_text_is_not_rescanned():
    """A value that looks like a placeholder is inserted verbatim."""
    result = substitute("${parameters.a}", {"a": "${parameters.b}", "b": "x"})
    assert result == "${parameters.b}"


def test_substitution_is_idempotent():
    template = "Q: ${parameters.question}\nT: ${parameters.tool_names}\n${parameters.other}"
    mapping = {"question": "what is 2+2?", "tool_names": "calculator, search"}

    once = substitute(template, mapping)
    twice = substitute(once, mapping)

    assert once == twice
    assert "${parameters.other}" in twice


def test_empty_inputs_returned_unchanged():
    assert substitute("", {"a": "b"}) == ""
    assert substitute("${parameters.a}", {}) == "${parameters.a}"


def test_custom_tokens():
    assert substitute("Hi {{name}}", {"name": "Bob"}, "{{", "}}") == "Hi Bob"


def test_placeholders_in_order():
    template = "${parameters.b} ${parameters.a} ${parameters.b}"
    assert placeholders(template) == ["b", "a", "b"]
