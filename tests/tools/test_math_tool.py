"""
Tests for MathTool
"""

import pytest

from cotflow.tools.builtin.math_tool import MathTool, SafeExpressionEvaluator


@pytest.fixture
def tool():
    return MathTool()


@pytest.mark.asyncio
async def test_run_returns_answer(tool):
    assert await tool.run({"input": "2+2"}) == "Answer: 4"


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("1,000 * 2", "2000"),
        ("7/2", "3.5"),
        ("10 / 4", "2.5"),
        ("2 ** 10", "1024"),
        ("-(3 - 5)", "2"),
        ("sqrt(16)", "4.0"),
        ("math.sqrt(9) + 1", "4.0"),
    ],
)
def test_calculate(tool, expression, expected):
    assert tool.calculate(expression) == expected


@pytest.mark.parametrize(
    "expression",
    ["__import__('os')", "x + 1", "'a' * 3", "open('f')", "1 / 0", "2 +", "True + 1"],
)
def test_validate_rejects_unsafe_or_broken_input(tool, expression):
    assert tool.validate({"input": expression}) is False


def test_validate_accepts_arithmetic(tool):
    assert tool.validate({"input": "(1 + 2) * 3"}) is True


@pytest.mark.parametrize("expression", ["9**9**9", "7**7**9", "2 ** 20000", "(10 ** 1000) ** 1000"])
def test_validate_rejects_oversized_powers(tool, expression):
    assert tool.validate({"input": expression}) is False


def test_large_power_within_bounds(tool):
    assert tool.calculate("2 ** 1000") == str(2**1000)


@pytest.mark.asyncio
async def test_run_rejects_oversized_power(tool):
    with pytest.raises(ValueError, match="too large"):
        await tool.run({"input": "9**9**9"})


def test_depth_guard():
    expression = "+".join(["1"] * 60)
    with pytest.raises(ValueError, match="too complex"):
        SafeExpressionEvaluator().evaluate(expression)


def test_metadata(tool):
    assert tool.name == "MathTool"
    assert "math" in tool.description
