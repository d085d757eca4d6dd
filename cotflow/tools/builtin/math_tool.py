"""
MathTool - evaluates arithmetic expressions.

Only whitelisted operators and functions are evaluated; anything else is
rejected before evaluation.
"""

import ast
import asyncio
import math
import operator
import re
from typing import Any

from cotflow.tools.base import BaseTool

_NUMBER = re.compile(r"\d+(\.\d+)?")


class SafeExpressionEvaluator(ast.NodeVisitor):
    """Arithmetic evaluator over the expression AST."""

    ALLOWED_BINOPS = {
        ast.Add: operator.add,
        ast.Sub: operator.sub,
        ast.Mult: operator.mul,
        ast.Div: operator.truediv,
        ast.FloorDiv: operator.floordiv,
        ast.Pow: operator.pow,
        ast.Mod: operator.mod,
    }

    ALLOWED_UNARYOPS = {
        ast.UAdd: operator.pos,
        ast.USub: operator.neg,
    }

    ALLOWED_FUNCTIONS = {
        "sqrt": math.sqrt,
        "sin": math.sin,
        "cos": math.cos,
        "tan": math.tan,
        "log": math.log,
        "exp": math.exp,
        "abs": abs,
        "round": round,
    }

    MAX_DEPTH = 25
    MAX_EXPONENT = 10_000
    MAX_RESULT_BITS = 100_000

    def evaluate(self, expression: str) -> Any:
        tree = ast.parse(expression.strip(), mode="eval")
        self._check_depth(tree)
        return self.visit(tree.body)

    def _check_depth(self, node: ast.AST, depth: int = 0) -> None:
        if depth > self.MAX_DEPTH:
            raise ValueError("Expression too complex")
        for child in ast.iter_child_nodes(node):
            self._check_depth(child, depth + 1)

    def _power(self, base: Any, exponent: Any) -> Any:
        # Integer powers are exact and unbounded; reject them before computing.
        if isinstance(exponent, (int, float)) and abs(exponent) > self.MAX_EXPONENT:
            raise ValueError("Exponent too large")
        if isinstance(base, int) and isinstance(exponent, int) and exponent > 0:
            if abs(base).bit_length() * exponent > self.MAX_RESULT_BITS:
                raise ValueError("Result too large")
        return operator.pow(base, exponent)

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        op_type = type(node.op)
        if op_type not in self.ALLOWED_BINOPS:
            raise ValueError("Operator not allowed")
        left, right = self.visit(node.left), self.visit(node.right)
        if op_type is ast.Pow:
            return self._power(left, right)
        return self.ALLOWED_BINOPS[op_type](left, right)

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        op_type = type(node.op)
        if op_type not in self.ALLOWED_UNARYOPS:
            raise ValueError("Unary operator not allowed")
        return self.ALLOWED_UNARYOPS[op_type](self.visit(node.operand))

    def visit_Call(self, node: ast.Call) -> Any:
        if isinstance(node.func, ast.Attribute):
            if not isinstance(node.func.value, ast.Name) or node.func.value.id != "math":
                raise ValueError("Only math module allowed")
            func_name = node.func.attr
        elif isinstance(node.func, ast.Name):
            func_name = node.func.id
        else:
            raise ValueError("Invalid function call")

        if func_name not in self.ALLOWED_FUNCTIONS:
            raise ValueError(f"Function '{func_name}' not allowed")
        args = [self.visit(arg) for arg in node.args]
        return self.ALLOWED_FUNCTIONS[func_name](*args)

    def visit_Constant(self, node: ast.Constant) -> Any:
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            return node.value
        raise ValueError("Only numeric constants allowed")

    def generic_visit(self, node: ast.AST) -> Any:
        raise ValueError(f"Unsupported expression: {type(node).__name__}")


class MathTool(BaseTool):
    """Calculates math expressions given as ``input``."""

    NAME = "MathTool"

    def __init__(self, alias: str | None = None, description: str | None = None) -> None:
        super().__init__(alias=alias, description=description)
        self._evaluator = SafeExpressionEvaluator()

    def get_name(self) -> str:
        return self.NAME

    def get_description(self) -> str:
        return "Use this tool to calculate any math problem."

    def calculate(self, expression: str) -> str:
        expression = expression.replace(",", "")
        if "/" in expression:
            # Promote the first operand so divisions are never truncated.
            match = _NUMBER.search(expression)
            if match:
                expression = (
                    expression[: match.start()]
                    + repr(float(match.group(0)))
                    + expression[match.end():]
                )
        return str(self._evaluator.evaluate(expression))

    async def run(self, parameters: dict[str, str]) -> str:
        answer = await asyncio.to_thread(self.calculate, parameters.get("input", ""))
        return f"Answer: {answer}"

    def validate(self, parameters: dict[str, str]) -> bool:
        try:
            self.calculate(parameters.get("input", ""))
        except (ValueError, SyntaxError, TypeError, ZeroDivisionError, OverflowError):
            return False
        return True
