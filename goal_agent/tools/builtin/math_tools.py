"""
Arithmetic tool.
Evaluates math expressions without eval().
"""

import ast
import math
import operator
from typing import Any, Union

from ..base_tool import BaseTool, ToolExecutionError
from ..tool_schemas import (
    ToolResult,
    ToolParameter,
    ParameterType,
    ToolCategory,
)

Number = Union[int, float]

BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

MAX_EXPONENT = 1000
# Largest power result allowed, in decimal digits (int-to-str conversion caps at 4300)
MAX_RESULT_DIGITS = 4000


def evaluate_expression(expression: str) -> Number:
    """
    Evaluate an arithmetic expression.

    Supports + - * / // % ** (``^`` is read as power), unary signs,
    parentheses and numeric literals. Quoted numbers, as produced by
    placeholder substitution, are accepted.

    Raises:
        ValueError: If the expression is not plain arithmetic
    """
    try:
        tree = ast.parse(expression.replace("^", "**").strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(str(e))
    return _evaluate(tree.body)


def _evaluate(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant):
        return _to_number(node.value)
    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPERATORS:
        left, right = _evaluate(node.left), _evaluate(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return BINARY_OPERATORS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPERATORS:
        return UNARY_OPERATORS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def _check_power(base: Number, exponent: Number) -> None:
    """Reject powers whose result would be too large to compute quickly."""
    if abs(exponent) > MAX_EXPONENT:
        raise ValueError("Exponent too large")
    if base == 0 or exponent == 0:
        return
    if abs(exponent) * abs(math.log10(abs(base))) > MAX_RESULT_DIGITS:
        raise ValueError("Result too large")


def _to_number(value: Any) -> Number:
    if isinstance(value, bool):
        raise ValueError("Booleans are not numbers")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        try:
            return int(cleaned)
        except ValueError:
            return float(cleaned)
    raise ValueError(f"Unsupported literal: {value!r}")


def format_number(value: Number) -> str:
    if isinstance(value, complex):
        raise ValueError("Result is not a real number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("Result is not a finite number")
        if value.is_integer():
            return str(int(value))
        return repr(round(value, 10))
    return str(value)


class CalculateTool(BaseTool):
    """Evaluate a mathematical expression."""

    name = "calculate"
    description = "Use for mathematical calculations."
    category = ToolCategory.MATH
    timeout_seconds = 5

    parameters = [
        ToolParameter(
            name="expression",
            type=ParameterType.STRING,
            description="e.g., (100 * 1.05^5) - 100",
            required=True,
            min_length=1,
        ),
    ]

    async def execute(self, expression: str) -> ToolResult:
        """Execute the calculation."""
        try:
            result = format_number(evaluate_expression(expression))
        except (ValueError, ZeroDivisionError, OverflowError):
            raise ToolExecutionError(f"Invalid mathematical expression: {expression}")

        return ToolResult.success_result(
            f'Calculation result for "{expression}" is: {result}'
        )
