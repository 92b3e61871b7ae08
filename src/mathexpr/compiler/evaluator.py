"""
Expression evaluator for mathexpr.

Walks an expression tree bottom-up with a value bound to the free variable
``x``. Arithmetic follows IEEE-754 double precision: division by zero,
overflow and out-of-domain powers produce infinities or NaN rather than
Python exceptions, which is why the operators are applied through numpy
float64 ufuncs instead of Python's float operators.

Features:
- Case-insensitive binding of ``x`` and the constants pi, tau and e
- Unknown names fail at evaluation time, never at parse time
- Sampling an expression over an evenly spaced grid of x values
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

from mathexpr.compiler.ast_nodes import (
    BinaryOp,
    BinaryOperator,
    Expression,
    Number,
    UnaryFunction,
    Variable,
)
from mathexpr.utils.errors import EvaluationError, UnboundVariableError

# Name of the free variable bound by evaluate_at
FREE_VARIABLE = "x"

# Built-in mathematical constants, keyed by lowercase name
BUILTIN_CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "pi": math.pi,
        "π": math.pi,
        "tau": math.tau,  # 2 * pi
        "τ": math.tau,
        "𝜏": math.tau,
        "e": math.e,
    }
)

BINARY_UFUNCS: Mapping[BinaryOperator, Callable[..., np.float64]] = MappingProxyType(
    {
        BinaryOperator.ADD: np.add,
        BinaryOperator.SUB: np.subtract,
        BinaryOperator.MUL: np.multiply,
        BinaryOperator.DIV: np.divide,
        BinaryOperator.MOD: np.fmod,  # sign follows the dividend
        BinaryOperator.POW: np.power,
    }
)


class Evaluator:
    """
    Evaluates expression trees for one binding of the free variable.

    Usage:
        evaluator = Evaluator(x=100.0)
        value = evaluator.evaluate(expr)
    """

    def __init__(self, x: float) -> None:
        self.x = float(x)

    def evaluate(self, expr: Expression) -> float:
        """
        Evaluate an expression.

        Raises:
            UnboundVariableError: If a Variable has no binding
        """
        if isinstance(expr, Number):
            return expr.value

        if isinstance(expr, Variable):
            return self._evaluate_variable(expr)

        if isinstance(expr, UnaryFunction):
            return expr.fn(self.evaluate(expr.arg))

        if isinstance(expr, BinaryOp):
            return self._evaluate_binary(expr)

        raise EvaluationError(f"Cannot evaluate {type(expr).__name__}")

    def _evaluate_variable(self, expr: Variable) -> float:
        name = expr.name.lower()
        if name == FREE_VARIABLE:
            return self.x
        if name in BUILTIN_CONSTANTS:
            return BUILTIN_CONSTANTS[name]
        raise UnboundVariableError(expr.name)

    def _evaluate_binary(self, expr: BinaryOp) -> float:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        ufunc = BINARY_UFUNCS[expr.operator]
        with np.errstate(all="ignore"):
            return float(ufunc(np.float64(left), np.float64(right)))


def evaluate(expression: Expression, x: float) -> float:
    """Evaluate ``expression`` with the free variable bound to ``x``."""
    return Evaluator(x).evaluate(expression)


def sample(
    expression: Expression,
    start: float,
    stop: float,
    num: int = 50,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate an expression over an evenly spaced grid.

    Args:
        expression: The expression to evaluate
        start: First x value
        stop: Last x value (inclusive)
        num: Number of samples

    Returns:
        A pair ``(xs, ys)`` of float64 arrays

    Raises:
        UnboundVariableError: If the expression references an unknown name
    """
    xs = np.linspace(start, stop, num)
    ys = np.fromiter(
        (evaluate(expression, float(x)) for x in xs),
        dtype=np.float64,
        count=len(xs),
    )
    return xs, ys
