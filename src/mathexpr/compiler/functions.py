"""
Named unary functions callable from formulas.

``DEFAULT_FUNCTIONS`` is built once at import time and is read-only. The
parser receives it (or any other mapping) through its constructor, so the
table is never looked up from arbitrary call sites.

All functions follow IEEE-754 rules: out-of-domain input yields NaN or an
infinity instead of raising.
"""

from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

UnaryFn = Callable[[float], float]


def sqrt(value: float) -> float:
    """Square root; NaN for negative input."""
    with np.errstate(all="ignore"):
        return float(np.sqrt(np.float64(value)))


def ln(value: float) -> float:
    """Natural logarithm; ``ln(0)`` is -inf and negative input is NaN."""
    with np.errstate(all="ignore"):
        return float(np.log(np.float64(value)))


def factorial(n: float) -> float:
    """
    Factorial for the postfix ``!`` operator.

    Defined as ``1`` for ``n < 1`` and ``n * factorial(n - 1)`` otherwise.
    There is no integer check, so ``2.5!`` is ``2.5 * 1.5 * 1``. Recursion
    depth grows with ``n``; very large arguments raise ``RecursionError``.
    """
    if n < 1:
        return 1.0
    return n * factorial(n - 1)


DEFAULT_FUNCTIONS: Mapping[str, UnaryFn] = MappingProxyType(
    {
        "sqrt": sqrt,
        "ln": ln,
    }
)
