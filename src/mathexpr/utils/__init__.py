"""
mathexpr Utilities Package.

Common utilities for error handling.
"""

from mathexpr.utils.errors import (
    EvaluationError,
    FormulaSyntaxError,
    MathExprError,
    UnboundVariableError,
)

__all__ = [
    "MathExprError",
    "FormulaSyntaxError",
    "EvaluationError",
    "UnboundVariableError",
]
