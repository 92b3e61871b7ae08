"""
mathexpr - Parse and evaluate arithmetic formulas in one variable.

Formulas support ``+ - * / % ^``, postfix ``!``, parentheses, the functions
``sqrt`` and ``ln``, the constants ``pi``, ``tau`` and ``e``, and the free
variable ``x``.
"""

from mathexpr.compiler import (
    Expression,
    Parser,
    evaluate,
    parse,
    parse_or_raise,
    sample,
    to_sexp,
)
from mathexpr.utils.errors import (
    FormulaSyntaxError,
    MathExprError,
    UnboundVariableError,
)

__version__ = "0.1.0"
__all__ = [
    "parse",
    "parse_or_raise",
    "evaluate",
    "sample",
    "to_sexp",
    "Parser",
    "Expression",
    "MathExprError",
    "FormulaSyntaxError",
    "UnboundVariableError",
]
