"""
Error types for the mathexpr parser and evaluator.
"""

from typing import Optional


class MathExprError(Exception):
    """Base exception for all mathexpr errors."""

    def __init__(self, message: str, formula: Optional[str] = None) -> None:
        self.message = message
        self.formula = formula
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.formula is not None:
            return f"{self.message}: {self.formula!r}"
        return self.message


class FormulaSyntaxError(MathExprError):
    """
    Raised by ``parse_or_raise`` when a formula does not match the grammar.

    Parsing is all-or-nothing, so the error carries the formula text only,
    never a position or an expected-token set.
    """

    def __init__(self, formula: str) -> None:
        super().__init__("Can't parse", formula)


class EvaluationError(MathExprError):
    """Raised when an expression tree cannot be evaluated."""

    pass


class UnboundVariableError(EvaluationError):
    """Raised when a variable has no binding at evaluation time."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No binding for {name}")
