"""
mathexpr Parser.

A backtracking recursive descent parser working directly on the formula
text. Each grammar rule tries its alternatives in a fixed order and commits
to the first one that succeeds, returning a PartialParse (AST fragment plus
cursor) or None.

Grammar, lowest precedence first:

    expression          = term ("+" | "-") expression | term
    term                = factor ("*" | "/" | "%") term | factor
    factor              = factorial_or_atomic "^" factor | factorial_or_atomic
    factorial_or_atomic = atomic ["!"]
    atomic              = function_call | number | variable | parenthesized
    function_call       = NAME parenthesized
    parenthesized       = "(" expression ")"

The right operand of ``+ - * / % ^`` is parsed with the rule of the same
level, so chains associate to the right: ``10 - 2 - 3`` is
``10 - (2 - 3)``. Chains are matched in a loop and folded from the right,
which builds the same tree without recursing once per operator.
"""

import functools
import logging
from typing import Callable, Mapping, Optional

from mathexpr.compiler.ast_nodes import (
    BinaryOp,
    BinaryOperator,
    Expression,
    UnaryFunction,
    Variable,
)
from mathexpr.compiler.functions import DEFAULT_FUNCTIONS, UnaryFn, factorial
from mathexpr.compiler.scanner import (
    PartialParse,
    match_identifier,
    match_literal,
    match_number,
)
from mathexpr.utils.errors import FormulaSyntaxError

logger = logging.getLogger(__name__)


# Operator groups per precedence level
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")
POWER_OPERATOR = "^"
FACTORIAL_OPERATOR = "!"

Rule = Callable[["_Grammar", int], Optional[PartialParse]]


def _rule(method: Rule) -> Rule:
    """Memoize a grammar rule per (rule, position) when packrat mode is on."""
    name = method.__name__

    @functools.wraps(method)
    def wrapper(self: "_Grammar", pos: int) -> Optional[PartialParse]:
        if self._memo is None:
            return method(self, pos)
        key = (name, pos)
        if key not in self._memo:
            self._memo[key] = method(self, pos)
        return self._memo[key]

    return wrapper


class _Grammar:
    """
    Grammar rules bound to a single formula.

    One instance exists per ``Parser.parse`` call, which keeps the parser
    itself free of per-call state.
    """

    def __init__(
        self,
        source: str,
        functions: Mapping[str, UnaryFn],
        packrat: bool = False,
    ) -> None:
        self.source = source
        self.functions = functions
        self._memo: Optional[dict[tuple[str, int], Optional[PartialParse]]] = (
            {} if packrat else None
        )

    # -------------------------------------------------------------------------
    # Precedence levels
    # -------------------------------------------------------------------------

    @_rule
    def expression(self, pos: int) -> Optional[PartialParse]:
        return self._chain(pos, _Grammar.term, ADDITIVE_OPERATORS)

    @_rule
    def term(self, pos: int) -> Optional[PartialParse]:
        return self._chain(pos, _Grammar.factor, MULTIPLICATIVE_OPERATORS)

    @_rule
    def factor(self, pos: int) -> Optional[PartialParse]:
        return self._chain(pos, _Grammar.factorial_or_atomic, (POWER_OPERATOR,))

    @_rule
    def factorial_or_atomic(self, pos: int) -> Optional[PartialParse]:
        pp = self.atomic(pos)
        if pp is None:
            return None
        bang = match_literal(self.source, pp.position, FACTORIAL_OPERATOR)
        if bang is None:
            return pp
        return PartialParse(
            UnaryFunction(FACTORIAL_OPERATOR, factorial, pp.expression),
            bang.position,
        )

    @_rule
    def atomic(self, pos: int) -> Optional[PartialParse]:
        # Function calls start like variables, so they are tried first
        return (
            self.function_call(pos)
            or match_number(self.source, pos)
            or self.variable(pos)
            or self.parenthesized(pos)
        )

    # -------------------------------------------------------------------------
    # Binary operators
    # -------------------------------------------------------------------------

    def _chain(
        self,
        pos: int,
        operand: Rule,
        operators: tuple[str, ...],
    ) -> Optional[PartialParse]:
        """
        Parse ``operand (OP operand)*`` and nest the result to the right.

        This is the iterative form of ``rule = operand OP rule | operand``:
        the chain stops before an operator whose right operand does not
        parse, leaving that operator unconsumed. Long chains do not grow
        the Python stack.
        """
        first = operand(self, pos)
        if first is None:
            return None
        operands = [first.expression]
        symbols: list[str] = []
        position = first.position
        while True:
            op = match_literal(self.source, position, *operators)
            if op is None:
                break
            right = operand(self, op.position)
            if right is None:
                break
            symbols.append(op.text)
            operands.append(right.expression)
            position = right.position

        result = operands.pop()
        while symbols:
            result = BinaryOp(
                operator=BinaryOperator.from_symbol(symbols.pop()),
                left=operands.pop(),
                right=result,
            )
        return PartialParse(result, position)

    # -------------------------------------------------------------------------
    # Atoms
    # -------------------------------------------------------------------------

    @_rule
    def function_call(self, pos: int) -> Optional[PartialParse]:
        name = match_identifier(self.source, pos)
        if name is None or name.text not in self.functions:
            return None
        arg = self.parenthesized(name.position)
        if arg is None:
            return None
        return PartialParse(
            UnaryFunction(name.text, self.functions[name.text], arg.expression),
            arg.position,
        )

    @_rule
    def variable(self, pos: int) -> Optional[PartialParse]:
        name = match_identifier(self.source, pos)
        if name is None:
            return None
        return PartialParse(Variable(name.text), name.position)

    @_rule
    def parenthesized(self, pos: int) -> Optional[PartialParse]:
        lparen = match_literal(self.source, pos, "(")
        if lparen is None:
            return None
        inner = self.expression(lparen.position)
        if inner is None:
            return None
        rparen = match_literal(self.source, inner.position, ")")
        if rparen is None:
            return None
        return PartialParse(inner.expression, rparen.position)


class Parser:
    """
    Parser for arithmetic formulas.

    A parser holds only read-only configuration, so one instance can be
    shared between threads.

    Usage:
        parser = Parser()
        expr = parser.parse("sqrt(x) + 1")
        if expr is not None:
            print(expr.evaluate_at(16))
    """

    def __init__(
        self,
        functions: Mapping[str, UnaryFn] = DEFAULT_FUNCTIONS,
        packrat: bool = False,
    ) -> None:
        """
        Initialize the parser.

        Args:
            functions: Names callable as ``name(expr)`` mapped to their
                implementation
            packrat: Memoize rule results per position; trades memory for
                fewer re-parses of the same span, results are identical
        """
        self.functions = functions
        self.packrat = packrat

    def parse(self, formula: str) -> Optional[Expression]:
        """
        Parse a complete formula.

        Returns:
            The expression tree, or None if the formula does not match the
            grammar or only a strict prefix of it does
        """
        grammar = _Grammar(formula, self.functions, self.packrat)
        pp = grammar.expression(0)
        if pp is not None and pp.position == len(formula):
            return pp.expression
        logger.debug(f"Rejected formula {formula!r}")
        return None

    def parse_or_raise(self, formula: str) -> Expression:
        """
        Parse a complete formula, raising instead of returning None.

        Raises:
            FormulaSyntaxError: If the formula cannot be parsed
        """
        expr = self.parse(formula)
        if expr is None:
            raise FormulaSyntaxError(formula)
        return expr


_default_parser = Parser()


def parse(formula: str) -> Optional[Expression]:
    """Parse ``formula`` with the default function table."""
    return _default_parser.parse(formula)


def parse_or_raise(formula: str) -> Expression:
    """Parse ``formula`` with the default function table or raise."""
    return _default_parser.parse_or_raise(formula)
