"""
Pytest configuration and shared fixtures for mathexpr tests.
"""

from typing import Optional

import pytest

from mathexpr.compiler.ast_nodes import Expression
from mathexpr.compiler.parser import Parser


@pytest.fixture(params=[False, True], ids=["plain", "packrat"])
def parser_factory(request):
    """Factory fixture for creating parsers, with and without memoization."""

    def _create_parser(**kwargs) -> Parser:
        kwargs.setdefault("packrat", request.param)
        return Parser(**kwargs)

    return _create_parser


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse a formula into an expression tree (or None)."""

    def _parse(formula: str) -> Optional[Expression]:
        return parser_factory().parse(formula)

    return _parse


@pytest.fixture
def evaluate(parse):
    """Fixture to parse a formula and evaluate it at a given x."""

    def _evaluate(formula: str, x: float = 100.0) -> float:
        expr = parse(formula)
        assert expr is not None, f"failed to parse {formula!r}"
        return expr.evaluate_at(x)

    return _evaluate


@pytest.fixture
def sexp(parse):
    """Fixture to parse a formula and render its s-expression."""

    def _sexp(formula: str) -> str:
        expr = parse(formula)
        assert expr is not None, f"failed to parse {formula!r}"
        return expr.to_sexp()

    return _sexp
