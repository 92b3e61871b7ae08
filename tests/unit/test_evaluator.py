"""
Unit tests for the mathexpr evaluator.
"""

import math

import numpy as np
import pytest

from mathexpr.compiler.ast_nodes import BinaryOp, BinaryOperator, Number, Variable
from mathexpr.compiler.evaluator import Evaluator, evaluate, sample
from mathexpr.compiler.functions import factorial, ln, sqrt
from mathexpr.utils.errors import EvaluationError, UnboundVariableError


class TestEvaluatorArithmetic:
    """Tests for arithmetic evaluation."""

    @pytest.mark.parametrize("x", [0.0, 1.0, 100.0, -3.5])
    def test_precedence_value_is_independent_of_x(self, evaluate, x):
        assert evaluate("1+2*3", x) == 7.0

    def test_right_associative_power(self, evaluate):
        assert evaluate("2^3^2") == 512.0

    def test_right_associating_subtraction(self, evaluate):
        """10-2-3 groups as 10-(2-3)."""
        assert evaluate("10-2-3") == 11.0

    def test_right_associating_division(self, evaluate):
        assert evaluate("8/4/2") == 4.0

    def test_factorial(self, evaluate):
        assert evaluate("5!") == 120.0

    def test_sqrt(self, evaluate):
        assert evaluate("sqrt(16)") == 4.0

    def test_ln(self, evaluate):
        assert evaluate("ln(e)") == pytest.approx(1.0)

    def test_uses_free_variable(self, evaluate):
        assert evaluate("x^2 + 1", 3.0) == 10.0

    def test_modulo(self, evaluate):
        assert evaluate("7 % 4") == 3.0
        assert evaluate("7.5 % 2") == 1.5

    def test_modulo_sign_follows_dividend(self, evaluate):
        assert evaluate("(1-5) % 3") == -1.0


class TestEvaluatorIEEE:
    """Numeric edge cases produce IEEE-754 values, never exceptions."""

    def test_division_by_zero(self, evaluate):
        assert evaluate("1/0") == math.inf
        assert evaluate("(0-1)/0") == -math.inf
        assert math.isnan(evaluate("0/0"))

    def test_modulo_by_zero(self, evaluate):
        assert math.isnan(evaluate("1 % 0"))

    def test_power_overflow(self, evaluate):
        assert evaluate("10^400") == math.inf

    def test_negative_base_fractional_exponent(self, evaluate):
        assert math.isnan(evaluate("(0-8)^(1/3)"))

    def test_sqrt_of_negative(self, evaluate):
        assert math.isnan(evaluate("sqrt(0-1)"))

    def test_ln_of_zero(self, evaluate):
        assert evaluate("ln(0)") == -math.inf

    def test_results_are_python_floats(self, evaluate):
        assert type(evaluate("1/0")) is float
        assert type(evaluate("sqrt(2)")) is float


class TestEvaluatorBindings:
    """Tests for variable and constant resolution."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("pi", math.pi),
            ("PI", math.pi),
            ("π", math.pi),
            ("tau", math.tau),
            ("Tau", math.tau),
            ("τ", math.tau),
            ("𝜏", math.tau),
            ("e", math.e),
            ("E", math.e),
        ],
    )
    def test_constants(self, name, expected):
        assert evaluate(Variable(name), 0.0) == expected

    def test_free_variable_is_case_insensitive(self):
        assert evaluate(Variable("X"), 2.5) == 2.5

    def test_unbound_variable(self, parse):
        expr = parse("y")
        assert expr is not None
        with pytest.raises(UnboundVariableError) as exc_info:
            expr.evaluate_at(1.0)
        assert exc_info.value.name == "y"
        assert "No binding for y" in str(exc_info.value)

    def test_unbound_variable_propagates_from_subtree(self, parse):
        expr = parse("1 + sqrt(2 * foo)")
        with pytest.raises(UnboundVariableError):
            expr.evaluate_at(0.0)

    def test_unbound_variable_is_an_evaluation_error(self):
        with pytest.raises(EvaluationError):
            Evaluator(0.0).evaluate(Variable("sqrt"))


class TestFactorial:
    """Tests for the factorial function."""

    @pytest.mark.parametrize("n,expected", [(0, 1), (1, 1), (3, 6), (10, 3628800)])
    def test_integers(self, n, expected):
        assert factorial(n) == expected

    def test_below_one_is_one(self):
        assert factorial(0.5) == 1.0
        assert factorial(-4) == 1.0

    def test_fractional_descends_without_gamma(self):
        assert factorial(2.5) == 2.5 * 1.5

    def test_overflow_is_infinite(self):
        assert factorial(200) == math.inf

    def test_unary_functions(self):
        assert sqrt(9) == 3.0
        assert ln(1) == 0.0


class TestSample:
    """Tests for evaluation over a grid."""

    def test_sample_square(self, parse):
        xs, ys = sample(parse("x^2"), 0.0, 4.0, 5)
        np.testing.assert_allclose(xs, [0, 1, 2, 3, 4])
        np.testing.assert_allclose(ys, [0, 1, 4, 9, 16])

    def test_sample_keeps_ieee_values(self, parse):
        _, ys = sample(parse("1/x"), 0.0, 1.0, 3)
        assert ys[0] == np.inf
        assert ys[2] == 1.0

    def test_sample_unbound_variable(self, parse):
        with pytest.raises(UnboundVariableError):
            sample(parse("y"), 0.0, 1.0, 3)

    def test_evaluator_does_not_mutate_tree(self):
        expr = BinaryOp(BinaryOperator.ADD, Number(1.0), Variable("x"))
        assert evaluate(expr, 1.0) == 2.0
        assert evaluate(expr, 2.0) == 3.0
        assert expr == BinaryOp(BinaryOperator.ADD, Number(1.0), Variable("x"))
