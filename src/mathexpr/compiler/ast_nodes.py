"""
Abstract Syntax Tree (AST) node definitions for mathexpr.

The variant set is closed: a formula is built only from numbers, variables,
unary function applications and binary operations. Every node is immutable
and exclusively owns its children, so trees are acyclic and can be shared
freely between threads.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Implement this to create custom AST processors (printers, analyzers).
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    @abstractmethod
    def visit_number(self, node: "Number") -> Any:
        pass

    @abstractmethod
    def visit_variable(self, node: "Variable") -> Any:
        pass

    @abstractmethod
    def visit_unary_function(self, node: "UnaryFunction") -> Any:
        pass

    @abstractmethod
    def visit_binary_op(self, node: "BinaryOp") -> Any:
        pass


class Expression(ASTNode):
    """Base class for all expressions."""

    def evaluate_at(self, x: float) -> float:
        """
        Evaluate this expression with the free variable bound to ``x``.

        Raises:
            UnboundVariableError: If the tree references an unknown name
        """
        from mathexpr.compiler.evaluator import evaluate

        return evaluate(self, x)

    def to_sexp(self) -> str:
        """Render this expression as a fully parenthesized prefix string."""
        from mathexpr.compiler.sexp import to_sexp

        return to_sexp(self)


# -----------------------------------------------------------------------------
# Leaves
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Number(Expression):
    """A numeric literal such as ``3`` or ``2.5``."""

    value: float

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_number(self)


@dataclass(frozen=True, slots=True)
class Variable(Expression):
    """
    A named value, resolved only when the tree is evaluated.

    Example:
        x, pi, tau, e, π
    """

    name: str

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable(self)


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnaryFunction(Expression):
    """
    Application of a named one-argument function.

    The postfix factorial operator is represented as a unary function
    named ``"!"``.

    Example:
        sqrt(x), ln(2), 5!
    """

    name: str
    fn: Callable[[float], float] = field(repr=False)
    arg: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_function(self)


class BinaryOperator(Enum):
    """Binary operator kinds, valued by their printed symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> "BinaryOperator":
        return cls(symbol)


@dataclass(frozen=True, slots=True)
class BinaryOp(Expression):
    """
    A binary arithmetic operation.

    Example:
        a + b, x ^ 2, 10 % 3
    """

    operator: BinaryOperator
    left: Expression
    right: Expression

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)
