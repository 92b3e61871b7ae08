"""
S-expression printer.

Renders an expression tree as a fully parenthesized prefix string, e.g.
``1 + 2 * x`` becomes ``(+ 1 (* 2 x))``. Purely structural: the output is
not re-parsed or validated.
"""

from mathexpr.compiler.ast_nodes import (
    ASTVisitor,
    BinaryOp,
    Expression,
    Number,
    UnaryFunction,
    Variable,
)


def format_number(value: float) -> str:
    """Integral values print without a fractional part."""
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


class SexpPrinter(ASTVisitor):
    """Visitor producing the s-expression text for a tree."""

    def visit_number(self, node: Number) -> str:
        return format_number(node.value)

    def visit_variable(self, node: Variable) -> str:
        return node.name

    def visit_unary_function(self, node: UnaryFunction) -> str:
        return f"({node.name} {self.visit(node.arg)})"

    def visit_binary_op(self, node: BinaryOp) -> str:
        return f"({node.operator.symbol} {self.visit(node.left)} {self.visit(node.right)})"


def to_sexp(expression: Expression) -> str:
    """Render ``expression`` as an s-expression."""
    return SexpPrinter().visit(expression)
