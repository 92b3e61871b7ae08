"""
mathexpr Compiler Package.

This package contains the core components:
- Scanner: whitespace, literal, identifier and number matching on raw text
- Parser: backtracking grammar engine producing an expression tree
- AST: the closed set of expression node types
- Functions: the read-only table of named unary functions
- Evaluator: evaluates trees for a value of the free variable
- Sexp: renders trees as s-expressions
"""

from mathexpr.compiler.ast_nodes import (
    ASTVisitor,
    BinaryOp,
    BinaryOperator,
    Expression,
    Number,
    UnaryFunction,
    Variable,
)
from mathexpr.compiler.evaluator import (
    BUILTIN_CONSTANTS,
    FREE_VARIABLE,
    Evaluator,
    evaluate,
    sample,
)
from mathexpr.compiler.functions import DEFAULT_FUNCTIONS, factorial
from mathexpr.compiler.parser import Parser, parse, parse_or_raise
from mathexpr.compiler.sexp import SexpPrinter, to_sexp

__all__ = [
    # AST
    "ASTVisitor",
    "Expression",
    "Number",
    "Variable",
    "UnaryFunction",
    "BinaryOp",
    "BinaryOperator",
    # Parsing
    "Parser",
    "parse",
    "parse_or_raise",
    "DEFAULT_FUNCTIONS",
    "factorial",
    # Evaluation
    "Evaluator",
    "evaluate",
    "sample",
    "BUILTIN_CONSTANTS",
    "FREE_VARIABLE",
    # Printing
    "SexpPrinter",
    "to_sexp",
]
