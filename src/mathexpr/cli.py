"""
mathexpr Command-Line Interface.

Provides commands to parse, print and evaluate formulas.

Usage:
    mathexpr repl                       # Interactive mode
    mathexpr sexp < formulas.txt        # Print s-expressions, one per line
    mathexpr eval "sqrt(x) + 1" --at 16
    mathexpr table "x^2" --start 0 --stop 1 --num 5
"""

import argparse
import logging
import sys
from typing import Optional, TextIO

from mathexpr import __version__
from mathexpr.compiler.evaluator import sample
from mathexpr.compiler.parser import Parser
from mathexpr.repl import DEFAULT_EVALUATION_POINT, Colors, REPLSession
from mathexpr.utils.errors import MathExprError

logger = logging.getLogger("mathexpr")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="mathexpr",
        description="mathexpr - parse and evaluate arithmetic formulas in x",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--packrat",
        action="store_true",
        help="Memoize grammar rules while parsing",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # REPL command
    repl_parser = subparsers.add_parser(
        "repl",
        aliases=["i"],
        help="Start the interactive REPL",
    )
    repl_parser.add_argument(
        "--at",
        type=float,
        default=DEFAULT_EVALUATION_POINT,
        help="Value of x used for evaluation (default: 100)",
    )

    # S-expression command
    subparsers.add_parser(
        "sexp",
        help="Read formulas from stdin and print their s-expressions",
    )

    # Eval command
    eval_parser = subparsers.add_parser(
        "eval",
        aliases=["e"],
        help="Evaluate a formula",
    )
    eval_parser.add_argument("formula", help="Formula to evaluate")
    eval_parser.add_argument(
        "--at",
        type=float,
        default=DEFAULT_EVALUATION_POINT,
        help="Value of x (default: 100)",
    )

    # Table command
    table_parser = subparsers.add_parser(
        "table",
        aliases=["t"],
        help="Evaluate a formula over a range of x values",
    )
    table_parser.add_argument("formula", help="Formula to evaluate")
    table_parser.add_argument("--start", type=float, required=True, help="First x value")
    table_parser.add_argument("--stop", type=float, required=True, help="Last x value")
    table_parser.add_argument(
        "--num",
        type=int,
        default=11,
        help="Number of rows (default: 11)",
    )

    return parser


def _make_parser(args: argparse.Namespace) -> Parser:
    return Parser(packrat=args.packrat)


def cmd_repl(args: argparse.Namespace) -> int:
    """Handle the repl command."""
    session = REPLSession(at=args.at, parser=_make_parser(args))
    session.run()
    return 0


def cmd_sexp(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> int:
    """Handle the sexp command: one formula per input line."""
    parser = _make_parser(args)
    for line in stdin or sys.stdin:
        formula = line.rstrip("\r\n")
        expr = parser.parse(formula)
        if expr is None:
            print(f"Can't parse '{formula}'")
        else:
            print(f"{formula:>20} -> {expr.to_sexp()}")
    return 0


def cmd_eval(args: argparse.Namespace) -> int:
    """Handle the eval command."""
    try:
        expr = _make_parser(args).parse_or_raise(args.formula)
        print(f"{expr.evaluate_at(args.at):f}")
        return 0

    except (MathExprError, RecursionError) as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1


def cmd_table(args: argparse.Namespace) -> int:
    """Handle the table command."""
    if args.num < 1:
        print(f"{Colors.RED}Error: --num must be at least 1{Colors.RESET}", file=sys.stderr)
        return 1

    try:
        expr = _make_parser(args).parse_or_raise(args.formula)
        xs, ys = sample(expr, args.start, args.stop, args.num)

    except (MathExprError, RecursionError) as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1

    print(f"{Colors.BOLD}{'x':>14}  {args.formula}{Colors.RESET}")
    for x, y in zip(xs, ys):
        print(f"{x:>14.6f}  {y:f}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "repl": cmd_repl,
        "i": cmd_repl,
        "sexp": cmd_sexp,
        "eval": cmd_eval,
        "e": cmd_eval,
        "table": cmd_table,
        "t": cmd_table,
    }

    handler = command_handlers.get(args.command)
    if handler:
        logger.debug(f"Running command {args.command!r}")
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
