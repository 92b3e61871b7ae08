"""
mathexpr Interactive REPL (Read-Eval-Print Loop).

Reads one formula per line, prints its expression tree and its value at
the current evaluation point (100 by default).

Usage:
    mathexpr repl
    mathexpr repl --at 2.5

Example session:
    > 1 + 2 * x
    BinaryOp(operator=<BinaryOperator.ADD: '+'>, left=Number(value=1.0), ...)
    At 100: 201.000000

    > :sexp
    Showing s-expressions

    > 2 ^ 3 ^ 2
    (^ 2 (^ 3 2))
    At 100: 512.000000
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

try:
    import readline

    HAS_READLINE = True
except ImportError:
    # readline not available on some platforms (e.g., Windows without pyreadline)
    HAS_READLINE = False

from mathexpr import __version__
from mathexpr.compiler.parser import Parser
from mathexpr.compiler.sexp import format_number
from mathexpr.utils.errors import MathExprError

DEFAULT_EVALUATION_POINT = 100.0
HISTORY_FILE = Path.home() / ".mathexpr_history"


# =============================================================================
# ANSI Color Codes
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors."""
        for attr in ["RED", "GREEN", "YELLOW", "CYAN", "BOLD", "DIM", "RESET"]:
            setattr(cls, attr, "")


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


# =============================================================================
# REPL Commands
# =============================================================================


@dataclass
class REPLCommand:
    """A REPL command definition."""

    name: str
    aliases: tuple[str, ...] = ()
    help_text: str = ""
    handler: Optional[Callable[[str], str]] = None


# =============================================================================
# REPL Session
# =============================================================================


class REPLSession:
    """
    Interactive REPL session for mathexpr.

    Holds the evaluation point and the display mode.
    """

    def __init__(
        self,
        at: float = DEFAULT_EVALUATION_POINT,
        parser: Optional[Parser] = None,
    ) -> None:
        self.at = at
        self.parser = parser or Parser()
        self.show_sexp = False
        self.running = True
        self.prompt = "> "
        self._commands = self._setup_commands()

    def _setup_commands(self) -> dict[str, REPLCommand]:
        """Setup REPL commands."""
        commands = [
            REPLCommand("help", ("h", "?"), "Show this help message", self._cmd_help),
            REPLCommand("quit", ("q", "exit"), "Exit the REPL", self._cmd_quit),
            REPLCommand("at", (), "Show or set the evaluation point", self._cmd_at),
            REPLCommand(
                "sexp", ("s",), "Toggle s-expression output", self._cmd_sexp
            ),
        ]

        # Build alias lookup
        alias_map = {}
        for cmd in commands:
            alias_map[cmd.name] = cmd
            for alias in cmd.aliases:
                alias_map[alias] = cmd

        return alias_map

    # -------------------------------------------------------------------------
    # Command Handlers
    # -------------------------------------------------------------------------

    def _cmd_help(self, args: str) -> str:
        """Show help message."""
        lines = [
            f"{Colors.BOLD}Commands:{Colors.RESET}",
            f"  {Colors.CYAN}:help{Colors.RESET}          Show this help",
            f"  {Colors.CYAN}:quit, :q{Colors.RESET}      Exit REPL",
            f"  {Colors.CYAN}:at [x]{Colors.RESET}        Show or set the evaluation point",
            f"  {Colors.CYAN}:sexp{Colors.RESET}          Toggle s-expression output",
            "",
            f"{Colors.BOLD}Syntax:{Colors.RESET}",
            f"  {Colors.GREEN}+ - * / % ^{Colors.RESET}     Binary operators",
            f"  {Colors.GREEN}n!{Colors.RESET}              Factorial",
            f"  {Colors.GREEN}sqrt(x), ln(x){Colors.RESET}  Functions",
            "",
            f"{Colors.BOLD}Names:{Colors.RESET}",
            "  x, pi, tau, e",
        ]
        return "\n".join(lines)

    def _cmd_quit(self, args: str) -> str:
        """Exit the REPL."""
        self.running = False
        return "Bye."

    def _cmd_at(self, args: str) -> str:
        """Show or set the evaluation point."""
        if args:
            try:
                self.at = float(args)
            except ValueError:
                return f"{Colors.RED}Not a number: {args}{Colors.RESET}"
        return f"x = {format_number(self.at)}"

    def _cmd_sexp(self, args: str) -> str:
        """Toggle between tree and s-expression output."""
        self.show_sexp = not self.show_sexp
        return "Showing s-expressions" if self.show_sexp else "Showing trees"

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def eval_line(self, line: str) -> Optional[str]:
        """
        Evaluate a single line of input.

        Returns the text to print, or None if there is nothing to show.
        """
        line = line.strip()
        if not line:
            return None

        if line.startswith(":"):
            return self._handle_command(line)

        expr = self.parser.parse(line)
        if expr is None:
            return f"Can't parse '{line}'"

        try:
            tree = expr.to_sexp() if self.show_sexp else repr(expr)
        except RecursionError as e:
            return f"{Colors.RED}Error: {e}{Colors.RESET}"
        try:
            value = expr.evaluate_at(self.at)
        except (MathExprError, RecursionError) as e:
            # Deep trees and large factorials exhaust the call stack
            return f"{tree}\n{Colors.RED}Error: {e}{Colors.RESET}"
        return f"{tree}\nAt {format_number(self.at)}: {value:f}"

    def _handle_command(self, cmd: str) -> str:
        """Handle a REPL command."""
        parts = cmd[1:].split(maxsplit=1)
        command_name = parts[0].lower() if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        if command_name in self._commands:
            return self._commands[command_name].handler(args)

        return f"{Colors.RED}Unknown command: :{command_name}{Colors.RESET}\nType :help for available commands"

    def run(self) -> None:
        """Main REPL loop."""
        print(f"{Colors.BOLD}mathexpr {__version__}{Colors.RESET} - Interactive Mode")
        print(
            f"Type {Colors.CYAN}:help{Colors.RESET} for help, {Colors.CYAN}:quit{Colors.RESET} to exit"
        )
        print()

        if HAS_READLINE and HISTORY_FILE.exists():
            try:
                readline.read_history_file(str(HISTORY_FILE))
            except OSError:
                pass

        try:
            while self.running:
                try:
                    line = input(self.prompt)
                except KeyboardInterrupt:
                    print(f"\n{Colors.DIM}Use :quit to exit{Colors.RESET}")
                    continue
                except EOFError:
                    print("\nBye.")
                    break

                result = self.eval_line(line)
                if result:
                    print(result)
        finally:
            if HAS_READLINE:
                try:
                    readline.set_history_length(1000)
                    readline.write_history_file(str(HISTORY_FILE))
                except OSError:
                    pass
