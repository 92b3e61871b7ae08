"""
Entry point for running the mathexpr CLI as a module.

Usage:
    python -m mathexpr repl
    python -m mathexpr eval "2^3^2"
"""

import sys

from mathexpr.cli import main

if __name__ == "__main__":
    sys.exit(main())
