"""
Scanner primitives for the mathexpr grammar engine.

There is no separate tokenizer pass: each grammar rule matches directly
against the raw formula string at a cursor position. Python strings are
indexed by code point, so multi-unit characters (astral letters, exotic
whitespace) are always consumed atomically.

Usage:
    token = match_literal(source, pos, "+", "-")
    if token is not None:
        pos = token.position
"""

from dataclasses import dataclass
from typing import Optional

from mathexpr.compiler.ast_nodes import Expression, Number


@dataclass(frozen=True, slots=True)
class Token:
    """
    Text matched by a scanner primitive.

    Attributes:
        text: The matched characters, without surrounding whitespace
        position: Index just past the match and any trailing whitespace
    """

    text: str
    position: int


@dataclass(frozen=True, slots=True)
class PartialParse:
    """
    A successful parse of a prefix of the remaining input.

    Attributes:
        expression: The AST fragment built for the consumed input
        position: Index of the next unconsumed character
    """

    expression: Expression
    position: int


def skip_whitespace(source: str, pos: int) -> int:
    """Return the first index at or after ``pos`` that is not whitespace."""
    while pos < len(source) and source[pos].isspace():
        pos += 1
    return pos


def looking_at(source: str, pos: int, what: str) -> bool:
    """Check whether ``what`` occurs in ``source`` starting exactly at ``pos``."""
    return pos < len(source) and source.startswith(what, pos)


def match_literal(source: str, pos: int, *candidates: str) -> Optional[Token]:
    """
    Match the first of ``candidates`` found at ``pos``.

    Whitespace is skipped before and after the literal. Candidates are
    tried in order and the first one that matches wins.

    Returns:
        A Token for the matched literal, or None if no candidate matches
    """
    start = skip_whitespace(source, pos)
    for candidate in candidates:
        if looking_at(source, start, candidate):
            end = start + len(candidate)
            return Token(source[start:end], skip_whitespace(source, end))
    return None


def match_identifier(source: str, pos: int) -> Optional[Token]:
    """
    Match a maximal run of letters at ``pos``.

    Letters are any code points Python considers alphabetic, so ``π`` and
    ``𝜏`` are identifiers just like ``x``.
    """
    start = skip_whitespace(source, pos)
    end = start
    while end < len(source) and source[end].isalpha():
        end += 1
    if end > start:
        return Token(source[start:end], skip_whitespace(source, end))
    return None


def _skip_digits(source: str, pos: int) -> int:
    while pos < len(source) and source[pos].isdecimal():
        pos += 1
    return pos


def match_number(source: str, pos: int) -> Optional[PartialParse]:
    """
    Match a decimal literal such as ``42``, ``3.25`` or ``7.``.

    No sign, exponent or digit separators are accepted, and leading
    whitespace is not skipped.
    """
    end = _skip_digits(source, pos)
    if end == pos:
        return None
    if looking_at(source, end, "."):
        end = _skip_digits(source, end + 1)
    return PartialParse(Number(float(source[pos:end])), end)
