"""
Recursive descent parser for bracket-variable propositional statements.

Notation:
    A variable       [A string inside square brackets]
    Implication      ( [A] => [B] )     ( [A] implies [B] )    ( [A] then [B] )
    Implication      ( [A] <= [B] )     ( [A] if [B] )
    If and only if   ( [A] <=> [B] )    ( [A] iff [B] )
    And              ( [A] & [B] )      ( [A] and [B] )
    Or               ( [A] | [B] )      ( [A] or [B] )
    Xor              ( [A] ^ [B] )      ( [A] xor [B] )
    Not              ![A]               not [A]
    True             T                  true
    False            F                  false

Binary expressions must be parenthesized. A whole line that is a bare binary
expression, e.g. ``[A] and [B]``, is accepted by retrying the parse with one
added pair of parentheses around the line.

Every production returns a ``Match`` (end position plus tree) or ``None``
when it does not apply at the given position.

Usage:
    from propositions.parser import Parser

    parser = Parser()
    tree = parser.parse("( [rain] => [wet] )")
    parser.registry.names    # ("rain", "wet")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .errors import NestingTooDeepError, PropositionSyntaxError
from .expr import FALSE, TRUE, Binary, BinaryOp, Expr, Not, Variable
from .registry import VariableRegistry

logger = logging.getLogger(__name__)

# Same set as C isspace() in the "C" locale.
WHITESPACE = " \t\n\r\f\v"

# Characters that end an operator token because an operand starts there.
_OPERAND_START_CHARS = frozenset("!([TF")

# Leading letters of "false", "true" and "not".
_OPERAND_START_PREFIXES = ("fa", "tr", "no")

_NEGATION_TOKENS = ("!", "not")

# token -> (operator, operands swapped)
_BINARY_TOKENS: Dict[str, Tuple[BinaryOp, bool]] = {
    "and": (BinaryOp.AND, False),
    "&": (BinaryOp.AND, False),
    "or": (BinaryOp.OR, False),
    "|": (BinaryOp.OR, False),
    "xor": (BinaryOp.XOR, False),
    "^": (BinaryOp.XOR, False),
    "then": (BinaryOp.IMPLIES, False),
    "implies": (BinaryOp.IMPLIES, False),
    "=>": (BinaryOp.IMPLIES, False),
    "if": (BinaryOp.IMPLIES, True),
    "<=": (BinaryOp.IMPLIES, True),
    "iff": (BinaryOp.IFF, False),
    "<=>": (BinaryOp.IFF, False),
}

BINARY_TOKENS: Tuple[str, ...] = tuple(_BINARY_TOKENS)


@dataclass(frozen=True, slots=True)
class Match:
    """A successful sub-parse: the tree and the position just past it."""
    end: int
    expr: Expr


def skip_whitespace(text: str, pos: int) -> int:
    """Return the first position at or after ``pos`` that is not whitespace."""
    while pos < len(text) and text[pos] in WHITESPACE:
        pos += 1
    return pos


def scan_operator(text: str, pos: int) -> int:
    """
    Return the end of the operator token starting at ``pos``.

    The token runs until end of input, whitespace, or anything that looks
    like the start of the right operand.
    """
    end = pos
    while end < len(text) and not _starts_operand(text, end):
        end += 1
    return end


def _starts_operand(text: str, pos: int) -> bool:
    ch = text[pos]
    if ch in WHITESPACE or ch in _OPERAND_START_CHARS:
        return True
    return text.startswith(_OPERAND_START_PREFIXES, pos)


def _negation_at(text: str, pos: int) -> Optional[str]:
    for keyword in _NEGATION_TOKENS:
        if text.startswith(keyword, pos):
            return keyword
    return None


class Parser:
    """
    Parser bound to one variable registry.

    Parsing several lines with the same parser gives their variables one
    shared numbering. The registry grows as a side effect of parsing.
    """

    def __init__(self, registry: Optional[VariableRegistry] = None) -> None:
        self.registry = registry if registry is not None else VariableRegistry()
        self._productions: Tuple[Callable[[str, int], Optional[Match]], ...] = (
            self._parse_true,
            self._parse_false,
            self._parse_variable,
            self._parse_not,
            self._parse_binary,
        )

    def parse(self, line: str) -> Expr:
        """
        Parse one proposition line.

        Raises:
            PropositionSyntaxError: if neither ``line`` nor ``(line)`` parses
                as a single expression spanning the whole text.
            VariableLimitExceeded: if the line adds one variable too many.
            NestingTooDeepError: if parentheses nest past the stack limit.
        """
        try:
            expr = self._parse_complete(line)
            if expr is None:
                expr = self._parse_complete("(" + line + ")")
                if expr is not None:
                    logger.debug("parsed %r after adding parentheses", line.strip())
        except RecursionError as exc:
            raise NestingTooDeepError() from exc
        if expr is None:
            raise PropositionSyntaxError(line)
        return expr

    def parse_expr(self, text: str, pos: int = 0) -> Optional[Match]:
        """Parse one expression at ``pos``, skipping leading whitespace."""
        pos = skip_whitespace(text, pos)
        for production in self._productions:
            match = production(text, pos)
            if match is not None:
                return match
        return None

    def _parse_complete(self, text: str) -> Optional[Expr]:
        match = self.parse_expr(text, 0)
        if match is None:
            return None
        if skip_whitespace(text, match.end) != len(text):
            return None
        return match.expr

    # ------------- Productions -------------

    def _parse_true(self, text: str, pos: int) -> Optional[Match]:
        if text.startswith("T", pos):
            return Match(pos + 1, TRUE)
        if text.startswith("true", pos):
            return Match(pos + 4, TRUE)
        return None

    def _parse_false(self, text: str, pos: int) -> Optional[Match]:
        if text.startswith("F", pos):
            return Match(pos + 1, FALSE)
        if text.startswith("false", pos):
            return Match(pos + 5, FALSE)
        return None

    def _parse_variable(self, text: str, pos: int) -> Optional[Match]:
        if not text.startswith("[", pos):
            return None
        start = skip_whitespace(text, pos + 1)
        close = text.find("]", start)
        if close < 0:
            return None
        name = text[start:close].rstrip(WHITESPACE)
        return Match(close + 1, Variable(self.registry.resolve(name)))

    def _parse_not(self, text: str, pos: int) -> Optional[Match]:
        # A run of negations is consumed here; only its operand recurses.
        count = 0
        keyword = _negation_at(text, pos)
        while keyword is not None:
            count += 1
            pos = skip_whitespace(text, pos + len(keyword))
            keyword = _negation_at(text, pos)
        if count == 0:
            return None

        operand = self.parse_expr(text, pos)
        if operand is None:
            return None
        expr = operand.expr
        for _ in range(count):
            expr = Not(expr)
        return Match(operand.end, expr)

    def _parse_binary(self, text: str, pos: int) -> Optional[Match]:
        if not text.startswith("(", pos):
            return None
        left = self.parse_expr(text, pos + 1)
        if left is None:
            return None

        op_start = skip_whitespace(text, left.end)
        op_end = scan_operator(text, op_start)
        token = text[op_start:op_end]

        right = self.parse_expr(text, op_end)
        if right is None:
            return None

        close = skip_whitespace(text, right.end)
        if not text.startswith(")", close):
            return None

        entry = _BINARY_TOKENS.get(token)
        if entry is None:
            return None
        op, swapped = entry
        if swapped:
            return Match(close + 1, Binary(op, right.expr, left.expr))
        return Match(close + 1, Binary(op, left.expr, right.expr))


def parse_proposition(line: str, registry: Optional[VariableRegistry] = None) -> Expr:
    """Parse a single line with a (possibly fresh) registry."""
    return Parser(registry).parse(line)


def parse_propositions(
    lines: Iterable[str],
    registry: Optional[VariableRegistry] = None,
) -> List[Expr]:
    """Parse ``lines`` in order, sharing one registry between them."""
    parser = Parser(registry)
    return [parser.parse(line) for line in lines]


__all__ = [
    "BINARY_TOKENS",
    "WHITESPACE",
    "Match",
    "Parser",
    "parse_proposition",
    "parse_propositions",
    "scan_operator",
    "skip_whitespace",
]
