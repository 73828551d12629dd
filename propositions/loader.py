"""
Proposition files: one statement per line, the last line is the theorem.

Lines starting with ``//`` and blank lines are skipped. Line numbers in
errors count every physical line, skipped ones included.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from .errors import EmptyInputError, FileOpenError, NestingTooDeepError, PropositionSyntaxError
from .expr import Expr
from .parser import WHITESPACE, Parser
from .registry import VariableRegistry

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"


@dataclass(frozen=True)
class PropositionList:
    """
    Parsed propositions in source order, with the registry they share.

    Attributes:
        expressions: Parsed trees; all but the last are axioms.
        registry: Registry that numbered the variables of every tree.
        line_numbers: 1-based source line of each expression.
        source: File path the propositions came from, if any.
    """
    expressions: Tuple[Expr, ...]
    registry: VariableRegistry
    line_numbers: Tuple[int, ...] = ()
    source: Optional[str] = None

    def __post_init__(self):
        if not self.expressions:
            raise EmptyInputError(self.source)
        if self.line_numbers and len(self.line_numbers) != len(self.expressions):
            raise ValueError("line_numbers must match expressions one to one")

    @property
    def axioms(self) -> Tuple[Expr, ...]:
        return self.expressions[:-1]

    @property
    def theorem(self) -> Expr:
        return self.expressions[-1]

    @property
    def variable_names(self) -> Tuple[str, ...]:
        return self.registry.names

    def __len__(self) -> int:
        return len(self.expressions)

    def __iter__(self) -> Iterator[Expr]:
        return iter(self.expressions)


def is_proposition_line(line: str) -> bool:
    """
    True unless ``line`` is a comment or contains only whitespace.

    Whitespace is the parser's ASCII set; a line of other blank characters
    (NBSP, say) is a proposition line and fails to parse.
    """
    if line.startswith(COMMENT_PREFIX):
        return False
    return bool(line.strip(WHITESPACE))


def parse_lines(
    lines: Iterable[str],
    registry: Optional[VariableRegistry] = None,
    source: Optional[str] = None,
) -> PropositionList:
    """
    Parse every proposition line of ``lines``.

    Raises:
        PropositionSyntaxError: on the first line that does not parse.
        NestingTooDeepError: on a line nested past the stack limit.
        VariableLimitExceeded: when the registry overflows.
        EmptyInputError: when no proposition lines remain.
    """
    parser = Parser(registry)
    expressions = []
    line_numbers = []
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not is_proposition_line(line):
            continue
        try:
            expr = parser.parse(line)
        except PropositionSyntaxError as exc:
            raise PropositionSyntaxError(line, line_number, source) from exc
        except NestingTooDeepError as exc:
            raise NestingTooDeepError(line_number, source) from exc
        logger.debug("line %d: %s", line_number, expr.render(parser.registry.names))
        expressions.append(expr)
        line_numbers.append(line_number)

    return PropositionList(
        expressions=tuple(expressions),
        registry=parser.registry,
        line_numbers=tuple(line_numbers),
        source=source,
    )


def load_propositions(
    path: Union[str, Path],
    registry: Optional[VariableRegistry] = None,
) -> PropositionList:
    """
    Read and parse a proposition file.

    Only a line feed ends a line. A lone carriage return stays inside the
    line, where the parser treats it as whitespace.
    """
    try:
        text = Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOpenError(path, reason=str(exc)) from exc

    propositions = parse_lines(text.split("\n"), registry=registry, source=str(path))
    logger.info(
        "loaded %d axiom(s) and a theorem over %d variable(s) from %s",
        len(propositions.axioms),
        len(propositions.registry),
        path,
    )
    return propositions


__all__ = [
    "COMMENT_PREFIX",
    "PropositionList",
    "is_proposition_line",
    "load_propositions",
    "parse_lines",
]
