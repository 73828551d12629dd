"""
Expression trees for propositional statements.

The node set is closed: Constant, Variable, Not and Binary (with one of the
five BinaryOp kinds). Nodes are frozen dataclasses, so a tree never changes
after the parser builds it and can be evaluated any number of times.

Usage:
    from propositions.expr import Binary, BinaryOp, Not, Variable

    tree = Binary(BinaryOp.IMPLIES, Variable(0), Not(Variable(1)))
    tree.render(["A", "B"])   # "([A] => not [B])"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Sequence, Tuple

from .registry import MAX_VARIABLES


class BinaryOp(Enum):
    """Binary connectives. The value is the token used when rendering."""
    AND = "and"
    OR = "or"
    XOR = "xor"
    IMPLIES = "=>"
    IFF = "<=>"


@dataclass(frozen=True, slots=True)
class Expr(ABC):
    """Base class for expression nodes."""

    @abstractmethod
    def variables(self) -> FrozenSet[int]:
        """Return the bit indices of all variables in the tree."""
        ...

    @abstractmethod
    def depth(self) -> int:
        """Return tree depth (leaves are 0)."""
        ...

    @abstractmethod
    def render(self, names: Sequence[str]) -> str:
        """Render as parser-accepted text using registry ``names``."""
        ...


@dataclass(frozen=True, slots=True)
class Constant(Expr):
    """Truth constant T / F."""
    value: bool

    def variables(self) -> FrozenSet[int]:
        return frozenset()

    def depth(self) -> int:
        return 0

    def render(self, names: Sequence[str]) -> str:
        return "T" if self.value else "F"


@dataclass(frozen=True, slots=True)
class Variable(Expr):
    """Reference to the variable at registry index ``index``."""
    index: int

    def __post_init__(self):
        if not 0 <= self.index < MAX_VARIABLES:
            raise ValueError(f"Variable index out of range: {self.index}")

    def variables(self) -> FrozenSet[int]:
        return frozenset({self.index})

    def depth(self) -> int:
        return 0

    def render(self, names: Sequence[str]) -> str:
        return f"[{names[self.index]}]"


@dataclass(frozen=True, slots=True)
class Not(Expr):
    """Negation."""
    operand: Expr

    def variables(self) -> FrozenSet[int]:
        return strip_negations(self)[1].variables()

    def depth(self) -> int:
        count, base = strip_negations(self)
        return count + base.depth()

    def render(self, names: Sequence[str]) -> str:
        count, base = strip_negations(self)
        return "not " * count + base.render(names)


@dataclass(frozen=True, slots=True)
class Binary(Expr):
    """Binary connective applied to ``left`` and ``right``."""
    op: BinaryOp
    left: Expr
    right: Expr

    def variables(self) -> FrozenSet[int]:
        return self.left.variables() | self.right.variables()

    def depth(self) -> int:
        return 1 + max(self.left.depth(), self.right.depth())

    def render(self, names: Sequence[str]) -> str:
        return f"({self.left.render(names)} {self.op.value} {self.right.render(names)})"


def strip_negations(expr: Expr) -> Tuple[int, Expr]:
    """Return how many ``Not`` nodes wrap ``expr`` and the first node below them."""
    count = 0
    while isinstance(expr, Not):
        count += 1
        expr = expr.operand
    return count, expr


TRUE = Constant(True)
FALSE = Constant(False)


__all__ = [
    "BinaryOp",
    "Expr",
    "Constant",
    "Variable",
    "Not",
    "Binary",
    "TRUE",
    "FALSE",
    "strip_negations",
]
