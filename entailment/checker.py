"""
Entailment checking by exhaustive model enumeration.

Assignments are visited in ascending integer order. An assignment that
satisfies every axiom is a model; the first model that falsifies the theorem
is reported as the counterexample and ends the search. If no assignment is a
model the axioms are inconsistent, which is reported separately from a
verified theorem.

Two strategies walk the same order:
    scalar:     one assignment at a time with ``evaluate``.
    vectorized: ascending numpy chunks with ``evaluate_batch``; inside a chunk
                the smallest refuting model wins, so the reported
                counterexample is identical to the scalar one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from propositions.errors import NestingTooDeepError
from propositions.expr import Expr
from propositions.loader import PropositionList

from .config import CheckerConfig
from .evaluate import bindings, evaluate, evaluate_batch

logger = logging.getLogger(__name__)


class Verdict(Enum):
    """Outcome of an entailment check."""
    VERIFIED = "verified"
    AXIOMS_INCONSISTENT = "axioms_inconsistent"
    THEOREM_FALSE = "theorem_false"


@dataclass(frozen=True, slots=True)
class Assignment:
    """An assignment word together with the variable names it binds."""
    value: int
    names: Tuple[str, ...]

    def truth_of(self, name: str) -> bool:
        return bool((self.value >> self.names.index(name)) & 1)

    def bindings(self) -> List[Tuple[str, bool]]:
        """(name, value) pairs in registry order."""
        return bindings(self.value, self.names)

    def to_dict(self) -> Dict[str, bool]:
        return dict(self.bindings())


@dataclass
class EntailmentResult:
    """
    Structured result of an entailment check.

    Attributes:
        verdict: VERIFIED, AXIOMS_INCONSISTENT or THEOREM_FALSE.
        counterexample: First refuting model, only for THEOREM_FALSE.
        variable_count: Number of registered variables.
        assignments_checked: Assignments examined before the search ended.
        strategy: Concrete strategy used ("scalar" or "vectorized").
        duration_ms: Wall time of the search in milliseconds.
    """
    verdict: Verdict
    counterexample: Optional[Assignment] = None
    variable_count: int = 0
    assignments_checked: int = 0
    strategy: str = "scalar"
    duration_ms: float = 0.0

    @property
    def is_verified(self) -> bool:
        return self.verdict == Verdict.VERIFIED

    @property
    def is_theorem_false(self) -> bool:
        return self.verdict == Verdict.THEOREM_FALSE

    @property
    def axioms_consistent(self) -> bool:
        return self.verdict != Verdict.AXIOMS_INCONSISTENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "verdict": self.verdict.value,
            "counterexample": (
                self.counterexample.to_dict() if self.counterexample is not None else None
            ),
            "counterexample_value": (
                self.counterexample.value if self.counterexample is not None else None
            ),
            "variable_count": self.variable_count,
            "assignments_checked": self.assignments_checked,
            "strategy": self.strategy,
            "duration_ms": self.duration_ms,
        }


@dataclass(frozen=True, slots=True)
class _SearchOutcome:
    counterexample: Optional[int]
    consistent: bool
    checked: int


def check_entailment(
    propositions: PropositionList,
    config: Optional[CheckerConfig] = None,
) -> EntailmentResult:
    """Decide whether the theorem of ``propositions`` follows from its axioms."""
    return check_expressions(
        propositions.axioms,
        propositions.theorem,
        propositions.variable_names,
        config=config,
    )


def check_expressions(
    axioms: Sequence[Expr],
    theorem: Expr,
    names: Sequence[str],
    config: Optional[CheckerConfig] = None,
) -> EntailmentResult:
    """
    Enumerate all ``2 ** len(names)`` assignments in ascending order.

    Args:
        axioms: Statements assumed true, evaluated in order.
        theorem: Statement to entail.
        names: Registry names; their count fixes the assignment space.
        config: Strategy selection; defaults to ``CheckerConfig()``.

    Raises:
        NestingTooDeepError: if a tree is nested past the stack limit.
    """
    config = config or CheckerConfig()
    names = tuple(names)
    variable_count = len(names)
    strategy = config.resolve_strategy(variable_count)
    logger.debug(
        "checking %d axiom(s) over %d variable(s) with the %s strategy",
        len(axioms),
        variable_count,
        strategy,
    )

    start = time.perf_counter()
    try:
        if strategy == "vectorized":
            outcome = _search_vectorized(axioms, theorem, variable_count, config.batch_size)
        else:
            outcome = _search_scalar(axioms, theorem, variable_count)
    except RecursionError as exc:
        raise NestingTooDeepError() from exc
    elapsed_ms = (time.perf_counter() - start) * 1000

    if outcome.counterexample is not None:
        verdict = Verdict.THEOREM_FALSE
        counterexample = Assignment(outcome.counterexample, names)
    elif outcome.consistent:
        verdict = Verdict.VERIFIED
        counterexample = None
    else:
        verdict = Verdict.AXIOMS_INCONSISTENT
        counterexample = None

    logger.info(
        "verdict %s after %d assignment(s) in %.2f ms",
        verdict.value,
        outcome.checked,
        elapsed_ms,
    )
    return EntailmentResult(
        verdict=verdict,
        counterexample=counterexample,
        variable_count=variable_count,
        assignments_checked=outcome.checked,
        strategy=strategy,
        duration_ms=elapsed_ms,
    )


def _search_scalar(axioms: Sequence[Expr], theorem: Expr, variable_count: int) -> _SearchOutcome:
    consistent = False
    checked = 0
    for x in range(1 << variable_count):
        checked += 1
        if not all(evaluate(axiom, x) for axiom in axioms):
            continue
        consistent = True
        if not evaluate(theorem, x):
            return _SearchOutcome(x, True, checked)
    return _SearchOutcome(None, consistent, checked)


def _search_vectorized(
    axioms: Sequence[Expr],
    theorem: Expr,
    variable_count: int,
    batch_size: int,
) -> _SearchOutcome:
    total = 1 << variable_count
    consistent = False
    for chunk_start in range(0, total, batch_size):
        chunk_stop = min(chunk_start + batch_size, total)
        words = np.arange(chunk_start, chunk_stop, dtype=np.uint64)

        models = np.ones(words.shape, dtype=bool)
        for axiom in axioms:
            models &= evaluate_batch(axiom, words)
            if not models.any():
                break
        if not models.any():
            continue
        consistent = True

        refuted = np.flatnonzero(models & ~evaluate_batch(theorem, words))
        if refuted.size:
            first = int(words[refuted[0]])
            return _SearchOutcome(first, True, first + 1)
    return _SearchOutcome(None, consistent, total)


__all__ = [
    "Assignment",
    "EntailmentResult",
    "Verdict",
    "check_entailment",
    "check_expressions",
]
