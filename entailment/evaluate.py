"""
Truth evaluation of expression trees under assignment words.

An assignment is an integer whose bit *i* is the truth value of the variable
at registry index *i*. ``evaluate`` handles one word; ``evaluate_batch``
applies the same semantics elementwise to a numpy array of words.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from propositions.expr import Binary, BinaryOp, Constant, Expr, Variable, strip_negations


def evaluate(expr: Expr, assignment: int) -> bool:
    """Evaluate ``expr`` with variables bound by the bits of ``assignment``."""
    negations, expr = strip_negations(expr)
    return _evaluate_node(expr, assignment) != bool(negations % 2)


def _evaluate_node(expr: Expr, assignment: int) -> bool:
    if isinstance(expr, Constant):
        return expr.value

    if isinstance(expr, Variable):
        return bool((assignment >> expr.index) & 1)

    if isinstance(expr, Binary):
        op = expr.op
        left = evaluate(expr.left, assignment)
        if op is BinaryOp.AND:
            return left and evaluate(expr.right, assignment)
        if op is BinaryOp.OR:
            return left or evaluate(expr.right, assignment)
        if op is BinaryOp.XOR:
            return left != evaluate(expr.right, assignment)
        if op is BinaryOp.IMPLIES:
            return not (left and not evaluate(expr.right, assignment))
        if op is BinaryOp.IFF:
            return left == evaluate(expr.right, assignment)
        raise TypeError(f"Unknown binary operator: {op!r}")

    raise TypeError(f"Unknown expression type: {type(expr)}")


def evaluate_batch(expr: Expr, assignments: np.ndarray) -> np.ndarray:
    """
    Evaluate ``expr`` for every word in ``assignments``.

    Args:
        expr: Expression tree.
        assignments: Array of non-negative assignment words (any integer
            dtype; converted to uint64).

    Returns:
        Boolean array with the same shape as ``assignments``.
    """
    words = np.asarray(assignments, dtype=np.uint64)
    return _evaluate_words(expr, words)


def _evaluate_words(expr: Expr, words: np.ndarray) -> np.ndarray:
    negations, expr = strip_negations(expr)
    result = _evaluate_node_words(expr, words)
    return ~result if negations % 2 else result


def _evaluate_node_words(expr: Expr, words: np.ndarray) -> np.ndarray:
    if isinstance(expr, Constant):
        return np.full(words.shape, expr.value, dtype=bool)

    if isinstance(expr, Variable):
        bits = (words >> np.uint64(expr.index)) & np.uint64(1)
        return bits.astype(bool)

    if isinstance(expr, Binary):
        left = _evaluate_words(expr.left, words)
        right = _evaluate_words(expr.right, words)
        op = expr.op
        if op is BinaryOp.AND:
            return left & right
        if op is BinaryOp.OR:
            return left | right
        if op is BinaryOp.XOR:
            return left ^ right
        if op is BinaryOp.IMPLIES:
            return ~(left & ~right)
        if op is BinaryOp.IFF:
            return left == right
        raise TypeError(f"Unknown binary operator: {op!r}")

    raise TypeError(f"Unknown expression type: {type(expr)}")


def bindings(assignment: int, names: Sequence[str]) -> List[Tuple[str, bool]]:
    """Pair each variable name with its truth value under ``assignment``."""
    return [(name, bool((assignment >> index) & 1)) for index, name in enumerate(names)]


__all__ = ["evaluate", "evaluate_batch", "bindings"]
