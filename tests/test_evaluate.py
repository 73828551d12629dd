"""
Tests for entailment/evaluate.py and the expression tree helpers.
"""

import itertools
from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from entailment.evaluate import bindings, evaluate, evaluate_batch
from propositions.expr import FALSE, TRUE, Binary, BinaryOp, Constant, Not, Variable
from propositions.parser import Parser, parse_proposition


A = Variable(0)
B = Variable(1)
C = Variable(2)


def _word(*bits: bool) -> int:
    """Assignment word with bit i set to bits[i]."""
    return sum(1 << i for i, bit in enumerate(bits) if bit)


class TestExpressionTree:

    def test_nodes_are_immutable(self):
        node = Not(A)
        with pytest.raises(FrozenInstanceError):
            node.operand = B

    def test_structural_equality(self):
        assert Binary(BinaryOp.AND, A, Not(B)) == Binary(BinaryOp.AND, Variable(0), Not(Variable(1)))
        assert Binary(BinaryOp.AND, A, B) != Binary(BinaryOp.AND, B, A)

    def test_variables_and_depth(self):
        tree = Binary(BinaryOp.OR, Binary(BinaryOp.AND, A, B), Not(Not(A)))
        assert tree.variables() == frozenset({0, 1})
        assert tree.depth() == 3
        assert TRUE.variables() == frozenset()
        assert C.depth() == 0

    def test_render(self):
        tree = Binary(BinaryOp.IMPLIES, A, Not(Binary(BinaryOp.XOR, B, TRUE)))
        assert tree.render(["p", "q"]) == "([p] => not ([q] xor T))"

    def test_long_negation_chain(self):
        tree = A
        for _ in range(5000):
            tree = Not(tree)
        assert tree.depth() == 5000
        assert tree.variables() == frozenset({0})
        assert tree.render(["p"]) == "not " * 5000 + "[p]"

    @pytest.mark.parametrize("index", [-1, 32])
    def test_variable_index_range(self, index):
        with pytest.raises(ValueError):
            Variable(index)


class TestEvaluate:

    def test_constants(self):
        for x in range(4):
            assert evaluate(TRUE, x) is True
            assert evaluate(FALSE, x) is False

    def test_variable_reads_its_bit(self):
        assert evaluate(A, 0b01) is True
        assert evaluate(B, 0b01) is False
        assert evaluate(B, 0b10) is True
        assert evaluate(Variable(31), 1 << 31) is True
        assert evaluate(Variable(31), (1 << 31) - 1) is False

    @pytest.mark.parametrize(
        "op,table",
        [
            (BinaryOp.AND, {(False, False): False, (False, True): False, (True, False): False, (True, True): True}),
            (BinaryOp.OR, {(False, False): False, (False, True): True, (True, False): True, (True, True): True}),
            (BinaryOp.XOR, {(False, False): False, (False, True): True, (True, False): True, (True, True): False}),
            (BinaryOp.IMPLIES, {(False, False): True, (False, True): True, (True, False): False, (True, True): True}),
            (BinaryOp.IFF, {(False, False): True, (False, True): False, (True, False): False, (True, True): True}),
        ],
    )
    def test_binary_truth_tables(self, op, table):
        tree = Binary(op, A, B)
        for (left, right), expected in table.items():
            assert evaluate(tree, _word(left, right)) is expected

    def test_implies_equals_not_left_or_right(self):
        implies = Binary(BinaryOp.IMPLIES, A, B)
        disjunction = Binary(BinaryOp.OR, Not(A), B)
        for left, right in itertools.product([False, True], repeat=2):
            x = _word(left, right)
            assert evaluate(implies, x) == evaluate(disjunction, x)

    def test_double_negation_identity(self, registry):
        parser = Parser(registry)
        plain = parser.parse("[X]")
        doubled = parser.parse("not not [X]")
        for x in range(2):
            assert evaluate(doubled, x) == evaluate(plain, x)

    def test_unknown_node_type(self):
        with pytest.raises(TypeError):
            evaluate(object(), 0)

    def test_unknown_node_under_negation(self):
        with pytest.raises(TypeError):
            evaluate(Not(object()), 0)

    @pytest.mark.parametrize("count", [5000, 5001])
    def test_long_negation_chain(self, count):
        tree = Binary(BinaryOp.AND, A, B)
        for _ in range(count):
            tree = Not(tree)
        flipped = count % 2 == 1
        assert evaluate(tree, _word(True, True)) is not flipped
        assert evaluate(tree, _word(True, False)) is flipped

    def test_total_over_parsed_trees(self):
        tree = parse_proposition("( ( [A] <=> ![B] ) ^ ( [C] if ( T & [A] ) ) )")
        results = [evaluate(tree, x) for x in range(8)]
        assert all(isinstance(value, bool) for value in results)


class TestEvaluateBatch:

    @pytest.mark.parametrize(
        "text",
        [
            "T",
            "F",
            "[A]",
            "not [B]",
            "( [A] and [B] )",
            "( [A] | [C] )",
            "( [A] ^ [B] )",
            "( [A] => [C] )",
            "( [A] <= [C] )",
            "( [B] <=> [C] )",
            "( ( [A] and not [B] ) or ( [C] iff F ) )",
        ],
    )
    def test_agrees_with_scalar(self, text):
        parser = Parser()
        for name in ("A", "B", "C"):
            parser.registry.resolve(name)
        tree = parser.parse(text)
        words = np.arange(8, dtype=np.uint64)
        batch = evaluate_batch(tree, words)
        assert batch.dtype == bool
        assert batch.tolist() == [evaluate(tree, x) for x in range(8)]

    def test_high_bits(self):
        words = np.array([0, 1 << 31, (1 << 32) - 1], dtype=np.uint64)
        assert evaluate_batch(Variable(31), words).tolist() == [False, True, True]

    def test_accepts_python_ints(self):
        assert evaluate_batch(A, [0, 1, 2, 3]).tolist() == [False, True, False, True]

    def test_constant_shape(self):
        assert evaluate_batch(Constant(True), np.arange(5)).shape == (5,)

    def test_long_negation_chain(self):
        tree = B
        for _ in range(5001):
            tree = Not(tree)
        assert evaluate_batch(tree, np.arange(4)).tolist() == [True, True, False, False]


class TestBindings:

    def test_registry_order(self):
        assert bindings(0b10, ["A", "B"]) == [("A", False), ("B", True)]

    def test_no_variables(self):
        assert bindings(0, []) == []
