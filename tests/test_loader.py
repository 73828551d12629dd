"""
Tests for propositions/loader.py.
"""

import pytest

from propositions.errors import (
    EmptyInputError,
    FileOpenError,
    NestingTooDeepError,
    PropositionSyntaxError,
    VariableLimitExceeded,
)
from propositions.expr import Binary, BinaryOp, Not, Variable
from propositions.loader import PropositionList, is_proposition_line, load_propositions, parse_lines


class TestLineFilter:

    @pytest.mark.parametrize("line", ["", "   ", "\t", "// comment", "//"])
    def test_skipped(self, line):
        assert not is_proposition_line(line)

    @pytest.mark.parametrize("line", ["[A]", "  [A]", "T"])
    def test_kept(self, line):
        assert is_proposition_line(line)

    def test_indented_comment_is_not_a_comment(self):
        assert is_proposition_line("  // not at column 0")

    @pytest.mark.parametrize("line", ["\u00a0", "\x1c", " \u2003 "])
    def test_non_ascii_blanks_are_not_whitespace(self, line):
        assert is_proposition_line(line)

    def test_ascii_whitespace_only(self):
        assert not is_proposition_line(" \t\f\v\r")


class TestParseLines:

    def test_axioms_and_theorem(self):
        props = parse_lines(["[A]", "( [A] => [B] )", "[B]"])
        assert props.axioms == (Variable(0), Binary(BinaryOp.IMPLIES, Variable(0), Variable(1)))
        assert props.theorem == Variable(1)
        assert props.variable_names == ("A", "B")
        assert len(props) == 3

    def test_comments_and_blank_lines_skipped(self):
        props = parse_lines(["// header", "", "[A]", "   ", "// note", "not [A]"])
        assert list(props) == [Variable(0), Not(Variable(0))]
        assert props.line_numbers == (3, 6)

    def test_syntax_error_reports_physical_line(self):
        with pytest.raises(PropositionSyntaxError) as excinfo:
            parse_lines(["// comment", "[A]", "( [A] nand [B] )"], source="theory.txt")
        assert excinfo.value.line_number == 3
        assert str(excinfo.value) == "Error: Syntax Error line 3 in theory.txt"

    def test_stops_at_first_syntax_error(self):
        with pytest.raises(PropositionSyntaxError) as excinfo:
            parse_lines(["(", "also bad"])
        assert excinfo.value.line_number == 1

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            parse_lines(["// only comments", "  "])

    def test_variable_limit(self):
        lines = [f"[v{i}]" for i in range(33)]
        with pytest.raises(VariableLimitExceeded):
            parse_lines(lines)

    def test_32_variables_load(self):
        props = parse_lines([f"[v{i}]" for i in range(32)])
        assert len(props.registry) == 32

    def test_carriage_returns(self):
        props = parse_lines(["[A]\r", "[A]\r"])
        assert props.theorem == Variable(0)

    def test_single_theorem(self):
        props = parse_lines(["T"])
        assert props.axioms == ()

    def test_nbsp_line_is_a_syntax_error(self):
        with pytest.raises(PropositionSyntaxError) as excinfo:
            parse_lines(["[A]", "\u00a0", "[A]"])
        assert excinfo.value.line_number == 2

    def test_deep_nesting_reports_line(self):
        depth = 5000
        deep = "( " * depth + "[A]" + " and [A] )" * depth
        with pytest.raises(NestingTooDeepError) as excinfo:
            parse_lines(["// deep", "[A]", deep], source="theory.txt")
        assert excinfo.value.line_number == 3
        assert str(excinfo.value) == "Error: Nesting too deep line 3 in theory.txt"


class TestPropositionList:

    def test_requires_an_expression(self, registry):
        with pytest.raises(EmptyInputError):
            PropositionList(expressions=(), registry=registry, source="x.txt")

    def test_line_numbers_must_match(self, registry):
        with pytest.raises(ValueError):
            PropositionList(expressions=(Variable(0),), registry=registry, line_numbers=(1, 2))


class TestLoadPropositions:

    def test_load_file(self, proposition_file):
        path = proposition_file(["// modus ponens", "[A]", "( [A] => [B] )", "", "[B]"])
        props = load_propositions(path)
        assert props.source == str(path)
        assert props.line_numbers == (2, 3, 5)
        assert props.variable_names == ("A", "B")

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.txt"
        with pytest.raises(FileOpenError) as excinfo:
            load_propositions(missing)
        assert str(excinfo.value) == f"Error: Cannot open {missing}"

    def test_directory_is_not_readable(self, tmp_path):
        with pytest.raises(FileOpenError):
            load_propositions(tmp_path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"[A]\n\xff\xfe\n")
        with pytest.raises(FileOpenError):
            load_propositions(path)

    def test_lone_carriage_return_does_not_split(self, tmp_path):
        path = tmp_path / "cr.txt"
        path.write_bytes(b"[A]\r[B]\n")
        with pytest.raises(PropositionSyntaxError) as excinfo:
            load_propositions(path)
        assert excinfo.value.line_number == 1

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"// dos\r\n[A]\r\n\r\n( [A] or [B] )\r\n")
        props = load_propositions(path)
        assert props.line_numbers == (2, 4)
        assert props.variable_names == ("A", "B")

    def test_empty_file(self, proposition_file):
        path = proposition_file([])
        with pytest.raises(EmptyInputError) as excinfo:
            load_propositions(path)
        assert str(excinfo.value) == f"Error: No theorem to check in {path}"
