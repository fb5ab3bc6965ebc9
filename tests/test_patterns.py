"""Tests for the composable pattern library.

Covers the pattern variants in docscan.patterns.core: literal and regex
leaves, ordered alternation, backtracking sequences and repetition,
captures, late-bound recursion and balanced (nesting) regions.
"""

import re

import pytest

from docscan.errors import APIUsageError
from docscan.patterns import (
    Alternation,
    Balanced,
    Capture,
    Forward,
    Literal,
    Optional,
    Regex,
    Repeat,
    Sequence,
    as_pattern,
)

# =========================================================================
# Leaves
# =========================================================================


class TestLiteral:
    def test_matches_prefix(self) -> None:
        m = Literal("fn").match("fn main")
        assert m is not None
        assert m.span() == (0, 2)

    def test_special_characters_are_verbatim(self) -> None:
        assert Literal("a.b").match("axb") is None
        assert Literal("a.b").match("a.b") is not None

    def test_match_at_offset(self) -> None:
        m = Literal("b").match("abc", 1)
        assert m is not None
        assert (m.start, m.end) == (1, 2)


class TestRegex:
    def test_named_groups_become_captures(self) -> None:
        m = Regex(r"(?P<word>\w+)(?: (?P<other>\w+))?").match("hello")
        assert m is not None
        assert m["word"] == "hello"
        assert m["other"] is None
        assert m.groupdict() == {"word": "hello"}

    def test_accepts_compiled_expression(self) -> None:
        pattern = Regex(re.compile(r"ab", re.IGNORECASE))
        assert pattern.match("AB") is not None

    def test_flags_with_compiled_expression_rejected(self) -> None:
        with pytest.raises(APIUsageError):
            Regex(re.compile("a"), re.IGNORECASE)

    def test_regex_leaf_is_not_backtracked_into(self) -> None:
        assert (Regex("a*") + Literal("a")).match("aa") is None


class TestAsPattern:
    def test_string_becomes_literal(self) -> None:
        assert isinstance(as_pattern("x"), Literal)

    def test_compiled_regex_becomes_regex(self) -> None:
        assert isinstance(as_pattern(re.compile("x")), Regex)

    def test_pattern_passes_through(self) -> None:
        literal = Literal("x")
        assert as_pattern(literal) is literal

    def test_other_values_rejected(self) -> None:
        with pytest.raises(APIUsageError):
            as_pattern(42)


# =========================================================================
# Composition
# =========================================================================


class TestSequenceAndAlternation:
    """Sequences backtrack; alternation prefers earlier alternatives."""

    def test_operators_build_composites(self) -> None:
        assert isinstance(Literal("a") + "b", Sequence)
        assert isinstance("a" + Literal("b"), Sequence)
        assert isinstance(Literal("a") | "b", Alternation)
        assert isinstance("a" | Literal("b"), Alternation)

    def test_nested_sequences_flatten(self) -> None:
        seq = Literal("a") + "b" + "c"
        assert len(seq.parts) == 3

    def test_first_alternative_wins(self) -> None:
        m = (Literal("a") | Literal("ab")).match("ab")
        assert m is not None
        assert m.end == 1

    def test_sequence_backtracks_into_alternation(self) -> None:
        pattern = (Literal("a") | Literal("ab")) + "!"
        m = pattern.match("ab!")
        assert m is not None
        assert m.text == "ab!"

    def test_sequence_failure(self) -> None:
        assert (Literal("a") + "b").match("ac") is None


class TestRepeat:
    def test_greedy_with_backtracking(self) -> None:
        pattern = Repeat(Regex("[a-z]")) + Literal("z")
        m = pattern.match("abcz")
        assert m is not None
        assert m.end == 4

    def test_minimum(self) -> None:
        pattern = Repeat(Literal("a"), 2)
        assert pattern.match("a") is None
        m = pattern.match("aaa")
        assert m is not None
        assert m.end == 3

    def test_maximum(self) -> None:
        m = Repeat(Literal("a"), 0, 2).match("aaa")
        assert m is not None
        assert m.end == 2

    def test_zero_repetitions_match_empty(self) -> None:
        m = Repeat(Literal("a")).match("bbb")
        assert m is not None
        assert m.end == 0

    def test_zero_width_iterations_terminate(self) -> None:
        m = Repeat(Regex("a*")).match("b")
        assert m is not None
        assert m.end == 0

    def test_empty_iteration_satisfies_minimum(self) -> None:
        m = Repeat(Optional(Literal("x")), 1).match("y")
        assert m is not None
        assert (m.start, m.end) == (0, 0)

    def test_empty_iteration_fills_remaining_minimum(self) -> None:
        m = Repeat(Regex("a*"), 2).match("aab")
        assert m is not None
        assert m.end == 2

    @pytest.mark.parametrize(("minimum", "maximum"), [(-1, None), (3, 2)])
    def test_invalid_bounds(self, minimum: int, maximum: int | None) -> None:
        with pytest.raises(APIUsageError):
            Repeat(Literal("a"), minimum, maximum)

    def test_long_runs_do_not_recurse(self) -> None:
        text = "a" * 20_000
        m = Repeat(Regex("[a-z]") | Balanced("{", "}")).fullmatch(text)
        assert m is not None

    def test_optional_prefers_one(self) -> None:
        pattern = Optional("x") + "y"
        first = pattern.match("xy")
        assert first is not None
        assert first.end == 2
        second = pattern.match("y")
        assert second is not None
        assert second.end == 1


class TestCapture:
    def test_capture_span(self) -> None:
        m = (Literal("fn ") + Capture("name", Regex(r"\w+"))).match("fn main()")
        assert m is not None
        assert m["name"] == "main"
        assert m.span("name") == (3, 7)

    def test_last_repetition_wins(self) -> None:
        m = Repeat(Capture("c", Regex("[a-z]"))).match("abc")
        assert m is not None
        assert m["c"] == "c"

    def test_failed_branch_leaves_no_capture(self) -> None:
        pattern = (Capture("x", Literal("a")) + "!") | Literal("a")
        m = pattern.match("a")
        assert m is not None
        assert m["x"] is None

    def test_unknown_integer_group(self) -> None:
        m = Literal("a").match("a")
        assert m is not None
        with pytest.raises(IndexError):
            m.group(1)


class TestForward:
    def test_recursive_pattern(self) -> None:
        parens = Forward("parens")
        parens.set(Literal("(") + Optional(parens) + ")")
        assert parens.fullmatch("((()))") is not None
        assert parens.match("(()") is None

    def test_set_returns_self(self) -> None:
        chain = Forward("chain")
        assert chain.set(Literal("a")) is chain

    def test_use_before_set(self) -> None:
        with pytest.raises(APIUsageError):
            Forward("unset").match("a")

    def test_set_twice(self) -> None:
        chain = Forward("chain").set("a")
        with pytest.raises(APIUsageError):
            chain.set("b")


# =========================================================================
# Balanced regions
# =========================================================================


class TestBalanced:
    """Balanced matches exactly where the nesting depth returns to zero."""

    def test_nested(self) -> None:
        m = Balanced("{", "}").match("{a{b}c}")
        assert m is not None
        assert len(m) == 7

    def test_stops_at_outermost_close(self) -> None:
        m = Balanced("{", "}").match("{a}{b}")
        assert m is not None
        assert m.text == "{a}"

    def test_unbalanced_fails(self) -> None:
        assert Balanced("{", "}").match("{a{b}c") is None

    def test_must_start_with_opening(self) -> None:
        assert Balanced("{", "}").match("a{b}") is None

    def test_other_delimiters_are_plain_text(self) -> None:
        m = Balanced("(", ")").match("(a[)b]")
        assert m is not None
        assert m.text == "(a[)"

    def test_named_capture(self) -> None:
        m = Balanced("{", "}", "body").match("{x} y")
        assert m is not None
        assert m["body"] == "{x}"

    def test_multi_character_delimiters(self) -> None:
        m = Balanced("/*", "*/").match("/* a /* b */ c */ d")
        assert m is not None
        assert m.text == "/* a /* b */ c */"

    @pytest.mark.parametrize(("opening", "closing"), [("", "}"), ("{", ""), ("|", "|")])
    def test_invalid_delimiters(self, opening: str, closing: str) -> None:
        with pytest.raises(APIUsageError):
            Balanced(opening, closing)


# =========================================================================
# Searching
# =========================================================================


class TestSearch:
    def test_search_finds_later_match(self) -> None:
        m = Literal("ab").search("xxab")
        assert m is not None
        assert m.start == 2

    def test_search_no_match(self) -> None:
        assert Literal("ab").search("xyz") is None

    def test_all_matches_non_overlapping(self) -> None:
        matches = Literal("ab").all_matches("xabyab")
        assert [m.start for m in matches] == [1, 4]

    def test_all_matches_with_empty_matches_terminates(self) -> None:
        matches = Regex("x*").all_matches("ab")
        assert len(matches) == 2

    def test_fullmatch_requires_whole_text(self) -> None:
        pattern = Repeat(Regex("[a-z]"))
        assert pattern.fullmatch("abc") is not None
        assert pattern.fullmatch("abc!") is None
