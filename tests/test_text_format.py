"""
Tests for the brace text format.

These tests verify:
    - Parsing atoms, duplicates and nested multisets
    - Whitespace handling
    - Parse errors and their positions
    - Formatting and parse/format round-trip
"""

import sys
from io import StringIO

import pytest
from rmultiset.elements import Nested
from rmultiset.multiset import RecursiveMultiset
from rmultiset.text_format import (
    MultisetParseError,
    format_multiset,
    parse_multiset,
    read_multiset,
    write_multiset,
)
from rmultiset.examples import build_example_pantry


class TestParse:
    """Test parse_multiset() / read_multiset()."""

    def test_duplicates_accumulate(self):
        """{apple, banana, apple} has apple twice."""
        result = parse_multiset("{apple, banana, apple}")
        assert result.size() == 3
        assert result.count("apple") == 2
        assert result.count("banana") == 1

    def test_nested(self):
        """{{a, b}, c} has a nested bag and an atom."""
        result = parse_multiset("{{a, b}, c}")
        assert result.size() == 2
        assert result.is_contains(RecursiveMultiset(["a", "b"]))
        assert result.is_contains("c")

    def test_atom_vs_nested_differ(self):
        """{1} and {{1}} are different."""
        assert parse_multiset("{1}") != parse_multiset("{{1}}")

    def test_empty_multiset(self):
        assert parse_multiset("{}").is_empty()
        assert parse_multiset("  {   }  ").is_empty()

    def test_nested_empty_multiset(self):
        result = parse_multiset("{{}, {}}")
        assert result.count(RecursiveMultiset()) == 2

    def test_whitespace_between_tokens(self):
        result = parse_multiset("  {  a ,\n\tb  ,  { c , d }  }")
        assert result == RecursiveMultiset(["a", "b", RecursiveMultiset(["c", "d"])])

    def test_atom_inner_whitespace_kept(self):
        result = parse_multiset("{hello world}")
        assert result.is_contains("hello world")

    def test_empty_atom(self):
        result = parse_multiset("{a,,b}")
        assert result.count("") == 1
        assert result.size() == 3

    def test_deep_nesting(self):
        result = parse_multiset("{{{{x}}}}")
        level = result
        for _ in range(3):
            (element,) = level.get_elements()
            level = element.multiset
        assert level == RecursiveMultiset(["x"])

    def test_nesting_deeper_than_recursion_limit(self):
        """Reading does not recurse per nesting level."""
        depth = sys.getrecursionlimit() + 200
        result = parse_multiset("{" * depth + "a" + "}" * depth)
        assert hash(Nested(result)) == hash(Nested(result))
        level = result
        for _ in range(depth - 1):
            assert level.size() == 1
            (element,) = level.get_elements()
            level = element.multiset
        assert level.count("a") == 1

    def test_read_leaves_trailing_input(self):
        """read_multiset stops right after the closing brace."""
        stream = StringIO("{a, b} {c}")
        first = read_multiset(stream)
        second = read_multiset(stream)
        assert first == RecursiveMultiset(["a", "b"])
        assert second == RecursiveMultiset(["c"])


class TestParseErrors:
    """Test MultisetParseError cases."""

    def test_missing_opening_brace(self):
        with pytest.raises(MultisetParseError, match="Expected '\\{'") as exc:
            parse_multiset("  a, b}")
        assert exc.value.position == 2

    def test_empty_input(self):
        with pytest.raises(MultisetParseError, match="end of input"):
            parse_multiset("")

    def test_unterminated(self):
        with pytest.raises(MultisetParseError, match="end of input"):
            parse_multiset("{a, b")

    def test_unterminated_nested(self):
        with pytest.raises(MultisetParseError):
            parse_multiset("{a, {b, c}")

    def test_bad_separator_after_nested(self):
        with pytest.raises(MultisetParseError, match="Expected ','") as exc:
            parse_multiset("{{a} b}")
        assert exc.value.position == 5

    def test_trailing_input(self):
        with pytest.raises(MultisetParseError, match="trailing") as exc:
            parse_multiset("{a}  x")
        assert exc.value.position == 5

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_multiset("nope")

    def test_stream_consumed_up_to_error(self):
        """No backtracking: the stream stays past the failure point."""
        stream = StringIO("{{a} b} rest")
        with pytest.raises(MultisetParseError):
            read_multiset(stream)
        assert stream.read() == "} rest"


class TestFormat:
    """Test format_multiset() / write_multiset()."""

    def test_single_atom(self):
        ms = RecursiveMultiset(["element1"])
        assert format_multiset(ms) == "{element1}"

    def test_empty(self):
        assert format_multiset(RecursiveMultiset()) == "{}"

    def test_repeats_by_count(self):
        ms = RecursiveMultiset(["a", "a", "a"])
        assert format_multiset(ms) == "{a, a, a}"

    def test_nested_and_order(self):
        """Output follows insertion order of distinct keys."""
        ms = RecursiveMultiset(["x", RecursiveMultiset(["p", "q"]), "x"])
        assert format_multiset(ms) == "{x, x, {p, q}}"

    def test_custom_separator(self):
        ms = RecursiveMultiset(["a", RecursiveMultiset(["b", "c"])])
        assert format_multiset(ms, separator=",") == "{a,{b,c}}"

    @pytest.mark.parametrize("separator", [" ", ";", ""])
    def test_separator_without_comma_rejected(self, separator):
        """A separator the reader cannot split on is refused."""
        ms = RecursiveMultiset(["a", "b"])
        with pytest.raises(ValueError, match="Separator must contain"):
            format_multiset(ms, separator=separator)

    def test_separator_with_comma_round_trips(self):
        ms = RecursiveMultiset(["a", "b", RecursiveMultiset(["c"])])
        assert parse_multiset(format_multiset(ms, separator=" ,  ")) == ms

    def test_write_multiset(self):
        stream = StringIO()
        write_multiset(RecursiveMultiset(["element1"]), stream)
        assert stream.getvalue() == "{element1}"

    def test_warns_on_unsafe_atom(self):
        ms = RecursiveMultiset(["a,b"])
        with pytest.warns(UserWarning, match="round-trip"):
            assert format_multiset(ms) == "{a,b}"

    def test_warns_on_single_empty_atom(self):
        with pytest.warns(UserWarning, match="empty atom"):
            format_multiset(RecursiveMultiset([""]))


class TestRoundTrip:
    """parse(format(M)) == M."""

    @pytest.mark.parametrize("text", [
        "{}",
        "{element1}",
        "{apple, banana, apple}",
        "{{a, b}, c, {a, b}}",
        "{{}, {{}}, x}",
        "{, , a}",
    ])
    def test_text_round_trip(self, text):
        ms = parse_multiset(text)
        assert parse_multiset(format_multiset(ms)) == ms

    def test_example_round_trip(self):
        pantry = build_example_pantry()
        assert parse_multiset(format_multiset(pantry)) == pantry
