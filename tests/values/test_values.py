"""
Tests for value parsers and presentation types.
"""

import pytest
from conftest import at_end, run

from comparse.values import (
    DIGITS,
    PRESENTATION_TYPES,
    STRING_TYPE,
    comma_separated,
    enumeration_type,
    integer_in_range,
    make_presentation_type,
    parse_comma,
    parse_integer,
    parse_non_negative_integer,
    parse_string,
    parse_whitespace,
    parse_yes_no,
    unparse_string,
    whitespace_prefixed,
    whitespace_separated,
)


def complete_witnesses(parser, text):
    successes, _ = run(parser, text)
    return [s.witness for s in at_end(successes, text)]


class TestStrings:
    """Tests for double-quoted strings."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('""', ""),
            ('"ab"', "ab"),
            ('"a b"', "a b"),
            ('"a\\"b"', 'a"b'),
            ('"a\\\\b"', "a\\b"),
        ],
    )
    def test_parse(self, text, expected):
        assert complete_witnesses(parse_string, text) == [expected]

    def test_complete_string_has_no_failure(self):
        _, failure = run(parse_string, '"ab"')
        assert failure is None

    def test_unterminated_string_pauses(self):
        """An open string offers nothing, since any character could come next."""
        successes, failure = run(parse_string, '"ab')
        assert successes == []
        assert failure.end == 3
        assert failure.completions == ()
        assert failure.pause is True

    def test_opening_quote_is_offered(self):
        _, failure = run(parse_string, "")
        assert failure.completions == ('"',)

    @pytest.mark.parametrize("value", ["plain", 'with "quotes"', "back\\slash", ""])
    def test_unparse_parses_back(self, value):
        assert complete_witnesses(parse_string, unparse_string(value)) == [value]


class TestIntegers:
    """Tests for integer parsers."""

    def test_non_negative(self):
        assert complete_witnesses(parse_non_negative_integer, "42") == [42]

    def test_digits_are_offered(self):
        _, failure = run(parse_non_negative_integer, "")
        assert failure.completions == tuple(DIGITS)
        assert failure.pause is False

    def test_more_digits_are_offered_after_a_number(self):
        successes, failure = run(parse_non_negative_integer, "4")
        assert len(successes) == 1
        assert failure.end == 1
        assert failure.completions == tuple(DIGITS)

    @pytest.mark.parametrize("text,expected", [("7", 7), ("+7", 7), ("-12", -12)])
    def test_signed(self, text, expected):
        assert complete_witnesses(parse_integer, text) == [expected]

    def test_sign_alone(self):
        successes, failure = run(parse_integer, "-")
        assert at_end(successes, "-") == []
        assert failure.end == 1

    def test_integer_in_range(self):
        parser = integer_in_range(3, 1)
        assert complete_witnesses(parser, "2") == [2]
        assert complete_witnesses(parser, "4") == []


class TestSeparators:
    """Tests for whitespace and comma parsers."""

    def test_whitespace(self):
        successes, failure = run(parse_whitespace, "  x")
        assert [s.end for s in successes] == [2]
        assert failure is None

    def test_space_is_offered(self):
        successes, failure = run(parse_whitespace, "")
        assert successes == []
        assert failure.completions == (" ",)

    def test_comma_with_whitespace(self):
        successes, _ = run(parse_comma, " , x")
        assert [s.end for s in successes] == [3]

    def test_comma_is_offered(self):
        _, failure = run(parse_comma, "x")
        assert failure.completions == (",",)

    def test_comma_separated(self):
        assert complete_witnesses(comma_separated(parse_yes_no), "yes, no") == [["yes", "no"]]

    def test_whitespace_separated(self):
        parser = whitespace_separated([parse_yes_no, parse_integer])
        assert complete_witnesses(parser, "no 3") == [["no", 3]]

    def test_whitespace_prefixed(self):
        parser = whitespace_prefixed([parse_yes_no])
        assert complete_witnesses(parser, " yes") == [["yes"]]
        assert complete_witnesses(parser, "yes") == []


class TestPresentationTypes:
    """Tests for presentation types."""

    def test_registry(self):
        assert set(PRESENTATION_TYPES) == {"integer", "non-negative-integer", "string", "yes-no"}
        assert PRESENTATION_TYPES["yes-no"].help == "yes or no"

    def test_string_type_unparse(self):
        assert STRING_TYPE.unparse('say "hi"') == '"say \\"hi\\""'

    def test_default_unparse(self):
        assert PRESENTATION_TYPES["integer"].unparse(-3) == "-3"

    def test_make_presentation_type(self):
        hook = object()
        presentation_type = make_presentation_type(parse_yes_no, "answer", show_candidates=hook)
        assert presentation_type.help == "answer"
        assert presentation_type.show_candidates is hook
        assert presentation_type.show_choices is None

    def test_enumeration(self, rocket_type):
        assert complete_witnesses(rocket_type.parse, "atlas") == ["atlas"]
        _, failure = run(rocket_type.parse, "a")
        assert failure.completions == ("pollo", "tlas")

    def test_enumeration_unparse(self):
        size = enumeration_type({"small": 1, "large": 2, "big": 2}, "size")
        assert complete_witnesses(size.parse, "big") == [2]
        assert size.unparse(2) == "large"
        assert size.unparse(3) == "3"
