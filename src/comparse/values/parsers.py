"""
Parsers for common value domains and the presentation types built on them.
"""

from collections.abc import Sequence

from comparse.core.results import Parser
from comparse.parsing import (
    choice,
    constant,
    optional,
    pause_mark,
    restricted_regexp,
    separated,
    sequence,
    star,
    with_completions,
    without_completions,
)
from comparse.values.types import make_presentation_type

DIGITS = [str(digit) for digit in range(10)]

parse_double_quote = constant('"', "double-quote")
parse_escaped_backslash = constant("\\\\", "\\")
parse_escaped_double_quote = constant('\\"', '"')
parse_escape = choice(parse_escaped_backslash, parse_escaped_double_quote)

# The body stops at backslashes so that escapes are always parsed as such.
parse_string = sequence(
    lambda open_quote, body, close_quote: body,
    parse_double_quote,
    pause_mark(
        without_completions(
            star(
                "".join,
                choice(parse_escape, restricted_regexp(lambda m: m.group(0), r'[^"\\]+')),
            )
        )
    ),
    without_completions(parse_double_quote),
)


def _complete_when_stuck(completion: str):
    def make_completions(context, failure, start):
        return [completion] if failure is not None and failure.end == start else []

    return make_completions


# Non-empty whitespace; offers a space only when none has been typed yet.
parse_whitespace = with_completions(
    _complete_when_stuck(" "), restricted_regexp(lambda m: "whitespace", r"\s+")
)

# A comma, perhaps with whitespace on either side.
parse_comma = with_completions(
    _complete_when_stuck(","), restricted_regexp(lambda m: "comma", r"\s*,\s*")
)


def comma_separated(parser: Parser) -> Parser:
    """Return a parser for zero or more `parser` matches separated by commas."""
    return separated(lambda witnesses: witnesses, parser, parse_comma)


parse_non_negative_integer = with_completions(
    lambda context, failure, start: DIGITS,
    restricted_regexp(lambda m: int(m.group(0)), r"[0-9]+"),
)

parse_integer = sequence(
    lambda sign, absolute_value: sign * absolute_value,
    optional(choice(constant("+", 1), constant("-", -1)), 1),
    parse_non_negative_integer,
)


def integer_in_range(count: int, start: int = 0) -> Parser:
    """Return a parser for the integers in [start, start + count)."""
    return choice(*(constant(str(n), n) for n in range(start, start + count)))


parse_yes_no = choice(constant("yes"), constant("no"))


def whitespace_prefixed(parsers: Sequence[Parser]) -> Parser:
    """Run each of `parsers` after whitespace; the witness is the list of their witnesses."""
    interleaved = [p for parser in parsers for p in (parse_whitespace, parser)]
    return sequence(lambda *witnesses: list(witnesses[1::2]), *interleaved)


def whitespace_separated(parsers: Sequence[Parser]) -> Parser:
    """Run `parsers` with whitespace between them; the witness is the list of their witnesses."""
    interleaved = [p for parser in parsers for p in (parse_whitespace, parser)][1:]
    return sequence(lambda *witnesses: list(witnesses[::2]), *interleaved)


def unparse_string(string: str) -> str:
    """Return `string` as input text that `parse_string` accepts."""
    escaped = string.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


INTEGER_TYPE = make_presentation_type(parse_integer, "an integer")
NON_NEGATIVE_INTEGER_TYPE = make_presentation_type(
    parse_non_negative_integer, "a non-negative integer"
)
STRING_TYPE = make_presentation_type(
    parse_string, "a string surrounded by double quotes", unparse=unparse_string
)
YES_NO_TYPE = make_presentation_type(parse_yes_no, "yes or no")

PRESENTATION_TYPES = {
    "integer": INTEGER_TYPE,
    "non-negative-integer": NON_NEGATIVE_INTEGER_TYPE,
    "string": STRING_TYPE,
    "yes-no": YES_NO_TYPE,
}
