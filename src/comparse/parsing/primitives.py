"""
Primitive parser combinators.

Every parser is a plain function `parser(input, success)` returning a list of
successes and at most one failure. Combinators build new parsers from old
ones without mutating anything, so a composed parser can be run once per
keystroke against the whole input typed so far.
"""

import re
from collections.abc import Callable
from functools import reduce
from typing import Any

from comparse.core.results import (
    Failure,
    ParseResult,
    Parser,
    Success,
    merge_success_annotations,
)
from comparse.exceptions import UndefinedParserError
from comparse.parsing.completions import merge_failures, surviving_failure

MergeWitnesses = Callable[..., Any]

_UNSET: Any = object()


def substring_match_forward(
    string1: str, start1: int, end1: int, string2: str, start2: int, end2: int
) -> int:
    """Return the length of the common prefix of two substrings."""
    size = min(end1 - start1, end2 - start2)
    i = 0
    while i < size and string1[start1 + i] == string2[start2 + i]:
        i += 1
    return i


def string_match_forward(string1: str, string2: str) -> int:
    """Return the length of the longest common prefix of two strings."""
    return substring_match_forward(string1, 0, len(string1), string2, 0, len(string2))


def constant(literal: str, witness: Any = _UNSET) -> Parser:
    """
    Return a parser for the string `literal`.

    On a partial match, the failure ends after the matched prefix and offers
    the rest of `literal` as its only completion.

    Params:
        literal: Exact text to match
        witness: Witness for a successful match, `literal` itself by default
    """
    if witness is _UNSET:
        witness = literal
    size = len(literal)

    def parse(input: str, success: Success) -> ParseResult:
        start = success.end
        comparison_size = min(size, len(input) - start)
        match_size = substring_match_forward(
            input, start, start + comparison_size, literal, 0, comparison_size
        )
        if match_size == size:
            return [Success(success.annotations, success.context, start + size, witness)], None
        return [], Failure((), [literal[match_size:]], start + match_size, False)

    return parse


def empty(witness: Any = "empty") -> Parser:
    """Return a parser that matches the empty string."""

    def parse(input: str, success: Success) -> ParseResult:
        return [Success(success.annotations, success.context, success.end, witness)], None

    return parse


def fail(input: str, success: Success) -> ParseResult:
    """Parser that never matches and offers no completions."""
    return [], Failure((), (), success.end)


def alternatives(parser1: Parser, parser2: Parser) -> Parser:
    """
    Return a parser that tries both parsers from the same position.

    All successes are kept. A failure is kept only if it got at least as far
    as the furthest success, and tied failures are merged.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes1, failure1 = parser1(input, success)
        successes2, failure2 = parser2(input, success)
        successes = [*successes1, *successes2]
        return successes, merge_failures(
            surviving_failure(failure1, successes),
            surviving_failure(failure2, successes),
        )

    return parse


def with_fallback(parser: Parser, fallback: Parser) -> Parser:
    """
    Like `alternatives`, but only `parser` may contribute a failure.

    The fallback adds successes without adding its completions.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes1, failure1 = parser(input, success)
        successes2, _ = fallback(input, success)
        successes = [*successes1, *successes2]
        return successes, surviving_failure(failure1, successes)

    return parse


def choice(*parsers: Parser) -> Parser:
    """Return a parser that accepts whatever any of `parsers` accepts."""
    if not parsers:
        return fail
    return reduce(alternatives, parsers)


def chain(
    merge_witnesses: MergeWitnesses,
    parser1: Parser,
    make_next_parser: Callable[[Success], Parser],
) -> Parser:
    """
    Run `parser1`, then the parser obtained from each of its successes.

    Each continuation starts where its success left off. The witness of a
    combined success is `merge_witnesses(witness1, witness2)`. Failures from
    continuations are reported with the first stage's annotations in front,
    and only a failure at or beyond the furthest success survives.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes1, failure = parser1(input, success)
        successes: list[Success] = []

        for s1 in successes1:
            successes2, failure2 = make_next_parser(s1)(input, s1)
            if failure2 is not None:
                failure = merge_failures(failure, failure2.prepend_annotations(s1.annotations))
            successes.extend(
                Success(s.annotations, s.context, s.end, merge_witnesses(s1.witness, s.witness))
                for s in successes2
            )
        return successes, surviving_failure(failure, successes)

    return parse


def then(merge_witnesses: MergeWitnesses, parser1: Parser, parser2: Parser) -> Parser:
    """Run `parser1`, then `parser2`, merging their witnesses in order."""
    return chain(merge_witnesses, parser1, lambda success: parser2)


def transform(parser: Parser, function: Callable[[Any], Any]) -> Parser:
    """Return a parser that applies `function` to the witness of every success."""

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        return [s.with_witness(function(s.witness)) for s in successes], failure

    return parse


def sequence(merge_witnesses: MergeWitnesses, *parsers: Parser) -> Parser:
    """
    Run all `parsers` in order.

    The witness of each success is `merge_witnesses(w1, w2, ...)` with the
    witnesses in textual order. They are collected newest first while
    folding, then reversed.
    """

    def reverse_then(parser1: Parser, parser2: Parser) -> Parser:
        return then(lambda ws, w: (w, *ws), parser1, parser2)

    folded = reduce(reverse_then, parsers, empty(()))
    return transform(folded, lambda ws: merge_witnesses(*reversed(ws)))


def categorize(successes, predicate):
    """Split `successes` into those satisfying `predicate` and the rest, preserving order."""
    positives = [s for s in successes if predicate(s)]
    negatives = [s for s in successes if not predicate(s)]
    return positives, negatives


def filter_witness(parser: Parser) -> Parser:
    """
    Drop successes whose witness is false.

    This lets the computation producing a witness reject a parse. If nothing
    is left and there was no failure, fail at the start position.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        positives, _ = categorize(successes, lambda s: s.witness)
        if not positives and failure is None:
            return [], Failure((), (), success.end, False)
        return positives, failure

    return parse


filter_ = filter_witness


def maybe(parser: Parser) -> Parser:
    """
    Drop successes whose witness is None.

    If no success remains, the failure keeps the annotations of the dropped
    successes, since the input was syntactically valid even though rejected.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        nulls, non_nulls = categorize(successes, lambda s: s.witness is None)
        if non_nulls:
            return non_nulls, failure
        if failure is not None:
            return [], failure
        return [], Failure(merge_success_annotations(nulls), (), success.end, False)

    return parse


def restricted_regexp(
    make_witness: Callable[[re.Match], Any], pattern: str | re.Pattern
) -> Parser:
    """
    Return a parser that matches `pattern` at the current position.

    `pattern` must match every non-empty prefix of any string it matches, so
    that it keeps matching as the user types each character. This is not
    checked. The parser offers no completions and so always pauses.

    Params:
        make_witness: Builds the witness from the `re.Match`
        pattern: Regular expression, compiled or not
    """
    regexp = re.compile(pattern)

    def parse(input: str, success: Success) -> ParseResult:
        start = success.end
        match = regexp.match(input, start)
        if match is not None:
            return [
                Success(success.annotations, success.context, match.end(), make_witness(match))
            ], None
        return [], Failure((), (), start, True)

    return parse


def delayed(make_parser: Callable[[], Parser]) -> Parser:
    """Return the parser made by `make_parser`, calling it only when parsing."""

    def parse(input: str, success: Success) -> ParseResult:
        return make_parser()(input, success)

    return parse


class ForwardParser:
    """
    Forward declaration of a parser, for grammars that refer to themselves.

    Use the instance as a parser while building the grammar, then `define`
    it once the real parser exists.
    """

    def __init__(self, name: str = "forward"):
        self.name = name
        self._parser: Parser | None = None

    def define(self, parser: Parser) -> "ForwardParser":
        self._parser = parser
        return self

    def __call__(self, input: str, success: Success) -> ParseResult:
        if self._parser is None:
            raise UndefinedParserError(self.name)
        return self._parser(input, success)
