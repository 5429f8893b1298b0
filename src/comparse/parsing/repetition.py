"""
Repetition and structural combinators.

These are all derived from the primitives. Recursive grammars are built from
functions that construct their continuation only when it is invoked, so
building a repetition never unrolls it.
"""

from collections.abc import Callable, Iterable
from typing import Any

from comparse.core.results import Failure, ParseResult, Parser, Success
from comparse.parsing.completions import pause_mark
from comparse.parsing.primitives import (
    alternatives,
    categorize,
    chain,
    choice,
    constant,
    delayed,
    empty,
    then,
    transform,
)


def _cons(witness, witnesses):
    return (witness, *witnesses)


def star(merge_witnesses: Callable[[list], Any], parser: Parser) -> Parser:
    """
    Match `parser` zero or more times.

    The witness is `merge_witnesses` applied to the list of element
    witnesses. A failure reported from a repetition means more input could
    still extend the last element, so it is marked for pause.
    """

    def kleene() -> Parser:
        return alternatives(empty(()), then(_cons, parser, delayed(kleene)))

    return transform(pause_mark(kleene()), lambda ws: merge_witnesses(list(ws)))


def non_empty(parser: Parser) -> Parser:
    """
    Run `parser`, but reject any success that consumed no input.

    Zero-width repetitions must never be accepted silently.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        start = success.end
        empties, non_empties = categorize(successes, lambda s: s.end == start)
        if not empties:
            return successes, failure
        return non_empties, failure or Failure((), (), start, False)

    return parse


def plus(merge_witnesses: Callable[[list], Any], parser: Parser) -> Parser:
    """Like `star`, but `parser` must match at least once."""
    return non_empty(star(merge_witnesses, parser))


def optional(parser: Parser, witness: Any = "missing") -> Parser:
    """Return a parser that also succeeds, with `witness`, when `parser` does not match."""
    return choice(parser, empty(witness))


def separated(
    merge_witnesses: Callable[[list], Any], parse_element: Parser, parse_separator: Parser
) -> Parser:
    """Like `star`, but elements must be separated by input `parse_separator` accepts."""

    def repeated() -> Parser:
        return then(
            _cons,
            parse_element,
            alternatives(
                empty(()),
                then(lambda separator, ws: ws, parse_separator, delayed(repeated)),
            ),
        )

    return transform(
        alternatives(empty(()), repeated()), lambda ws: merge_witnesses(list(ws))
    )


def subset(constants: Iterable[str], parse_separator: Parser) -> Parser:
    """
    Return a parser for any subset of `constants`, in any order.

    Elements are separated by input that `parse_separator` accepts. Each
    constant is removed from the candidates once chosen, so none can repeat.
    The witness is the list of chosen constants in textual order.
    """

    def choose(choices: tuple[str, ...]) -> Parser:
        def next_parser(success: Success) -> Parser:
            fewer = tuple(c for c in choices if c != success.witness)
            if not fewer:
                return empty(())
            return alternatives(
                empty(()),
                then(lambda separator, rest: rest, parse_separator, choose(fewer)),
            )

        return chain(_cons, choice(*(constant(c) for c in choices)), next_parser)

    candidates = tuple(dict.fromkeys(constants))
    if not candidates:
        return empty([])
    return transform(alternatives(empty(()), choose(candidates)), list)
