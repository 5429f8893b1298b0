"""
Annotation and context wiring.

`annotate` records which span of the input a grammar construct covered, so
consumers can inspect the parse without re-parsing. `with_context` is the
only sanctioned way to change the context mid-parse.
"""

from collections.abc import Callable
from typing import Any

from attrs import evolve

from comparse.core.labels import Help, Label
from comparse.core.results import Annotation, ParseResult, Parser, Success


def annotate(label: Label, parser: Parser) -> Parser:
    """
    Return a parser equivalent to `parser` that also annotates its span.

    Every success gets an annotation covering the input it consumed, with its
    witness attached to `label`. A failure gets an annotation covering the
    input attempted, with the bare `label`. New annotations go in front so
    that they read outer to inner.

    Params:
        label: Label describing the construct `parser` recognizes
        parser: Parser whose results should be annotated

    Returns:
        The annotating parser
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        start = success.end

        def extend(s: Success) -> Success:
            annotation = Annotation(label.with_witness(s.witness), start, s.end)
            return evolve(s, annotations=(annotation, *s.annotations))

        if failure is not None:
            failure = failure.prepend_annotations([Annotation(label, start, failure.end)])
        return [extend(s) for s in successes], failure

    return parse


def with_help(parser: Parser, help_text: str) -> Parser:
    """Return a parser equivalent to `parser` that carries `help_text` as an annotation."""
    return annotate(Help(help_text), parser)


def with_context(make_context: Callable[[Success], Any], parser: Parser) -> Parser:
    """Replace the context of each success with `make_context(success)`."""

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        return [evolve(s, context=make_context(s)) for s in successes], failure

    return parse
