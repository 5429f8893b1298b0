"""
Failure merging and completion derivation.

When several branches fail, only the furthest failure is informative. Ties
are merged: annotations and completions are unioned and the pause flags
OR-ed. Completion lists are always kept in normalized form, the sorted set of
unique shortest prefixes.
"""

from collections.abc import Callable, Iterable
from typing import Any

from comparse.core.results import (
    Failure,
    ParseResult,
    Parser,
    Success,
    furthest_success,
    merge_annotations,
    merge_success_annotations,
)

MakeCompletions = Callable[[Any, Failure | None, int], Iterable[str]]


def normalize_completions(completions: Iterable[str]) -> list[str]:
    """
    Return the unique shortest prefixes among `completions`.

    The result is sorted and contains no element that extends another, so
    "yes" and "yesterday" reduce to "yes".

    Params:
        completions: Candidate completion strings in any order

    Returns:
        Sorted list of completions that do not have another as a prefix
    """
    result: list[str] = []
    for completion in sorted(completions):
        if result and completion.startswith(result[-1]):
            continue
        result.append(completion)
    return result


def merge_failures(failure1: Failure | None, failure2: Failure | None) -> Failure | None:
    """
    Return the more informative of two failures.

    A missing failure yields the other one, the further failure wins, and
    failures ending at the same offset are merged.
    """
    if failure1 is None:
        return failure2
    if failure2 is None:
        return failure1
    if failure1.end == failure2.end:
        return Failure(
            merge_annotations(failure1.annotations, failure2.annotations),
            normalize_completions([*failure1.completions, *failure2.completions]),
            failure1.end,
            failure1.pause or failure2.pause,
        )
    return failure2 if failure1.end < failure2.end else failure1


def surviving_failure(failure: Failure | None, successes: list[Success]) -> Failure | None:
    """Drop `failure` if some success got further than it did."""
    if failure is not None and failure.end >= furthest_success(successes):
        return failure
    return None


def with_completions(make_completions: MakeCompletions, parser: Parser) -> Parser:
    """
    Return a parser whose completions come from `make_completions`.

    `make_completions` is called with the context, the failure (or None) and
    the start offset. A failure's own completions are discarded. When `parser`
    succeeds without failing, any completions offered turn the result into a
    soft failure at the furthest success so that they can still be shown.
    The provided list is taken to be complete, so pause is never set.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        completions = list(make_completions(success.context, failure, success.end))

        if failure is not None:
            return successes, failure.with_completions(completions, pause=False)
        if not completions:
            return successes, None
        return successes, Failure(
            merge_success_annotations(successes),
            completions,
            furthest_success(successes),
            False,
        )

    return parse


def without_completions(parser: Parser) -> Parser:
    """Return a parser equivalent to `parser` that never offers completions."""
    return with_completions(lambda context, failure, start: [], parser)


def pause_mark(parser: Parser) -> Parser:
    """Mark any failure of `parser` as having an incomplete completion list."""

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        if failure is None:
            return successes, None
        return successes, failure.with_completions(failure.completions, pause=True)

    return parse
