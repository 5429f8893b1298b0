"""
Diagnostic wrappers for parsers.

These wrap a parser without changing its results: `log_parser` logs every
invocation and `check_invariants` verifies the result contract. Compose them
in tests or while developing a grammar, and leave them out otherwise.
"""

import logging

from comparse.core.results import Annotation, Failure, ParseResult, Parser, Success, furthest_success
from comparse.exceptions import InvariantViolationError

logger = logging.getLogger(__name__)


def _format_annotations(annotations: tuple[Annotation, ...]) -> str:
    return "".join(
        f"\n  {i}: {a.label.tag} [{a.start}, {a.end}) {a.label!r}"
        for i, a in enumerate(annotations)
    )


def _log_success(log: logging.Logger, name: str, success: Success) -> None:
    log.debug(
        "%s: success (%d) witness=%r%s",
        name,
        success.end,
        success.witness,
        _format_annotations(success.annotations),
    )


def _log_failure(log: logging.Logger, name: str, failure: Failure) -> None:
    log.debug(
        "%s: failure (%d) completions=%r pause=%s%s",
        name,
        failure.end,
        list(failure.completions),
        failure.pause,
        _format_annotations(failure.annotations),
    )


def log_parser(parser: Parser, name: str = "parser", log: logging.Logger | None = None) -> Parser:
    """
    Return a parser equivalent to `parser` that logs its results at DEBUG level.

    Params:
        parser: Parser to observe
        name: Name to prefix each log record with
        log: Logger to use, this module's logger by default
    """
    log = log or logger

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        if log.isEnabledFor(logging.DEBUG):
            log.debug("%s: parsed %r from %d", name, input, success.end)
            for s in successes:
                _log_success(log, name, s)
            if failure is not None:
                _log_failure(log, name, failure)
        return successes, failure

    return parse


def check_invariants(parser: Parser) -> Parser:
    """
    Return a parser equivalent to `parser` that verifies the result contract.

    Raises:
        InvariantViolationError: When a success ends before the start
            offset, when the failure ends before the furthest success, or
            when there is neither a success nor a failure
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        start = success.end

        for s in successes:
            if s.end < start:
                raise InvariantViolationError(f"success ends at {s.end}, before its start", input, start)
        if failure is not None:
            furthest = furthest_success(successes)
            if failure.end < furthest:
                raise InvariantViolationError(
                    f"failure ends at {failure.end}, before the furthest success at {furthest}",
                    input,
                    start,
                )
        elif not successes:
            raise InvariantViolationError("no success and no failure", input, start)
        return successes, failure

    return parse
