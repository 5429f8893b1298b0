"""
Headless completion logic for an interactive command line.

These functions implement what an editor does on each keystroke, without
any rendering: decide whether a typed character can be accepted, extend the
input by its unique completion, and collect the annotations of a partial
parse. A `CommandProcessor` pairs a top-level parser with its context.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from attrs import Factory, frozen

from comparse.config import EditorSettings
from comparse.core.results import (
    Annotation,
    Failure,
    ParseResult,
    Parser,
    Success,
    furthest_success,
    merge_success_annotations,
)
from comparse.parsing import check_invariants, string_match_forward


def unique_completion(failure: Failure | None) -> str:
    """
    Return the longest prefix shared by all completions of `failure`.

    Paused failures have no unique completion, since their completion list
    is known to be incomplete.
    """
    if failure is None or failure.pause or not failure.completions:
        return ""
    ordered = sorted(failure.completions)
    common = ordered[0]
    for completion in ordered:
        size = string_match_forward(common, completion)
        if size == 0:
            return ""
        common = common[:size]
    return common


def valid_parses(end: int, successes: Iterable[Success]) -> list[Success]:
    """Valid parses are the successes that end where the input ended."""
    return [s for s in successes if s.end == end]


def partial_annotations(successes: Sequence[Success], failure: Failure | None) -> tuple[Annotation, ...]:
    return failure.annotations if failure is not None else merge_success_annotations(successes)


def filter_completions(parser: Parser) -> Parser:
    """
    Drop a completion that is just a space, unless it is the only one.

    A lone space is rarely the interesting continuation when there are others.
    """

    def parse(input: str, success: Success) -> ParseResult:
        successes, failure = parser(input, success)
        if failure is None or len(failure.completions) == 1:
            return successes, failure
        completions = [c for c in failure.completions if c != " "]
        return successes, failure.with_completions(completions, failure.pause)

    return parse


def to_other_case(character: str) -> str:
    """Swap the case of `character`, leaving caseless characters unchanged."""
    lower = character.lower()
    return character.upper() if character == lower else lower


@frozen
class CommandProcessor:
    """
    A top-level parser together with what the editor needs to run it.

    Params:
        parse: Top-level parser, e.g. from `parse_command_from_grammar`
        context: Context given to `Success.initial`
        on_partial: Called with the annotations of each partial parse and the
            offset they extend to, e.g. `DefaultsContext.maybe_fetch_default_values`
        settings: Editor settings
    """

    parse: Parser
    context: Any = None
    on_partial: Callable[[tuple[Annotation, ...], int], None] | None = None
    settings: EditorSettings = Factory(EditorSettings)

    @classmethod
    def create(
        cls,
        parser: Parser,
        context: Any = None,
        settings: EditorSettings | None = None,
    ) -> "CommandProcessor":
        """
        Wrap `parser` according to `settings`.

        Contexts with a `maybe_fetch_default_values` method are notified of
        every partial parse.
        """
        settings = settings or EditorSettings()
        if settings.filter_space_completions:
            parser = filter_completions(parser)
        if settings.check_invariants:
            parser = check_invariants(parser)
        on_partial = getattr(context, "maybe_fetch_default_values", None)
        return cls(parser, context, on_partial, settings)

    def run(self, text: str) -> ParseResult:
        return self.parse(text, Success.initial(self.context))

    def partial(self, annotations: tuple[Annotation, ...], end: int) -> None:
        if self.on_partial is not None:
            self.on_partial(annotations, end)


@frozen
class CompletionResult:
    """
    Outcome of a completion request.

    Params:
        before: Text before the caret after completing
        after: Text after the caret after completing
        completions: Choices to show when there was no unique completion
        annotations: Annotations of the resulting partial parse
        failure_end: Offset the choices in `completions` apply at
    """

    before: str
    after: str
    completions: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    failure_end: int | None = None

    @property
    def text(self) -> str:
        return self.before + self.after


def complete(processor: CommandProcessor, before: str, after: str = "") -> CompletionResult:
    """
    Extend the text before the caret as far as its completion is unique.

    Stop as soon as there is no unique completion or a complete parse longer
    than the original input is reached. If there is no unique completion to
    begin with, return the choices instead.

    Params:
        processor: Processor to parse with
        before: Text before the caret
        after: Text after the caret; the part of it that the extension
            duplicates is consumed

    Returns:
        CompletionResult describing the new text or the choices to show
    """
    successes, failure = processor.run(before)
    if failure is None or failure.end < len(before):
        return CompletionResult(before, after, annotations=partial_annotations(successes, failure))

    unique = unique_completion(failure)
    if not unique:
        return CompletionResult(
            before,
            after,
            tuple(failure.completions),
            failure.annotations,
            failure.end,
        )

    extension = ""
    for _ in range(processor.settings.completion_limit):
        extension += unique
        successes, failure = processor.run(before + extension)
        size = len(before) + len(extension)
        unique = unique_completion(failure) if failure is not None and failure.end == size else ""
        if not unique or any(s.end >= size for s in successes):
            break

    common = string_match_forward(after, extension)
    new_before = before + extension
    annotations = partial_annotations(successes, failure)
    processor.partial(annotations, len(new_before))
    return CompletionResult(new_before, after[common:], annotations=annotations)


def check_insertion(processor: CommandProcessor, before: str, proposed: str) -> tuple[bool, bool]:
    """
    Check whether typing `proposed` after `before` keeps the input parseable.

    Returns:
        Tuple of (progress, valid): progress is true if some branch of the
        parse reaches the end of the new input, and valid is true if some
        success ends exactly there
    """
    full_text = before + proposed
    full_length = len(full_text)
    successes, failure = processor.run(full_text)
    if furthest_success(successes) < full_length and (failure is None or failure.end < full_length):
        return False, False
    processor.partial(partial_annotations(successes, failure), full_length)
    return True, bool(valid_parses(full_length, successes))


def insert_character(processor: CommandProcessor, before: str, character: str) -> tuple[str | None, bool]:
    """
    Decide what typing `character` after `before` should insert.

    The character is accepted as typed if possible, else with its case
    swapped, else not at all.

    Returns:
        Tuple of (inserted, valid): the accepted character or None, and
        whether the resulting input is a complete parse
    """
    for candidate in dict.fromkeys((character, to_other_case(character))):
        progress, valid = check_insertion(processor, before, candidate)
        if progress:
            return candidate, valid
    return None, False
