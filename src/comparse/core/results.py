"""
Parse result value types.

Each parser takes the input string and a `Success` marking where to resume,
and returns a list of `Success`es and either one `Failure` or None. The
top-level parser is given `Success.initial(context)`, whose end is zero.

Both successes and failures record where matching ended and the annotations
of the input discovered so far. Successes also record a witness (the value
representing what was parsed) and the caller's context. A failure is only
returned when it ends at or after every success; it lists the completions
possible at its end and whether that list is known to be incomplete (pause).
"""

from collections.abc import Callable, Iterable
from typing import Any

from attrs import Factory, evolve, field, frozen

from comparse.core.labels import Label


@frozen
class Annotation:
    """The substring [start, end) of the input is an instance of `label`."""

    label: Label
    start: int
    end: int

    def contains(self, position: int) -> bool:
        """Whether `position` lies within the span, end inclusive."""
        return self.start <= position <= self.end


@frozen
class Success:
    annotations: tuple[Annotation, ...] = field(converter=tuple)
    context: Any
    end: int
    witness: Any

    @classmethod
    def initial(cls, context: Any = None) -> "Success":
        """Starting point for a top-level parse."""
        return cls((), context, 0, None)

    def with_witness(self, witness: Any) -> "Success":
        return evolve(self, witness=witness)


def _default_pause(failure: "Failure") -> bool:
    return len(failure.completions) == 0


@frozen
class Failure:
    """
    Furthest point at which some branch of a parse stopped matching.

    Params:
        annotations: Annotations discovered on the way to `end`
        completions: Literal strings that would extend the match at `end`
        end: Offset at which matching stopped
        pause: True when `completions` is known to be incomplete; defaults to
            True exactly when there are no completions
    """

    annotations: tuple[Annotation, ...] = field(converter=tuple)
    completions: tuple[str, ...] = field(converter=tuple)
    end: int
    pause: bool = Factory(_default_pause, takes_self=True)

    def prepend_annotations(self, annotations: Iterable[Annotation]) -> "Failure":
        """Report this failure as if discovered before `annotations` were."""
        return evolve(self, annotations=(*annotations, *self.annotations))

    def replace_annotations(self, annotations: Iterable[Annotation]) -> "Failure":
        return evolve(self, annotations=tuple(annotations))

    def with_completions(self, completions: Iterable[str], pause: bool) -> "Failure":
        return evolve(self, completions=tuple(completions), pause=pause)


ParseResult = tuple[list[Success], Failure | None]

Parser = Callable[[str, Success], ParseResult]


def furthest_success(successes: Iterable[Success]) -> float:
    """Return the largest end among `successes`, or negative infinity if none."""
    return max((s.end for s in successes), default=float("-inf"))


def merge_annotations(
    annotations1: Iterable[Annotation], annotations2: Iterable[Annotation]
) -> tuple[Annotation, ...]:
    """
    Return the unique annotations from both sequences.

    Annotations are compared structurally rather than hashed since witnesses
    may be unhashable. First occurrences keep their order.
    """
    result: list[Annotation] = []
    for annotation in (*annotations1, *annotations2):
        if annotation not in result:
            result.append(annotation)
    return tuple(result)


def merge_success_annotations(successes: Iterable[Success]) -> tuple[Annotation, ...]:
    """Return the merged annotations of all `successes`."""
    result: tuple[Annotation, ...] = ()
    for success in successes:
        result = merge_annotations(result, success.annotations)
    return result
