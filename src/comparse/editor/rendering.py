"""
Turning annotations into something to display.

`segments` divides the input into highlighted runs, one per annotation of
interest. The other helpers find the parameter values that an editor should
show candidates or chosen values for.
"""

from collections.abc import Collection, Iterable

from attrs import frozen

from comparse.core.results import Annotation

HIGHLIGHTED_TAGS = frozenset({"command-name", "parameter-name", "parameter-value"})


@frozen
class Segment:
    """A run of input text, tagged with the construct it belongs to, if any."""

    tag: str | None
    start: int
    end: int

    def text(self, input: str) -> str:
        return input[self.start : self.end]


def segments(annotations: Iterable[Annotation], size: int) -> list[Segment]:
    """
    Divide [0, size) into segments following `annotations`.

    The first annotation starting at each offset represents that offset.
    Overlapping representatives end the division early; the rest of the
    input becomes one untagged segment.
    """
    representatives: dict[int, Annotation] = {}
    for annotation in annotations:
        representatives.setdefault(annotation.start, annotation)

    result = []
    i = 0
    for annotation in sorted(representatives.values(), key=lambda a: a.start):
        if i > annotation.start:
            break
        if i < annotation.start:
            result.append(Segment(None, i, annotation.start))
        result.append(Segment(annotation.label.tag, annotation.start, annotation.end))
        i = annotation.end
    result.append(Segment(None, i, size))
    return result


def highlighted_segments(
    annotations: Iterable[Annotation], size: int, tags: Collection[str] = HIGHLIGHTED_TAGS
) -> list[Segment]:
    return segments((a for a in annotations if a.label.tag in tags), size)


def current_parameter_value(annotations: Iterable[Annotation], position: int) -> Annotation | None:
    """Return the parameter value annotation containing `position`, if any."""
    return next(
        (a for a in annotations if a.label.tag == "parameter-value" and a.contains(position)),
        None,
    )


def parameter_values_with_witness(annotations: Iterable[Annotation]) -> list[Annotation]:
    return [a for a in annotations if a.label.tag == "parameter-value" and a.label.witness]


def show_candidates(annotations: tuple[Annotation, ...], position: int) -> None:
    """Call the `show_candidates` hook of the parameter under the caret."""
    parameter = current_parameter_value(annotations, position)
    if parameter is None or parameter.label.type is None:
        return
    hook = parameter.label.type.show_candidates
    if hook is not None:
        hook(annotations, position, parameter)


def show_choices(annotations: tuple[Annotation, ...], position: int) -> None:
    """Call the `show_choices` hook of every parsed parameter value."""
    for parameter in parameter_values_with_witness(annotations):
        if parameter.label.type is None:
            continue
        hook = parameter.label.type.show_choices
        if hook is not None:
            hook(parameter, position)


def show_candidates_and_choices(annotations: tuple[Annotation, ...], position: int) -> None:
    show_candidates(annotations, position)
    show_choices(annotations, position)
