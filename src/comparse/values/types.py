"""
Presentation types.

A presentation type bundles everything the command layer needs to know about
one value domain: how to parse a value, how to describe it, how to print a
value back as input text, and optional hooks an editor can call to show
candidate or chosen values.
"""

from collections.abc import Callable, Mapping
from typing import Any

from attrs import frozen

from comparse.core.results import Parser
from comparse.parsing import choice, constant


@frozen
class PresentationType:
    """
    Value domain description used by command parameters.

    Params:
        parse: Parser for values of this type
        help: Short description shown as help text (e.g. "an integer")
        show_candidates: Optional hook `(annotations, position, annotation)`
            called while the caret is inside a value of this type
        show_choices: Optional hook `(annotation, position)` called for each
            value of this type that has been parsed
        unparse: Converts a witness back into input text
    """

    parse: Parser
    help: str
    show_candidates: Callable[..., Any] | None = None
    show_choices: Callable[..., Any] | None = None
    unparse: Callable[[Any], str] = str


def make_presentation_type(
    parse: Parser,
    help: str,
    *,
    show_candidates: Callable[..., Any] | None = None,
    show_choices: Callable[..., Any] | None = None,
    unparse: Callable[[Any], str] = str,
) -> PresentationType:
    return PresentationType(parse, help, show_candidates, show_choices, unparse)


def enumeration_type(names: Mapping[str, Any], help: str) -> PresentationType:
    """
    Return a presentation type accepting exactly the given names.

    Params:
        names: Maps each accepted name to the witness it produces
        help: Help text for the type
    """
    witnesses_to_names = {}
    for name, witness in names.items():
        witnesses_to_names.setdefault(witness, name)

    return make_presentation_type(
        choice(*(constant(name, witness) for name, witness in names.items())),
        help,
        unparse=lambda witness: witnesses_to_names.get(witness, str(witness)),
    )
