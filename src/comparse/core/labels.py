"""
Annotation labels for the comparse parser engine.

A label names the grammar construct that an annotated span of input is an
instance of. Labels form a small tagged union: one attrs class per tag that
the command layer produces, plus `Tagged` for caller-defined tags. Consumers
dispatch on `label.tag`; the combinators themselves never do.
"""

from typing import Any

from attrs import evolve, field, frozen
from inflection import dasherize, underscore


class _NoWitness:
    """Marker for a label whose witness has not been attached yet."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_WITNESS"

    def __bool__(self) -> bool:
        return False


NO_WITNESS: Any = _NoWitness()


@frozen
class Label:
    """
    Base class for all annotation labels.

    The witness is attached by `annotate` once the annotated parser has
    succeeded. Labels on failure annotations never carry one.
    """

    witness: Any = field(default=NO_WITNESS, kw_only=True)

    @property
    def tag(self) -> str:
        """Tag derived from the class name (e.g. ``ParameterValue`` -> ``parameter-value``)."""
        return dasherize(underscore(type(self).__name__))

    @property
    def has_witness(self) -> bool:
        return self.witness is not NO_WITNESS

    def with_witness(self, witness: Any) -> "Label":
        """Return a copy of this label carrying `witness`."""
        return evolve(self, witness=witness)


@frozen
class Help(Label):
    """Explanatory text for the annotated span."""

    help_text: str


@frozen
class CommandName(Label):
    name: str


@frozen
class ParameterName(Label):
    command_name: str
    name: str


@frozen
class ParameterValue(Label):
    """
    Value of a command parameter.

    Params:
        command_name: Name of the command owning the parameter
        name: Parameter name
        type: Presentation type describing the parameter's value domain
    """

    command_name: str
    name: str
    type: Any = None


@frozen
class Tagged(Label):
    """Caller-defined label with an arbitrary tag and field mapping."""

    tag_name: str
    fields: dict[str, Any] = field(factory=dict)

    @property
    def tag(self) -> str:
        return self.tag_name

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]
