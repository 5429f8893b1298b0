"""
Parsers for commands with positional and keyword parameters.

A command is its name followed by whitespace-prefixed positional parameter
values, all required, then keyword parameters as `name value` pairs in any
order, each at most once. Command names, parameter names and parameter
values are all annotated so that an editor can highlight them and find the
parameter under the caret.
"""

from collections.abc import Sequence
from typing import Any

from attrs import field, frozen

from comparse.core.labels import CommandName, ParameterName, ParameterValue
from comparse.core.results import Failure, ParseResult, Parser, Success
from comparse.parsing import (
    annotate,
    chain,
    choice,
    constant,
    empty,
    optional as parse_optional,
    sequence,
    transform,
    with_completions,
    with_help,
)
from comparse.values import STRING_TYPE, PresentationType, parse_whitespace, whitespace_prefixed


@frozen
class ParameterSpec:
    """
    Description of one command parameter.

    Params:
        name: Parameter name, also the keyword for keyword parameters
        type: Presentation type of the parameter's value
        help: Help text, the type's help by default
    """

    name: str
    type: PresentationType = STRING_TYPE
    help: str | None = None


def mps(name: str, type: PresentationType = STRING_TYPE, help: str | None = None) -> ParameterSpec:
    return ParameterSpec(name, type, help)


@frozen
class Command:
    """Witness of a parsed command."""

    name: str
    parameters: dict[str, Any] = field(factory=dict)


def add_parameter_help(parameter_spec: ParameterSpec, parser: Parser) -> Parser:
    help_text = parameter_spec.help or parameter_spec.type.help
    return with_help(parser, help_text) if help_text else parser


def parse_defaults(
    command_name: str, parameter_name: str, presentation_type: PresentationType
) -> Parser:
    """Parse a value using the parser the current context supplies for it."""

    def parse(input: str, success: Success) -> ParseResult:
        context = success.context
        if context is None:
            parser = presentation_type.parse
        else:
            parser = context.parse_defaults(command_name, parameter_name, presentation_type)
        return parser(input, success)

    return parse


def parse_parameter_value(command_name: str, parameter_spec: ParameterSpec) -> Parser:
    name = parameter_spec.name
    value_type = parameter_spec.type
    return add_parameter_help(
        parameter_spec,
        annotate(
            ParameterValue(command_name, name, value_type),
            parse_defaults(command_name, name, value_type),
        ),
    )


def parse_keyword_and_value(
    command_name: str, preferred_names: Sequence[str], parameter_specs: Sequence[ParameterSpec]
) -> Parser:
    """
    Parse whitespace followed by one keyword and its value.

    When nothing of a keyword has been typed yet, only `preferred_names` are
    offered as completions, if there are any.
    """

    def make_completions(context, name_failure: Failure | None, start: int) -> list[str]:
        if name_failure is None:
            return []
        if name_failure.end > start or not preferred_names:
            return list(name_failure.completions)
        return list(preferred_names)

    return choice(
        *(
            sequence(
                lambda ws1, name, ws2, value: (name, value),
                parse_whitespace,
                with_completions(
                    make_completions,
                    annotate(ParameterName(command_name, ps.name), constant(ps.name)),
                ),
                parse_whitespace,
                parse_parameter_value(command_name, ps),
            )
            for ps in parameter_specs
        )
    )


def parse_keyword_parameters(
    command_name: str,
    optional_specs: Sequence[ParameterSpec],
    preferred_specs: Sequence[ParameterSpec],
    required_specs: Sequence[ParameterSpec],
) -> Parser:
    """
    Parse the keyword parameters of `command_name`.

    Preferred parameters are required, and are the only keywords offered as
    completions while none has been typed. Each keyword is removed from the
    candidates once used, so none can repeat. The witness is a list of
    `(name, value)` pairs in textual order.
    """
    parameter_specs = (*optional_specs, *preferred_specs, *required_specs)
    preferred_names = tuple(ps.name for ps in preferred_specs)
    required_names = (*preferred_names, *(ps.name for ps in required_specs))

    def next_parser(specs, preferred, required) -> Parser:
        if not specs:
            return empty([])

        def remaining(success: Success) -> Parser:
            name, _ = success.witness
            return next_parser(
                tuple(ps for ps in specs if ps.name != name),
                tuple(n for n in preferred if n != name),
                tuple(n for n in required if n != name),
            )

        parser = chain(
            lambda pair, rest: [pair, *rest],
            parse_keyword_and_value(command_name, preferred, specs),
            remaining,
        )
        return parser if required else parse_optional(parser, [])

    return next_parser(parameter_specs, preferred_names, required_names)


def parse_positional_parameters(command_name: str, positional: Sequence[ParameterSpec]) -> Parser:
    """Parse whitespace-prefixed values for every positional parameter, in order."""
    return transform(
        whitespace_prefixed([parse_parameter_value(command_name, ps) for ps in positional]),
        lambda witnesses: [(ps.name, w) for ps, w in zip(positional, witnesses)],
    )


def parse_command(
    name: str,
    positional: Sequence[ParameterSpec] = (),
    optional: Sequence[ParameterSpec] = (),
    preferred: Sequence[ParameterSpec] = (),
    required: Sequence[ParameterSpec] = (),
) -> Parser:
    """
    Return a parser for the command `name` and its parameters.

    Params:
        name: Command name
        positional: Required parameters given by position, right after the name
        optional: Keyword parameters that may be omitted
        preferred: Required keyword parameters offered first as completions
        required: Other required keyword parameters

    Returns:
        Parser whose witness is a `Command`
    """
    return sequence(
        lambda command_name, positional_pairs, keyword_pairs: Command(
            command_name, dict([*positional_pairs, *keyword_pairs])
        ),
        annotate(CommandName(name), constant(name)),
        parse_positional_parameters(name, positional),
        parse_keyword_parameters(name, optional, preferred, required),
    )
