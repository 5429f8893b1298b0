"""
Declarative command grammars.

A grammar is a list of command definitions, written as Python data or YAML,
validated with pydantic and compiled into a single parser that accepts any
of the commands. Parameters are given either as a bare name, which takes the
string type, or as a `[name, type]` pair naming a registered presentation
type.

Example YAML:
    commands:
      - name: launch
        positional: [rocket]
        optional: [[delay, non-negative-integer]]
        key_parameter: rocket
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from comparse.commands.grammar import ParameterSpec, parse_command
from comparse.core.results import Parser
from comparse.exceptions import GrammarDefinitionError, UnknownPresentationTypeError
from comparse.parsing import check_invariants, choice
from comparse.values import PRESENTATION_TYPES, PresentationType

logger = logging.getLogger(__name__)


class ParameterDefinition(BaseModel):
    """A parameter as written in a grammar."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type: str = "string"
    help: str | None = None

    @model_validator(mode="before")
    @classmethod
    def from_shorthand(cls, data: Any) -> Any:
        """Accept `"name"` and `["name", "type"]` as well as mappings."""
        if isinstance(data, str):
            return {"name": data}
        if isinstance(data, (list, tuple)):
            if not 1 <= len(data) <= 3:
                raise ValueError(f"expected [name, type] or [name, type, help], got {data!r}")
            return dict(zip(("name", "type", "help"), data))
        return data


class CommandDefinition(BaseModel):
    """
    A command as written in a grammar.

    Params:
        name: Command name
        positional: Required parameters given by position
        optional: Keyword parameters that may be omitted
        preferred: Required keyword parameters offered first as completions
        required: Other required keyword parameters
        key_parameter: Parameter whose value identifies the object the command
            acts on, used to look up default values
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    positional: list[ParameterDefinition] = Field(default_factory=list)
    optional: list[ParameterDefinition] = Field(default_factory=list)
    preferred: list[ParameterDefinition] = Field(default_factory=list)
    required: list[ParameterDefinition] = Field(default_factory=list)
    key_parameter: str | None = None

    @field_validator("name")
    @classmethod
    def name_has_no_whitespace(cls, name: str) -> str:
        if any(c.isspace() for c in name):
            raise ValueError("command names cannot contain whitespace")
        return name

    @property
    def parameters(self) -> list[ParameterDefinition]:
        return [*self.positional, *self.optional, *self.preferred, *self.required]

    @model_validator(mode="after")
    def parameter_names_are_unique(self) -> "CommandDefinition":
        names = [p.name for p in self.parameters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate parameter names: {', '.join(duplicates)}")
        if self.key_parameter is not None and self.key_parameter not in names:
            raise ValueError(f"key parameter '{self.key_parameter}' is not a parameter")
        return self


class Grammar(BaseModel):
    """A set of command definitions with unique names."""

    model_config = ConfigDict(frozen=True)

    commands: list[CommandDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def command_names_are_unique(self) -> "Grammar":
        names = [c.name for c in self.commands]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate command names: {', '.join(duplicates)}")
        return self

    def find(self, command_name: str) -> CommandDefinition | None:
        """Return the definition of `command_name`, or None."""
        return next((c for c in self.commands if c.name == command_name), None)


def find_command(command_name: str, grammar: Grammar) -> CommandDefinition | None:
    return grammar.find(command_name)


def load_grammar(source: Grammar | Mapping[str, Any] | list) -> Grammar:
    """
    Validate a grammar given as a mapping or as a bare list of commands.

    Raises:
        GrammarDefinitionError: If the grammar is invalid
    """
    if isinstance(source, Grammar):
        return source
    if isinstance(source, list):
        source = {"commands": source}
    try:
        return Grammar.model_validate(source)
    except ValidationError as e:
        raise GrammarDefinitionError(None, str(e)) from e


def load_grammar_file(yaml_path: str | Path) -> Grammar:
    """Load and validate a grammar from a YAML file."""
    import yaml

    path = Path(yaml_path)
    with path.open() as f:
        data = yaml.safe_load(f) or {}

    return load_grammar(data)


def _parameter_specs(
    command: CommandDefinition,
    definitions: list[ParameterDefinition],
    types: Mapping[str, PresentationType],
) -> list[ParameterSpec]:
    specs = []
    for definition in definitions:
        if definition.type not in types:
            raise UnknownPresentationTypeError(command.name, definition.type, types.keys())
        specs.append(ParameterSpec(definition.name, types[definition.type], definition.help))
    return specs


def compile_command(
    command: CommandDefinition, types: Mapping[str, PresentationType] = PRESENTATION_TYPES
) -> Parser:
    """
    Compile one command definition into a parser.

    Raises:
        UnknownPresentationTypeError: If a parameter names an unknown type
    """
    parser = parse_command(
        command.name,
        _parameter_specs(command, command.positional, types),
        _parameter_specs(command, command.optional, types),
        _parameter_specs(command, command.preferred, types),
        _parameter_specs(command, command.required, types),
    )
    logger.debug(
        "Compiled command %s with parameters %s",
        command.name,
        [p.name for p in command.parameters],
    )
    return parser


def parse_command_from_grammar(
    grammar: Grammar | Mapping[str, Any] | list,
    types: Mapping[str, PresentationType] = PRESENTATION_TYPES,
    check: bool = False,
) -> Parser:
    """
    Return a parser accepting any command in `grammar`.

    Params:
        grammar: Grammar model, or data `load_grammar` accepts
        types: Presentation types that parameter definitions may name
        check: Wrap the parser in `check_invariants`

    Raises:
        GrammarDefinitionError: If the grammar is invalid or names unknown types
    """
    grammar = load_grammar(grammar)
    parser = choice(*(compile_command(c, types) for c in grammar.commands))
    return check_invariants(parser) if check else parser
