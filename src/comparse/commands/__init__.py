"""
comparse command grammars.

This package provides parsers for commands with positional and keyword
parameters, the declarative grammar compiler, and parse contexts that
supply parameter defaults.
"""

from comparse.commands.context import CommandContext
from comparse.commands.defaults import DefaultsContext
from comparse.commands.definitions import (
    CommandDefinition,
    Grammar,
    ParameterDefinition,
    compile_command,
    find_command,
    load_grammar,
    load_grammar_file,
    parse_command_from_grammar,
)
from comparse.commands.grammar import (
    Command,
    ParameterSpec,
    mps,
    parse_command,
    parse_keyword_and_value,
    parse_keyword_parameters,
    parse_parameter_value,
    parse_positional_parameters,
)

__all__ = [
    "Command",
    "CommandContext",
    "CommandDefinition",
    "DefaultsContext",
    "Grammar",
    "ParameterDefinition",
    "ParameterSpec",
    "compile_command",
    "find_command",
    "load_grammar",
    "load_grammar_file",
    "mps",
    "parse_command",
    "parse_command_from_grammar",
    "parse_keyword_and_value",
    "parse_keyword_parameters",
    "parse_parameter_value",
    "parse_positional_parameters",
]
