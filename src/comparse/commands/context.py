"""
Base parse context for command grammars.
"""

from typing import Any

from comparse.core.results import Parser


class CommandContext:
    """
    Context consulted while parsing command parameter values.

    Subclasses can offer values known elsewhere, e.g. the current values of
    an object being edited, as extra completions for a parameter.
    """

    def default(self, identifier: str, parameter_name: str) -> Any:
        """Return the default value of `parameter_name` for `identifier`, or None."""
        return None

    def parse_defaults(self, command_name: str, parameter_name: str, presentation_type) -> Parser:
        """Return the parser for a parameter's value, defaults included."""
        return presentation_type.parse
