"""
Exception classes for comparse.

Parse failures are never exceptions: they are `Failure` values returned by
parsers. The exceptions here signal programmer errors, such as an invalid
declarative grammar or a parser that breaks the result contract while
diagnostics are enabled, and problems in collaborators like the defaults
fetcher.
"""

from collections.abc import Iterable


class ComparseError(Exception):
    """Base exception for all comparse errors."""

    pass


class GrammarDefinitionError(ComparseError):
    """Raised when a declarative grammar cannot be compiled into parsers."""

    def __init__(self, command_name: str | None, reason: str):
        """
        Initialize the exception.

        Params:
            command_name: Command whose definition is invalid, if known
            reason: Why the definition is invalid
        """
        self.command_name = command_name
        self.reason = reason
        if command_name:
            super().__init__(f"Invalid definition of command '{command_name}': {reason}")
        else:
            super().__init__(f"Invalid grammar: {reason}")


class UnknownPresentationTypeError(GrammarDefinitionError):
    """Raised when a grammar names a presentation type that is not registered."""

    def __init__(self, command_name: str | None, type_name: str, known: Iterable[str]):
        self.type_name = type_name
        self.known = sorted(known)
        super().__init__(
            command_name,
            f"unknown presentation type '{type_name}'. Known types are: {', '.join(self.known)}",
        )


class UndefinedParserError(ComparseError):
    """Raised when a forward-declared parser is invoked before being defined."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Parser '{name}' was used before being defined")


class InvariantViolationError(ComparseError):
    """Raised by the diagnostic layer when a parser result breaks the result contract."""

    def __init__(self, reason: str, input_text: str, start: int):
        """
        Initialize the exception.

        Params:
            reason: Which part of the contract was broken
            input_text: Input the parser was given
            start: Offset the parser started from
        """
        self.reason = reason
        self.input_text = input_text
        self.start = start
        super().__init__(f"Parser invariant violated at offset {start} of {input_text!r}: {reason}")


class DefaultsFetchError(ComparseError):
    """Raised by a defaults fetcher when values for some identifiers cannot be retrieved."""

    def __init__(self, identifiers: Iterable[str], reason: str):
        self.identifiers = list(identifiers)
        self.reason = reason
        super().__init__(
            f"Failed to retrieve default values for {', '.join(self.identifiers)}: {reason}"
        )
