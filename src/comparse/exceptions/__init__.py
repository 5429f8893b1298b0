"""
comparse exception classes.

This package provides all exception types used throughout comparse for
consistent error handling and reporting.
"""

from comparse.exceptions.core import (
    ComparseError,
    DefaultsFetchError,
    GrammarDefinitionError,
    InvariantViolationError,
    UndefinedParserError,
    UnknownPresentationTypeError,
)

__all__ = [
    "ComparseError",
    "DefaultsFetchError",
    "GrammarDefinitionError",
    "InvariantViolationError",
    "UndefinedParserError",
    "UnknownPresentationTypeError",
]
