"""
Value presentation types.

This package provides parsers and presentation types for common value
domains: integers, double-quoted strings, yes/no and enumerations.
"""

from comparse.values.parsers import (
    DIGITS,
    INTEGER_TYPE,
    NON_NEGATIVE_INTEGER_TYPE,
    PRESENTATION_TYPES,
    STRING_TYPE,
    YES_NO_TYPE,
    comma_separated,
    integer_in_range,
    parse_comma,
    parse_integer,
    parse_non_negative_integer,
    parse_string,
    parse_whitespace,
    parse_yes_no,
    unparse_string,
    whitespace_prefixed,
    whitespace_separated,
)
from comparse.values.types import PresentationType, enumeration_type, make_presentation_type

__all__ = [
    "DIGITS",
    "INTEGER_TYPE",
    "NON_NEGATIVE_INTEGER_TYPE",
    "PRESENTATION_TYPES",
    "STRING_TYPE",
    "YES_NO_TYPE",
    "PresentationType",
    "comma_separated",
    "enumeration_type",
    "integer_in_range",
    "make_presentation_type",
    "parse_comma",
    "parse_integer",
    "parse_non_negative_integer",
    "parse_string",
    "parse_whitespace",
    "parse_yes_no",
    "unparse_string",
    "whitespace_prefixed",
    "whitespace_separated",
]
