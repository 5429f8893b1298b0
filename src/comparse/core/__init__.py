"""
Core comparse value types.

This package provides the immutable result model shared by every parser:
successes, failures, annotations and their labels.
"""

from comparse.core.labels import (
    NO_WITNESS,
    CommandName,
    Help,
    Label,
    ParameterName,
    ParameterValue,
    Tagged,
)
from comparse.core.results import (
    Annotation,
    Failure,
    ParseResult,
    Parser,
    Success,
    furthest_success,
    merge_annotations,
    merge_success_annotations,
)

__all__ = [
    "NO_WITNESS",
    "Annotation",
    "CommandName",
    "Failure",
    "Help",
    "Label",
    "ParameterName",
    "ParameterValue",
    "ParseResult",
    "Parser",
    "Success",
    "Tagged",
    "furthest_success",
    "merge_annotations",
    "merge_success_annotations",
]
