"""
Headless editor support.

This package provides the keystroke-level logic of an interactive command
line (completion, insertion checks, highlighting segments) independent of
any user interface toolkit.
"""

from comparse.editor.completion import (
    CommandProcessor,
    CompletionResult,
    check_insertion,
    complete,
    filter_completions,
    insert_character,
    partial_annotations,
    to_other_case,
    unique_completion,
    valid_parses,
)
from comparse.editor.rendering import (
    HIGHLIGHTED_TAGS,
    Segment,
    current_parameter_value,
    highlighted_segments,
    parameter_values_with_witness,
    segments,
    show_candidates,
    show_candidates_and_choices,
    show_choices,
)

__all__ = [
    "HIGHLIGHTED_TAGS",
    "CommandProcessor",
    "CompletionResult",
    "Segment",
    "check_insertion",
    "complete",
    "current_parameter_value",
    "filter_completions",
    "highlighted_segments",
    "insert_character",
    "parameter_values_with_witness",
    "partial_annotations",
    "segments",
    "show_candidates",
    "show_candidates_and_choices",
    "show_choices",
    "to_other_case",
    "unique_completion",
    "valid_parses",
]
