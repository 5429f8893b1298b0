"""
comparse parser combinators.

This package provides the combinator algebra: primitives, repetition,
completion derivation, annotation wiring and optional diagnostics.
"""

from comparse.parsing.annotation import annotate, with_context, with_help
from comparse.parsing.completions import (
    merge_failures,
    normalize_completions,
    pause_mark,
    with_completions,
    without_completions,
)
from comparse.parsing.diagnostics import check_invariants, log_parser
from comparse.parsing.primitives import (
    ForwardParser,
    alternatives,
    chain,
    choice,
    constant,
    delayed,
    empty,
    fail,
    filter_,
    filter_witness,
    maybe,
    restricted_regexp,
    sequence,
    string_match_forward,
    then,
    transform,
    with_fallback,
)
from comparse.parsing.repetition import non_empty, optional, plus, separated, star, subset

__all__ = [
    "ForwardParser",
    "alternatives",
    "annotate",
    "chain",
    "check_invariants",
    "choice",
    "constant",
    "delayed",
    "empty",
    "fail",
    "filter_",
    "filter_witness",
    "log_parser",
    "maybe",
    "merge_failures",
    "non_empty",
    "normalize_completions",
    "optional",
    "pause_mark",
    "plus",
    "restricted_regexp",
    "separated",
    "sequence",
    "star",
    "string_match_forward",
    "subset",
    "then",
    "transform",
    "with_completions",
    "with_context",
    "with_fallback",
    "with_help",
    "without_completions",
]
