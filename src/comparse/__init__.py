"""
comparse - a parser-combinator engine for interactive command lines.

comparse parses command text as it is typed, producing every valid parse of
an ambiguous grammar, the furthest failure together with completions that
would extend the input, and annotations telling which spans of the input
matched which grammar constructs.
"""

from importlib.metadata import version

from comparse.core import Annotation, Failure, Parser, Success
from comparse.parsing import annotate, chain, choice, constant, sequence, star

__version__ = version("comparse")

__all__ = [
    "__version__",
    "Annotation",
    "Failure",
    "Parser",
    "Success",
    "annotate",
    "chain",
    "choice",
    "constant",
    "sequence",
    "star",
]
