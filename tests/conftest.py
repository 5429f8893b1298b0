"""
Shared test fixtures and utilities for the comparse test suite.
"""

import pytest

from comparse.core.results import Success
from comparse.values import PRESENTATION_TYPES, enumeration_type


def run(parser, text, context=None):
    """Run `parser` on `text` from the start, as a top-level caller would."""
    return parser(text, Success.initial(context))


def ends(successes):
    return sorted(s.end for s in successes)


def at_end(successes, text):
    """Successes that consumed all of `text`."""
    return [s for s in successes if s.end == len(text)]


@pytest.fixture
def rocket_type():
    """Enumeration of rocket names, as in the rocket launch demo grammar."""
    return enumeration_type({"apollo": "apollo", "atlas": "atlas"}, "name of a rocketship")


@pytest.fixture
def rocket_types(rocket_type):
    return {**PRESENTATION_TYPES, "rocket": rocket_type}


@pytest.fixture
def rocket_grammar():
    """Grammar of the rocket launch demo, in declarative form."""
    return {
        "commands": [
            {"name": "launch", "positional": [["rocket", "rocket"]], "optional": [["delay", "non-negative-integer"]]},
            {"name": "land", "positional": [["rocket", "rocket"]]},
            {
                "name": "fuel",
                "preferred": [["rocket", "rocket"]],
                "optional": ["note"],
            },
        ]
    }
