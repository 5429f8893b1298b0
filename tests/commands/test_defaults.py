"""
Tests for DefaultsContext, which offers an object's current values as completions.
"""

import logging

import pytest
from conftest import at_end, run

from comparse.commands import Command, DefaultsContext, parse_command_from_grammar
from comparse.config import EditorSettings
from comparse.core.labels import CommandName, ParameterValue
from comparse.core.results import Annotation
from comparse.exceptions import DefaultsFetchError

GRAMMAR = {
    "commands": [
        {
            "name": "launch",
            "positional": ["rocket"],
            "optional": [["delay", "non-negative-integer"]],
            "key_parameter": "rocket",
        },
        {"name": "land", "positional": ["rocket"]},
    ]
}

TEXT = 'launch "apollo" delay 10'


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class RecordingFetcher:
    """Fetcher returning canned values and recording each request."""

    def __init__(self, values=None, error=None):
        self.values = values or {}
        self.error = error
        self.requests = []

    def __call__(self, identifiers):
        self.requests.append(list(identifiers))
        if self.error is not None:
            raise self.error
        return {i: self.values[i] for i in identifiers if i in self.values}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    return RecordingFetcher({"apollo": {"delay": 10}})


@pytest.fixture
def context(fetcher, clock):
    settings = EditorSettings(defaults_cache_timeout_seconds=60)
    return DefaultsContext(GRAMMAR, fetch=fetcher, settings=settings, clock=clock)


@pytest.fixture
def parser():
    return parse_command_from_grammar(GRAMMAR)


def key_annotations(command="launch", witness="apollo"):
    return [
        Annotation(CommandName(command, witness=command), 0, 6),
        Annotation(ParameterValue(command, "rocket", witness=witness), 7, 15),
    ]


class TestDefaultsParsing:
    """Tests for parsing with cached defaults."""

    def test_without_defaults(self, parser, context):
        successes, _ = run(parser, TEXT, context)
        assert len(at_end(successes, TEXT)) == 1

    def test_cached_default_is_an_extra_parse(self, parser, context):
        """The cached value is offered alongside the type's own parser."""
        context.receive_defaults({"apollo": {"delay": 10}})
        successes, _ = run(parser, TEXT, context)
        complete = at_end(successes, TEXT)
        assert len(complete) == 2
        assert all(s.witness == Command("launch", {"rocket": "apollo", "delay": 10}) for s in complete)

    def test_defaults_only_for_matching_key(self, parser, context):
        context.receive_defaults({"apollo": {"delay": 10}})
        successes, _ = run(parser, 'launch "atlas" delay 10', context)
        assert len(at_end(successes, 'launch "atlas" delay 10')) == 1

    def test_expired_defaults_are_ignored(self, parser, context, clock):
        context.receive_defaults({"apollo": {"delay": 10}})
        clock.now += 61
        successes, _ = run(parser, TEXT, context)
        assert len(at_end(successes, TEXT)) == 1
        assert context.default("apollo", "delay") is None


class TestDefaultsCache:
    """Tests for the defaults cache."""

    def test_default(self, context):
        context.remember_id("apollo", {"delay": 10})
        assert context.default("apollo", "delay") == 10
        assert context.default("apollo", "note") is None
        assert context.default("atlas", "delay") is None

    def test_pending(self, context):
        context.mark_id_pending("apollo")
        assert context.is_id_pending("apollo")
        assert not context.is_id_cached("apollo")

    def test_key_parameter(self, context):
        assert context.key_parameter("launch") == "rocket"
        assert context.key_parameter("land") is None
        assert context.key_parameter("orbit") is None

    def test_key_value_to_ids(self, context):
        assert context.key_value_to_ids("apollo") == ["apollo"]
        assert context.key_value_to_ids("") == []


class TestFetching:
    """Tests for ids_to_fetch and maybe_fetch_default_values."""

    def test_ids_to_fetch(self, context):
        assert context.ids_to_fetch(key_annotations(), 16) == ["apollo"]

    def test_not_while_typing_key(self, context):
        assert context.ids_to_fetch(key_annotations(), 15) == []

    def test_not_without_key_parameter(self, context):
        assert context.ids_to_fetch(key_annotations("land"), 16) == []

    def test_not_without_command(self, context):
        assert context.ids_to_fetch(key_annotations()[1:], 16) == []

    def test_not_without_witness(self, context):
        annotations = [key_annotations()[0], Annotation(ParameterValue("launch", "rocket"), 7, 10)]
        assert context.ids_to_fetch(annotations, 16) == []

    def test_fetches_once(self, context, fetcher):
        context.maybe_fetch_default_values(key_annotations(), 16)
        context.maybe_fetch_default_values(key_annotations(), 17)
        assert fetcher.requests == [["apollo"]]
        assert context.default("apollo", "delay") == 10

    def test_refetches_after_timeout(self, context, fetcher, clock):
        context.maybe_fetch_default_values(key_annotations(), 16)
        clock.now += 61
        context.maybe_fetch_default_values(key_annotations(), 16)
        assert fetcher.requests == [["apollo"], ["apollo"]]

    def test_failed_fetch_is_logged(self, clock, caplog):
        fetcher = RecordingFetcher(error=DefaultsFetchError(["apollo"], "service unavailable"))
        context = DefaultsContext(GRAMMAR, fetch=fetcher, clock=clock)

        with caplog.at_level(logging.WARNING, logger="comparse.commands.defaults"):
            context.maybe_fetch_default_values(key_annotations(), 16)
            context.maybe_fetch_default_values(key_annotations(), 16)

        assert fetcher.requests == [["apollo"]]
        assert context.is_id_pending("apollo")
        assert "Failed to retrieve existing values for edit operation" in caplog.text
        assert "service unavailable" in caplog.text

    def test_without_fetcher(self, clock):
        context = DefaultsContext(GRAMMAR, clock=clock)
        context.maybe_fetch_default_values(key_annotations(), 16)
        assert not context.is_id_pending("apollo")
