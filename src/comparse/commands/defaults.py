"""
Default values as completions.

When a command edits an existing object, the object's current field values
make good completions for the command's parameters. The command's key
parameter identifies the object. Once its value has been typed, the editor
calls `maybe_fetch_default_values`, which fetches the object's values and
caches them for a while. While parsing, `parse_defaults` offers each cached
value, unparsed, as an alternative to the parameter's normal parser.

Fetching is delegated to a caller-supplied function so that the transport
stays outside this package.
"""

import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from comparse.commands.context import CommandContext
from comparse.commands.definitions import Grammar, load_grammar
from comparse.config import EditorSettings
from comparse.core.results import Annotation, ParseResult, Parser, Success
from comparse.exceptions import DefaultsFetchError
from comparse.parsing import choice, constant

logger = logging.getLogger(__name__)

Fetcher = Callable[[Sequence[str]], Mapping[str, Mapping[str, Any]]]


def _is_key_parameter_value(command_name: str | None, key_parameter: str):
    def predicate(annotation: Annotation) -> bool:
        label = annotation.label
        return (
            label.tag == "parameter-value"
            and label.name == key_parameter
            and (command_name is None or label.command_name == command_name)
        )

    return predicate


class DefaultsContext(CommandContext):
    """
    Command context that offers cached default values as completions.

    Params:
        grammar: Grammar whose commands may declare a key parameter
        fetch: Called with identifiers, returns a mapping from each identifier
            to its field values; raises `DefaultsFetchError` on failure
        settings: Editor settings, for the cache timeout
        clock: Returns the current time in seconds
    """

    def __init__(
        self,
        grammar: Grammar | Mapping[str, Any] | list,
        fetch: Fetcher | None = None,
        settings: EditorSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.grammar = load_grammar(grammar)
        self.fetch = fetch
        self.timeout = (settings or EditorSettings()).defaults_cache_timeout_seconds
        self.clock = clock
        self.defaults_cache: dict[str, dict[str, Any]] = {}

    def default(self, identifier: str, parameter_name: str) -> Any:
        if not self.is_id_cached(identifier):
            return None
        return self.defaults_cache[identifier]["value"].get(parameter_name)

    def key_parameter(self, command_name: str) -> str | None:
        command = self.grammar.find(command_name)
        return command.key_parameter if command else None

    def key_value_to_ids(self, witness: Any) -> list[str]:
        """
        Convert a key parameter's witness into identifiers.

        Normally the witness is one identifier. Override this to support
        several identifiers, and therefore several defaults.
        """
        return [witness] if witness else []

    def parse_defaults(self, command_name: str, parameter_name: str, presentation_type) -> Parser:
        def parse(input: str, success: Success) -> ParseResult:
            key_parameter = self.key_parameter(command_name)
            if key_parameter:
                key_value = next(
                    filter(_is_key_parameter_value(command_name, key_parameter), success.annotations),
                    None,
                )
                if key_value is not None:
                    defaults = []
                    for identifier in self.key_value_to_ids(key_value.label.witness):
                        default_value = self.default(identifier, parameter_name)
                        if default_value:
                            defaults.append(default_value)
                    parser = choice(
                        presentation_type.parse,
                        *(constant(presentation_type.unparse(d), d) for d in defaults),
                    )
                    return parser(input, success)
            return presentation_type.parse(input, success)

        return parse

    def is_id_cached(self, identifier: str) -> bool:
        entry = self.defaults_cache.get(identifier)
        if entry is None or "received" not in entry:
            return False
        return self.clock() - entry["received"] < self.timeout

    def is_id_pending(self, identifier: str) -> bool:
        return "pending" in self.defaults_cache.get(identifier, {})

    def mark_id_pending(self, identifier: str) -> None:
        self.defaults_cache[identifier] = {"pending": self.clock()}

    def remember_id(self, identifier: str, value: Mapping[str, Any]) -> None:
        self.defaults_cache[identifier] = {"received": self.clock(), "value": dict(value)}

    def receive_defaults(self, defaults: Mapping[str, Mapping[str, Any]]) -> None:
        """Cache the field values of each identifier in `defaults`."""
        for identifier, value in defaults.items():
            self.remember_id(identifier, value)
        logger.debug("Cached default values for %s", ", ".join(defaults))

    def ids_to_fetch(self, annotations: Iterable[Annotation], end: int) -> list[str]:
        """
        Return the identifiers whose defaults should be fetched now.

        Only identifiers named by a complete key parameter value, one the
        caret at `end` is not inside, that are neither cached nor pending.
        """
        annotations = list(annotations)
        command = next((a for a in annotations if a.label.tag == "command-name"), None)
        if command is None:
            return []
        key_parameter = self.key_parameter(command.label.name)
        if not key_parameter:
            return []
        key_value = next(
            filter(_is_key_parameter_value(command.label.name, key_parameter), annotations),
            None,
        )
        if key_value is None or not key_value.label.has_witness:
            return []
        if key_value.start <= end <= key_value.end:
            return []
        return [
            identifier
            for identifier in self.key_value_to_ids(key_value.label.witness)
            if identifier and not self.is_id_pending(identifier) and not self.is_id_cached(identifier)
        ]

    def maybe_fetch_default_values(self, annotations: Iterable[Annotation], end: int) -> None:
        """
        Fetch the defaults for the object the command being typed acts on.

        Identifiers stay marked pending if the fetch fails, so they are not
        requested again on every keystroke.
        """
        to_fetch = self.ids_to_fetch(annotations, end)
        if not to_fetch or self.fetch is None:
            return
        for identifier in to_fetch:
            self.mark_id_pending(identifier)
        try:
            defaults = self.fetch(to_fetch)
        except DefaultsFetchError as e:
            logger.warning("Failed to retrieve existing values for edit operation: %s", e)
            return
        self.receive_defaults(defaults)
