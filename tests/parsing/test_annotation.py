"""
Tests for annotate, with_help and with_context.
"""

from conftest import run

from comparse.core.labels import CommandName, Help, Tagged
from comparse.core.results import Annotation, Success
from comparse.parsing import annotate, constant, then, with_context, with_help


class TestAnnotate:
    """Tests for annotate."""

    def test_success_gets_span_and_witness(self):
        successes, _ = run(annotate(CommandName("launch"), constant("launch")), "launch")
        assert successes[0].annotations == (Annotation(CommandName("launch", witness="launch"), 0, 6),)

    def test_failure_gets_bare_label(self):
        _, failure = run(annotate(CommandName("launch"), constant("launch")), "lau")
        assert failure.annotations == (Annotation(CommandName("launch"), 0, 3),)
        assert not failure.annotations[0].label.has_witness

    def test_span_starts_at_resume_point(self):
        parser = then(lambda a, b: b, constant("> "), annotate(Tagged("word", {}), constant("hi")))
        successes, _ = run(parser, "> hi")
        assert successes[0].annotations == (Annotation(Tagged("word", {}, witness="hi"), 2, 4),)

    def test_outer_annotations_come_first(self):
        parser = annotate(Help("outer"), annotate(Help("inner"), constant("x")))
        successes, _ = run(parser, "x")
        assert [a.label.help_text for a in successes[0].annotations] == ["outer", "inner"]

    def test_earlier_annotations_are_kept(self):
        earlier = Annotation(Help("earlier"), 0, 1)
        successes, _ = annotate(Help("later"), constant("y"))("xy", Success((earlier,), None, 1, None))
        assert successes[0].annotations[1] == earlier


class TestWithHelp:
    def test_help_annotation(self):
        successes, _ = run(with_help(constant("7"), "a number"), "7")
        assert successes[0].annotations == (Annotation(Help("a number", witness="7"), 0, 1),)


class TestWithContext:
    """Tests for with_context."""

    def test_replaces_context(self):
        parser = with_context(lambda s: {"seen": s.witness}, constant("x"))
        successes, _ = run(parser, "x", context={})
        assert successes[0].context == {"seen": "x"}

    def test_new_context_flows_to_continuation(self):
        """Later parsers see the context set by earlier ones."""
        seen = []

        def record(input, success):
            seen.append(success.context)
            return [success], None

        parser = then(lambda a, b: a, with_context(lambda s: "changed", constant("x")), record)
        run(parser, "x", context="original")
        assert seen == ["changed"]
