"""Tests for utterance label parsing and flattening."""

import pytest

from lucore.core.labels import LabelSyntaxError, flatten_labels, parse_label_tree
from lucore.core.resource import LabelNode


def flatten(text: str):
    return flatten_labels(parse_label_tree(text))


class TestParseLabelTree:
    """Splitting utterance text into plain segments and label nodes."""

    def test_plain_text(self) -> None:
        assert parse_label_tree("hello there") == ["hello there"]

    def test_single_label(self) -> None:
        segments = parse_label_tree("hi {userName=foo}")
        assert segments == [
            "hi ",
            LabelNode(entity="userName", parts=["foo"], has_value=True),
        ]

    def test_label_with_role(self) -> None:
        [node] = parse_label_tree("{city:from=Seattle}")
        assert isinstance(node, LabelNode)
        assert node.entity == "city"
        assert node.role == "from"

    def test_placeholder_has_no_value(self) -> None:
        [_, node] = parse_label_tree("book {toCity}")
        assert isinstance(node, LabelNode)
        assert node.has_value is False
        assert node.parts == []

    def test_escaped_braces_are_text(self) -> None:
        assert parse_label_tree(r"a \{b\}") == ["a {b}"]

    def test_unclosed_label(self) -> None:
        with pytest.raises(LabelSyntaxError, match="Missing closing"):
            parse_label_tree("hi {userName=foo")

    def test_unexpected_closing_brace(self) -> None:
        with pytest.raises(LabelSyntaxError) as exc_info:
            parse_label_tree("hi }")
        assert exc_info.value.column == 3

    def test_label_without_name(self) -> None:
        with pytest.raises(LabelSyntaxError, match="no entity name"):
            parse_label_tree("{=foo}")


class TestFlattenLabels:
    """Offsets are inclusive and refer to the flattened text."""

    def test_single_span(self) -> None:
        flat = flatten("hi {userName=foo}")
        assert flat.text == "hi foo"
        [span] = flat.spans
        assert (span.entity, span.start, span.end, span.value) == ("userName", 3, 5, "foo")

    def test_two_spans(self) -> None:
        flat = flatten("from {city=Seattle} to {city=Portland}")
        assert flat.text == "from Seattle to Portland"
        assert [(s.start, s.end) for s in flat.spans] == [(5, 11), (16, 23)]

    def test_value_is_trimmed(self) -> None:
        flat = flatten("{a=  x }")
        assert flat.text == "x"
        assert (flat.spans[0].start, flat.spans[0].end) == (0, 0)

    def test_nested_labels_keep_both_spans(self) -> None:
        flat = flatten("hi {userName=foo {firstName=bar}}")
        assert flat.text == "hi foo bar"
        inner, outer = flat.spans
        assert (inner.entity, inner.start, inner.end) == ("firstName", 7, 9)
        assert (outer.entity, outer.start, outer.end) == ("userName", 3, 9)

    def test_nested_child_shifted_by_trimmed_whitespace(self) -> None:
        flat = flatten("{outer=  {inner=x} y}")
        assert flat.text == "x y"
        inner, outer = flat.spans
        assert (inner.start, inner.end) == (0, 0)
        assert (outer.start, outer.end) == (0, 2)

    def test_placeholder_kept_verbatim(self) -> None:
        flat = flatten("book {toCity} now")
        assert flat.text == "book {toCity} now"
        [span] = flat.spans
        assert span.is_pattern_any
        assert (span.start, span.end) == (5, 12)

    def test_placeholder_with_role(self) -> None:
        flat = flatten("to {city:toCity}")
        assert flat.text == "to {city:toCity}"
        assert flat.spans[0].role == "toCity"

    def test_empty_value_gives_inverted_span(self) -> None:
        flat = flatten("hi {userName=}")
        [span] = flat.spans
        assert span.start > span.end

    def test_no_labels(self) -> None:
        flat = flatten("just text")
        assert not flat.has_labels
