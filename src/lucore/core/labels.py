"""
Entity labels inside utterance text.

Two narrow operations live here:

- :func:`parse_label_tree` turns ``hi {userName=foo {firstName=bar}}`` into a
  tree of plain text and :class:`~lucore.core.resource.LabelNode` values.
- :func:`flatten_labels` walks that tree post-order and returns the final
  plain text plus a flat list of spans with inclusive character offsets.

Spans in the result are either disjoint or properly nested; a parent label's
span always covers the spans of the labels inside its value.
"""

from dataclasses import dataclass, replace

from .resource import LabelNode


class LabelSyntaxError(ValueError):
    """Raised for unbalanced or malformed ``{...}`` labels."""

    def __init__(self, message: str, column: int):
        self.column = column
        super().__init__(message)


@dataclass
class LabelledSpan:
    """
    One label after flattening.

    Attributes:
        entity: Entity name as written (may still carry a leading ``@``)
        start: Offset of the first character of the value
        end: Offset of the last character of the value (``start - 1`` if empty)
        value: The label's flattened text
        role: Role name, empty when absent
        is_pattern_any: True for bare ``{entity}`` placeholders
    """

    entity: str
    start: int
    end: int
    value: str
    role: str = ""
    is_pattern_any: bool = False


@dataclass
class FlatUtterance:
    text: str
    spans: list[LabelledSpan]

    @property
    def has_labels(self) -> bool:
        return bool(self.spans)


class _LabelScanner:
    """Recursive-descent scanner over one utterance line."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def current_char(self) -> str | None:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def parse_segments(self, closing: bool) -> list[str | LabelNode]:
        segments: list[str | LabelNode] = []
        chars: list[str] = []

        while True:
            ch = self.current_char()
            if ch is None:
                if closing:
                    raise LabelSyntaxError("Missing closing '}' for entity label", self.pos)
                break

            if ch == "\\" and self.peek_char() is not None:
                chars.append(self.peek_char() or "")
                self.pos += 2
                continue

            if ch == "{":
                if chars:
                    segments.append("".join(chars))
                    chars = []
                segments.append(self.parse_label())
                continue

            if ch == "}":
                if closing:
                    break
                raise LabelSyntaxError("Unexpected '}' without a matching '{'", self.pos)

            chars.append(ch)
            self.pos += 1

        if chars:
            segments.append("".join(chars))
        return segments

    def parse_label(self) -> LabelNode:
        start = self.pos
        self.pos += 1  # skip {

        header: list[str] = []
        while self.current_char() not in ("=", "}"):
            ch = self.current_char()
            if ch is None:
                raise LabelSyntaxError("Missing closing '}' for entity label", start)
            if ch == "{":
                raise LabelSyntaxError("Entity name cannot contain '{'", self.pos)
            header.append(ch)
            self.pos += 1

        header_text = "".join(header).strip()
        if not header_text:
            raise LabelSyntaxError("Entity label has no entity name", start)

        entity, _, role = header_text.partition(":")
        node = LabelNode(entity=entity.strip(), role=role.strip())

        if self.current_char() == "=":
            self.pos += 1
            node.has_value = True
            node.parts = self.parse_segments(closing=True)

        self.pos += 1  # skip }
        return node


def parse_label_tree(text: str) -> list[str | LabelNode]:
    """
    Parse an utterance line into text segments and label nodes.

    Raises:
        LabelSyntaxError: If braces are unbalanced or a label has no name
    """
    return _LabelScanner(text).parse_segments(closing=False)


def flatten_labels(segments: list[str | LabelNode]) -> FlatUtterance:
    """
    Flatten a label tree into plain text and spans.

    Each label's value is the trimmed concatenation of its children; bare
    placeholders are kept verbatim as ``{entity}`` or ``{entity:role}``.
    Spans are emitted children first, then their parent.
    """
    text, spans = _flatten_parts(segments)
    return FlatUtterance(text=text, spans=spans)


def _flatten_parts(parts: list[str | LabelNode]) -> tuple[str, list[LabelledSpan]]:
    pieces: list[str] = []
    spans: list[LabelledSpan] = []
    offset = 0

    for part in parts:
        if isinstance(part, str):
            pieces.append(part)
            offset += len(part)
            continue

        value, label_spans = _flatten_label(part)
        spans.extend(_shift(span, offset) for span in label_spans)
        pieces.append(value)
        offset += len(value)

    return "".join(pieces), spans


def _flatten_label(node: LabelNode) -> tuple[str, list[LabelledSpan]]:
    if not node.has_value:
        if node.role:
            placeholder = f"{{{node.entity}:{node.role}}}"
        else:
            placeholder = f"{{{node.entity}}}"
        span = LabelledSpan(
            entity=node.entity,
            start=0,
            end=len(placeholder) - 1,
            value=placeholder,
            role=node.role,
            is_pattern_any=True,
        )
        return placeholder, [span]

    raw, child_spans = _flatten_parts(node.parts)
    value = raw.strip()
    leading = len(raw) - len(raw.lstrip())

    spans = [_shift(span, -leading) for span in child_spans]
    spans.append(
        LabelledSpan(
            entity=node.entity,
            start=0,
            end=len(value) - 1,
            value=value,
            role=node.role,
        )
    )
    return value, spans


def _shift(span: LabelledSpan, offset: int) -> LabelledSpan:
    return replace(span, start=span.start + offset, end=span.end + offset)
