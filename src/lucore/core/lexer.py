"""
Line-oriented front end for the LU DSL.

Splits ``.lu`` / ``.qna`` text into the typed sections of an
:class:`~lucore.core.resource.LuResource`. Each line is classified by its
leading marker:

    > comment                    # Greeting          # ? question
    > !# @app.name = value       - utterance {x=y}   @ list city =
    [description](path.lu)       $name : type        ```markdown

Syntax problems never raise here; they are collected as diagnostics on the
resource so the caller can report all of them at once.
"""

import re
from pathlib import Path

from .errors import Diagnostic, ErrorContext, Severity
from .labels import LabelSyntaxError, parse_label_tree
from .resource import (
    EntitySection,
    FilterPair,
    ImportSection,
    IntentSection,
    LuResource,
    ModelInfoSection,
    NewEntitySection,
    QnaSection,
    UtteranceSection,
)

# Entity types accepted after '@'
NEW_ENTITY_TYPES = frozenset(
    {
        "simple",
        "ml",
        "list",
        "composite",
        "regex",
        "prebuilt",
        "patternany",
        "phraselist",
    }
)

_IMPORT_RE = re.compile(r"^\[([^\]]*)\]\(([^)]*)\)$")
_MODEL_INFO_RE = re.compile(r"^>\s*!#\s*(@.*)$")
_LIST_ITEM_RE = re.compile(r"^\s*[-*+]\s?(.*)$")
_LEGACY_ENTITY_RE = re.compile(r"^\$\s*([^:]+?)\s*:\s*(.*)$")
_FILTERS_RE = re.compile(r"^\*\*\s*filters\s*:\s*\*\*$", re.IGNORECASE)
_FENCE_RE = re.compile(r"^```")
_HAS_ROLES_RE = re.compile(r"^hasroles$", re.IGNORECASE)


def sanitize_newlines(text: str) -> str:
    """Normalize CRLF and CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class LuLexer:
    """
    Front end for one LU document.

    Tracks the currently open section so that list lines (``- ...``) are
    attached to the right owner: an intent, a QnA pair, or an entity body.
    """

    def __init__(self, text: str, file: Path | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to split into sections
            file: Source file path (for diagnostics)
        """
        self.lines = sanitize_newlines(text).split("\n")
        self.file = file
        self.resource = LuResource()

        self.intent: IntentSection | None = None
        self.qna: QnaSection | None = None
        self.qna_mode = "questions"  # questions | filters | answer | done
        self.answer_lines: list[str] = []
        self.body: list[str] | None = None

    def context(self, line_no: int, text: str, column: int = 0) -> ErrorContext:
        return ErrorContext(line=line_no, column=column, text=text, file=self.file)

    def error(self, message: str, line_no: int, text: str, column: int = 0) -> None:
        self.resource.errors.append(
            Diagnostic(message, Severity.ERROR, self.context(line_no, text, column))
        )

    def warn(self, message: str, line_no: int, text: str) -> None:
        self.resource.errors.append(
            Diagnostic(message, Severity.WARN, self.context(line_no, text))
        )

    def close_section(self) -> None:
        """Close whatever section is open and validate it."""
        if self.intent is not None:
            if not self.intent.utterances:
                self.warn(
                    f'no utterances found for intent definition: "# {self.intent.name}"',
                    self.intent.context.line,
                    self.intent.context.text or "",
                )
            self.intent = None

        if self.qna is not None:
            if self.qna_mode == "answer":
                self.error(
                    "Unterminated answer block. Close the answer with ```",
                    self.qna.context.line,
                    self.qna.context.text or "",
                )
            elif self.qna_mode != "done":
                self.error(
                    "No answer found for question. Answers are enclosed in ``` blocks",
                    self.qna.context.line,
                    self.qna.context.text or "",
                )
            else:
                self.resource.qnas.append(self.qna)
            self.qna = None
            self.qna_mode = "questions"
            self.answer_lines = []

        self.body = None

    def tokenize(self) -> LuResource:
        """
        Split the whole document into sections.

        Returns:
            LuResource with sections and any diagnostics found
        """
        for idx, raw_line in enumerate(self.lines):
            line_no = idx + 1
            line = raw_line.strip()

            # Answer blocks are taken verbatim until the closing fence
            if self.qna is not None and self.qna_mode == "answer":
                if _FENCE_RE.match(line):
                    self.qna.answer = "\n".join(self.answer_lines)
                    self.qna_mode = "done"
                else:
                    self.answer_lines.append(raw_line)
                continue

            if not line:
                continue

            if line.startswith(">"):
                match = _MODEL_INFO_RE.match(line)
                if match:
                    self.resource.model_infos.append(
                        ModelInfoSection(match.group(1), self.context(line_no, raw_line))
                    )
                continue

            if line.startswith("#"):
                self.close_section()
                self.handle_header(line, line_no, raw_line)
            elif line.startswith("@"):
                self.close_section()
                self.handle_new_entity(line, line_no, raw_line)
            elif line.startswith("$"):
                self.close_section()
                self.handle_legacy_entity(line, line_no, raw_line)
            elif _IMPORT_RE.match(line):
                self.close_section()
                match = _IMPORT_RE.match(line)
                assert match is not None
                self.resource.imports.append(
                    ImportSection(match.group(1), match.group(2), self.context(line_no, raw_line))
                )
            elif self.qna is not None:
                self.handle_qna_line(line, line_no, raw_line)
            elif _LIST_ITEM_RE.match(line):
                self.handle_list_item(line, line_no, raw_line)
            else:
                self.error(f"Invalid input line: {line}", line_no, raw_line)

        self.close_section()
        return self.resource

    def handle_header(self, line: str, line_no: int, raw_line: str) -> None:
        header = line.lstrip("#").strip()
        if header.startswith("?"):
            question = header[1:].strip()
            if not question:
                self.error("Invalid QnA definition: question is empty", line_no, raw_line)
                return
            self.qna = QnaSection(
                questions=[question], answer="", context=self.context(line_no, raw_line)
            )
            self.qna_mode = "questions"
            return

        if not header:
            self.error("Invalid intent definition: intent name is empty", line_no, raw_line)
            return
        self.intent = IntentSection(name=header, context=self.context(line_no, raw_line))
        self.resource.intents.append(self.intent)

    def handle_list_item(self, line: str, line_no: int, raw_line: str) -> None:
        match = _LIST_ITEM_RE.match(line)
        assert match is not None
        item = match.group(1).strip()

        if self.body is not None:
            # list sub-groups are delimited by "value:" header items, not indentation
            self.body.append(item)
            return

        if self.intent is None:
            self.error(
                f"Utterance found outside of an intent definition: {line}", line_no, raw_line
            )
            return

        if not item:
            self.error("Invalid utterance line: utterance is empty", line_no, raw_line)
            return

        try:
            segments = parse_label_tree(item)
        except LabelSyntaxError as e:
            column = len(raw_line) - len(raw_line.lstrip()) + e.column
            self.error(f"Invalid utterance {item!r}: {e}", line_no, raw_line, column)
            return

        self.intent.utterances.append(
            UtteranceSection(text=item, segments=segments, context=self.context(line_no, raw_line))
        )

    def handle_qna_line(self, line: str, line_no: int, raw_line: str) -> None:
        assert self.qna is not None

        if _FENCE_RE.match(line):
            if self.qna_mode == "done":
                self.error("QnA pair already has an answer", line_no, raw_line)
                return
            self.qna_mode = "answer"
            self.answer_lines = []
            return

        if _FILTERS_RE.match(line):
            self.qna_mode = "filters"
            return

        match = _LIST_ITEM_RE.match(line)
        if match is None:
            self.error(f"Invalid QnA line: {line}", line_no, raw_line)
            return

        item = match.group(1).strip()
        if self.qna_mode == "questions":
            self.qna.questions.append(item)
        elif self.qna_mode == "filters":
            key, sep, value = item.partition("=")
            if not sep or not key.strip() or not value.strip():
                self.error(
                    f"Invalid filter definition {item!r}. Filters are of the form key = value",
                    line_no,
                    raw_line,
                )
                return
            self.qna.filter_pairs.append(FilterPair(key.strip(), value.strip()))
        else:
            self.error(f"Unexpected line after answer: {line}", line_no, raw_line)

    def handle_new_entity(self, line: str, line_no: int, raw_line: str) -> None:
        rest = line[1:].strip()
        head, has_definition, definition = rest.partition("=")
        definition = definition.strip()

        words = head.split()
        if not words:
            self.error("Invalid entity definition: entity name is missing", line_no, raw_line)
            return

        entity_type: str | None = None
        if words[0].lower() in NEW_ENTITY_TYPES:
            entity_type = words[0].lower()
            words = words[1:]

        name, words = _take_name(words)
        if not name:
            self.error("Invalid entity definition: entity name is missing", line_no, raw_line)
            return

        if words and _HAS_ROLES_RE.match(words[0]):
            words = words[1:]
        roles = " ".join(words).strip() or None

        section = NewEntitySection(
            name=name,
            type=entity_type,
            context=self.context(line_no, raw_line),
            roles=roles,
        )
        if definition.startswith("["):
            section.composite_definition = definition
        elif definition.startswith("/"):
            section.regex_definition = definition
        elif definition:
            self.error(
                f"Invalid entity definition: unexpected inline value {definition!r}",
                line_no,
                raw_line,
            )
            return

        self.resource.new_entities.append(section)
        if has_definition and not definition:
            self.body = section.list_body

    def handle_legacy_entity(self, line: str, line_no: int, raw_line: str) -> None:
        match = _LEGACY_ENTITY_RE.match(line)
        if match is None or not match.group(2).strip():
            self.error(
                f"Invalid entity definition {line!r}. Entities are of the form $name : type",
                line_no,
                raw_line,
            )
            return

        section = EntitySection(
            name=match.group(1).strip(),
            type=match.group(2).strip(),
            context=self.context(line_no, raw_line),
        )
        self.resource.entities.append(section)

        entity_type = section.type.lower()
        if entity_type.endswith("=") or entity_type.startswith("phraselist"):
            self.body = section.synonyms_or_phrase_list


def _take_name(words: list[str]) -> tuple[str, list[str]]:
    """Take an optionally quoted entity name from the front of ``words``."""
    if not words:
        return "", words

    first = words[0]
    if first[0] in ("'", '"'):
        quote = first[0]
        for idx, word in enumerate(words):
            if word.endswith(quote) and (idx > 0 or len(word) > 1):
                name = " ".join(words[: idx + 1])
                return name.strip("'\""), words[idx + 1 :]
        return " ".join(words).strip("'\""), []

    return first, words[1:]


def tokenize(text: str, file: Path | None = None) -> LuResource:
    """
    Convenience function to split LU text into sections.

    Args:
        text: Source text
        file: Source file path

    Returns:
        LuResource with sections and diagnostics
    """
    return LuLexer(text, file).tokenize()
