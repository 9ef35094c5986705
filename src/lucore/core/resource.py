"""
Syntax resource produced by the LU front end.

These are the sections the semantic pass consumes. Any front end that builds
an :class:`LuResource` can drive :func:`lucore.core.parser.parse_resource`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import Diagnostic, ErrorContext


@dataclass
class LabelNode:
    """
    A ``{entity=value}`` label inside an utterance.

    ``parts`` holds the value as a mix of plain text and nested labels.
    ``has_value`` is False for bare ``{entity}`` placeholders.
    """

    entity: str
    role: str = ""
    parts: list[str | LabelNode] = field(default_factory=list)
    has_value: bool = False


@dataclass
class ImportSection:
    """``[description](path)`` reference line."""

    description: str
    path: str
    context: ErrorContext


@dataclass
class NewEntitySection:
    """
    ``@ <type> <name> [hasRoles] <roles> [= <definition>]`` with optional body.

    Attributes:
        name: Entity name (quotes already stripped)
        type: Declared type or None when omitted
        roles: Raw comma separated roles string
        composite_definition: Inline ``[a, b]`` children
        regex_definition: Inline ``/pattern/``
        list_body: Body lines with their list decoration removed
    """

    name: str
    type: str | None
    context: ErrorContext
    roles: str | None = None
    composite_definition: str | None = None
    regex_definition: str | None = None
    list_body: list[str] = field(default_factory=list)


@dataclass
class EntitySection:
    """Legacy ``$name : type`` definition with its synonyms or phrase list."""

    name: str
    type: str
    context: ErrorContext
    synonyms_or_phrase_list: list[str] = field(default_factory=list)


@dataclass
class UtteranceSection:
    """One example line of an intent, parsed into a label tree."""

    text: str
    segments: list[str | LabelNode]
    context: ErrorContext


@dataclass
class IntentSection:
    name: str
    context: ErrorContext
    utterances: list[UtteranceSection] = field(default_factory=list)


@dataclass
class FilterPair:
    key: str
    value: str


@dataclass
class QnaSection:
    questions: list[str]
    answer: str
    context: ErrorContext
    filter_pairs: list[FilterPair] = field(default_factory=list)


@dataclass
class ModelInfoSection:
    """Raw ``> !# @scope.key = value`` directive line."""

    model_info: str
    context: ErrorContext


@dataclass
class LuResource:
    """All sections of one LU document, in source order per section type."""

    imports: list[ImportSection] = field(default_factory=list)
    new_entities: list[NewEntitySection] = field(default_factory=list)
    entities: list[EntitySection] = field(default_factory=list)
    intents: list[IntentSection] = field(default_factory=list)
    qnas: list[QnaSection] = field(default_factory=list)
    model_infos: list[ModelInfoSection] = field(default_factory=list)
    errors: list[Diagnostic] = field(default_factory=list)
