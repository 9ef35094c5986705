"""
Utterance and pattern resolution.

Associates the labels of each intent example with registry entries. A line
whose labels are all bare ``{name}`` placeholders is a pattern; a line whose
labels all carry values is a labelled utterance. Unknown names are registered
on the fly: as pattern-any for patterns, as simple for labelled utterances.
"""

import logging

from . import ir
from .content import ParsedContent
from .errors import ErrorCode, ErrorContext, make_validation_error
from .labels import LabelledSpan, flatten_labels
from .manifest import ParseOptions
from .references import is_utterance_link_ref, parse_link_uri
from .registry import RESOLUTION_ORDER, EntityRegistry
from .resource import IntentSection, UtteranceSection

logger = logging.getLogger(__name__)

# Kinds a pattern label may already be declared as
_CONCRETE_KINDS: tuple[ir.EntityKind, ...] = (
    ir.EntityKind.SIMPLE,
    ir.EntityKind.COMPOSITE,
    ir.EntityKind.LIST,
    ir.EntityKind.REGEX,
    ir.EntityKind.PREBUILT,
)

# Kinds that may only be labelled in an utterance together with a role
_ROLE_REQUIRED = {
    ir.EntityKind.LIST: "LIST",
    ir.EntityKind.PREBUILT: "PREBUILT",
    ir.EntityKind.REGEX: "Regex",
}


class UtteranceResolver:
    """
    Resolves intent examples against the entity registry.

    Runs after the ``@`` definitions and before the legacy ``$`` definitions
    of the same document.
    """

    def __init__(self, content: ParsedContent, options: ParseOptions):
        self.content = content
        self.options = options

    @property
    def registry(self) -> EntityRegistry:
        return self.content.luis.registry

    def resolve_intents(self, intents: list[IntentSection]) -> None:
        for intent in intents:
            self.content.luis.get_or_add_intent(intent.name)
            for section in intent.utterances:
                self.resolve_utterance(intent.name, section)

    def resolve_utterance(self, intent: str, section: UtteranceSection) -> None:
        """
        Resolve one example line of ``intent``.

        Raises:
            ValidationError: For mixed labelling, labels the target kind does not
                allow, or labels without a value
        """
        flat = flatten_labels(section.segments)
        text = flat.text.strip()
        leading = len(flat.text) - len(flat.text.lstrip())
        spans = [
            LabelledSpan(
                entity=span.entity,
                start=span.start - leading,
                end=span.end - leading,
                value=span.value,
                role=span.role,
                is_pattern_any=span.is_pattern_any,
            )
            for span in flat.spans
        ]

        if is_utterance_link_ref(text):
            self.content.additional_files_to_parse.append(
                ir.FileToParse(file_path=parse_link_uri(text), include_in_collate=False)
            )

        if not spans:
            self.content.luis.get_or_add_utterance(text, intent)
            return

        if any(span.is_pattern_any for span in spans):
            self.resolve_pattern(intent, text, spans, section)
        else:
            self.resolve_labelled_utterance(intent, text, spans, section)

    def resolve_at_reference(self, entity: str, role: str) -> tuple[str, str]:
        """
        Resolve an ``@name`` label against the flat name/role index.

        A name matching a declared entity stays as is; a name matching a
        declared role becomes ``(owner, role)``. Unresolved names lose only the
        ``@`` prefix.
        """
        if not entity.startswith("@"):
            return entity, role
        name = entity[1:].strip()
        if name in self.registry.flat_index:
            return name, role
        owner = self.registry.find_by_role(name)
        if owner is not None:
            return owner.name, name
        return name, role

    def resolve_pattern(
        self,
        intent: str,
        text: str,
        spans: list[LabelledSpan],
        section: UtteranceSection,
    ) -> ir.Pattern:
        if any(not span.is_pattern_any for span in spans):
            raise make_validation_error(
                f'Utterance "{section.text}" has mix of entities with labelled values and '
                "ones without. Please update utterance to either include labelled values "
                "for all entities or remove labelled values from all entities.",
                ErrorCode.INVALID_INPUT,
                section.context,
            )

        resolved = [self.resolve_at_reference(span.entity, span.role) for span in spans]
        if "{@" in text:
            text = text.replace("{@", "{")
            for span, (entity, role) in zip(spans, resolved, strict=True):
                if span.entity.startswith("@") and role and not span.role:
                    text = text.replace(f"{{{role}}}", f"{{{entity}:{role}}}", 1)

        pattern = self.content.luis.add_pattern(text, intent)

        for entity, role in resolved:
            roles = [role] if role else []
            declared = [
                record
                for kind in _CONCRETE_KINDS
                if (record := self.registry.get(kind, entity)) is not None
            ]
            if not declared:
                self.registry.upsert(ir.EntityKind.PATTERN_ANY, entity, roles)
                continue
            for record in declared:
                record.add_roles(roles)
        return pattern

    def resolve_labelled_utterance(
        self,
        intent: str,
        text: str,
        spans: list[LabelledSpan],
        section: UtteranceSection,
    ) -> ir.Utterance:
        resolved = [self.resolve_at_reference(span.entity, span.role) for span in spans]

        for span, (entity, _) in zip(spans, resolved, strict=True):
            if span.start > span.end:
                raise make_validation_error(
                    f'No labelled value found for entity: "{entity}" in utterance: '
                    f'"{section.text}"',
                    ErrorCode.MISSING_LABELLED_VALUE,
                    section.context,
                )

        for span, (entity, role) in zip(spans, resolved, strict=True):
            self._register_label(entity, role, span.value, text, section.context)

        utterance = self.content.luis.get_or_add_utterance(text, intent)
        for span, (entity, role) in zip(spans, resolved, strict=True):
            utterance.add_label(
                ir.UtteranceEntityLabel(
                    entity=entity,
                    start_pos=span.start,
                    end_pos=span.end,
                    role=role or None,
                )
            )
        return utterance

    def _register_label(
        self, entity: str, role: str, value: str, text: str, context: ErrorContext
    ) -> None:
        roles = [role] if role else []

        if self.registry.get(ir.EntityKind.PHRASE_LIST, entity) is not None:
            other_kinds = tuple(k for k in ir.EntityKind if k is not ir.EntityKind.PHRASE_LIST)
            if self.registry.find(entity, other_kinds) is None:
                raise make_validation_error(
                    f'Utterance "{text}" has invalid reference to Phrase List entity '
                    f'"{entity}". Phrase list entities cannot be given an explicit '
                    "labelled value.",
                    ErrorCode.INVALID_INPUT,
                    context,
                )

        record = self.registry.find(entity, RESOLUTION_ORDER)
        if record is None:
            self.registry.upsert(ir.EntityKind.SIMPLE, entity, roles)
            return

        kind = record.kind
        if kind is ir.EntityKind.COMPOSITE:
            record.add_roles(roles)
        elif kind in _ROLE_REQUIRED:
            if not role:
                raise make_validation_error(
                    f"{entity} has been defined as a {_ROLE_REQUIRED[kind]} entity type. "
                    "It cannot be explicitly included in a labelled utterance unless the "
                    "label includes a role.",
                    ErrorCode.INVALID_INPUT,
                    context,
                )
            record.add_roles(roles)
        elif kind is ir.EntityKind.PATTERN_ANY:
            if value:
                prior = self.registry.remove_pattern_any(entity) or []
                logger.debug("Promoting pattern.any entity %s to simple", entity)
                self.registry.upsert(ir.EntityKind.SIMPLE, entity, roles + prior)
            else:
                record.add_roles(roles)
