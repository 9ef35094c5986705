"""
Base class for declaration handlers.

Provides the shared state and the preamble every kind-specific mixin other
than prebuilt and pattern-any runs before merging a declaration into the
registry.
"""

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .. import ir
from ..content import ParsedContent
from ..errors import ErrorCode, ErrorContext, make_validation_error
from ..manifest import ParseOptions
from ..registry import EntityRegistry

if TYPE_CHECKING:
    from ..resource import NewEntitySection

logger = logging.getLogger(__name__)

# Human readable kind names used in diagnostics
KIND_LABELS: dict[ir.EntityKind, str] = {
    ir.EntityKind.SIMPLE: "Simple",
    ir.EntityKind.LIST: "List",
    ir.EntityKind.COMPOSITE: "Composite",
    ir.EntityKind.REGEX: "RegEx",
    ir.EntityKind.PREBUILT: "Prebuilt",
    ir.EntityKind.PATTERN_ANY: "Pattern.Any",
    ir.EntityKind.PHRASE_LIST: "Phrase List",
}


@runtime_checkable
class HandlerProtocol(Protocol):
    """
    Interface available to handler mixins.

    Lets mixins call each other's handlers once they are combined into
    :class:`~lucore.core.handlers.DeclarationHandler`.
    """

    content: ParsedContent
    options: ParseOptions

    @property
    def registry(self) -> EntityRegistry: ...
    def warn(self, message: str, *args: object) -> None: ...
    def verify_and_update_simple_entity(
        self, name: str, kind: ir.EntityKind, context: ErrorContext | None
    ) -> list[str]: ...
    def promote_pattern_any(
        self, name: str, entity_type: str, context: ErrorContext | None
    ) -> list[str]: ...

    def handle_simple(
        self, name: str, roles: list[str], context: ErrorContext | None
    ) -> ir.SimpleEntity: ...
    def handle_list(
        self, name: str, lines: list[str], roles: list[str], context: ErrorContext | None
    ) -> ir.ListEntity: ...
    def handle_list_synonyms(
        self,
        name: str,
        normalized_value: str,
        synonyms: list[str],
        roles: list[str],
        context: ErrorContext | None,
    ) -> ir.ListEntity: ...
    def handle_composite(
        self,
        name: str,
        children: list[str],
        roles: list[str],
        context: ErrorContext | None,
        inline_child_required: bool = False,
    ) -> ir.CompositeEntity: ...
    def handle_regex(
        self, name: str, definition: str | None, roles: list[str], context: ErrorContext | None
    ) -> ir.RegexEntity: ...
    def handle_prebuilt(
        self, entity_type: str, roles: list[str], context: ErrorContext | None
    ) -> ir.PrebuiltEntity | None: ...
    def handle_pattern_any(
        self, name: str, roles: list[str], context: ErrorContext | None
    ) -> ir.PatternAnyEntity: ...
    def handle_phrase_list(
        self,
        name: str,
        interchangeable: bool,
        roles: list[str],
        values: list[str],
        context: ErrorContext | None,
    ) -> ir.PhraseListEntity: ...
    def handle_new_entity(
        self, section: "NewEntitySection", sections: list["NewEntitySection"]
    ) -> None: ...


class BaseHandler:
    """
    Shared state and preamble for all declaration handlers.

    Handlers run once per declaration, in source order, and merge into the
    registry in place.
    """

    def __init__(self, content: ParsedContent, options: ParseOptions):
        """
        Initialize handler.

        Args:
            content: Parse state the declarations are merged into
            options: Locale and verbosity for this pass
        """
        self.content = content
        self.options = options

    @property
    def registry(self) -> EntityRegistry:
        return self.content.luis.registry

    def warn(self, message: str, *args: object) -> None:
        """Log a recoverable problem; silent unless verbose."""
        if self.options.verbose:
            logger.warning(message, *args)

    def verify_and_update_simple_entity(
        self, name: str, kind: ir.EntityKind, context: ErrorContext | None
    ) -> list[str]:
        """
        Absorb a same-named simple entity into a new declaration of ``kind``.

        The simple entity is removed unless ``kind`` is a phrase list, which may
        share its name. Roles used on utterance labels of ``name`` are carried
        over as well.

        Returns:
            Roles to merge into the new declaration

        Raises:
            ValidationError: If ``name`` is labelled in an utterance without a role
                and ``kind`` is not a phrase list
        """
        roles: list[str] = []
        simple = self.registry.get(ir.EntityKind.SIMPLE, name)
        if simple is not None:
            roles.extend(simple.roles)
            if kind is not ir.EntityKind.PHRASE_LIST:
                self.registry.remove(ir.EntityKind.SIMPLE, name)

        for utterance, label in self.content.luis.find_labelled_utterances(name):
            if label.role:
                if label.role not in roles:
                    roles.append(label.role)
            elif kind is not ir.EntityKind.PHRASE_LIST:
                kind_label = KIND_LABELS[kind]
                raise make_validation_error(
                    f"'{kind_label}' entity: \"{name}\" is added as a labelled entity in "
                    f'utterance "{utterance.text}". {kind_label} cannot be added with '
                    "explicit labelled values in utterances.",
                    ErrorCode.INVALID_INPUT,
                    context,
                )
        return roles

    def promote_pattern_any(
        self, name: str, entity_type: str, context: ErrorContext | None
    ) -> list[str]:
        """
        Remove a pattern-any entity about to be redeclared as another kind.

        Returns:
            The pattern-any roles, to be merged into the new declaration

        Raises:
            ValidationError: If the new declaration is a phrase list
        """
        if self.registry.get(ir.EntityKind.PATTERN_ANY, name) is None:
            return []
        if "phraselist" in entity_type.lower():
            raise make_validation_error(
                f'Phrase lists cannot be used as an entity in a pattern "{name}"',
                ErrorCode.INVALID_INPUT,
                context,
            )
        return self.registry.remove_pattern_any(name) or []


def merge_roles(target: list[str], roles: list[str]) -> list[str]:
    """Append ``roles`` to ``target`` in order, skipping ones already present."""
    for role in roles:
        if role not in target:
            target.append(role)
    return target
