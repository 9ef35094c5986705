"""
Entity definition dispatch.

Routes ``@ <type> <name>`` and legacy ``$name : <type>`` sections to the
kind-specific handlers after the checks that apply to every kind: name and
role disjointness, and promotion of pattern-any placeholders.
"""

import re
from typing import TYPE_CHECKING, Any

from .. import ir
from ..builtin_types import is_builtin_type
from ..errors import ErrorCode, ErrorContext, make_validation_error
from ..registry import split_roles
from ..resource import EntitySection, NewEntitySection
from .base import merge_roles
from .composite import split_children
from .phrase_list import split_interchangeable

QNA_ALTERATIONS = "qna-alterations"

# "simple hasRoles a, b" / "Seattle roles=a,b ="
_LEGACY_ROLES_RE = re.compile(r"\s*(?:\bhasroles\b|\broles\s*=)\s*(.*)$", re.IGNORECASE)


def get_roles_and_type(entity_type: str) -> tuple[str, list[str]]:
    """
    Split roles encoded in a legacy type string.

    Returns:
        The type with the roles removed (a trailing ``=`` is kept) and the roles
    """
    text = entity_type.strip()
    if text.startswith(("/", "[")):
        return text, []

    suffix = ""
    if text.endswith("="):
        text = text[:-1].rstrip()
        suffix = "="

    match = _LEGACY_ROLES_RE.search(text)
    if match is None:
        return entity_type.strip(), []
    return text[: match.start()].strip() + suffix, split_roles(match.group(1))


def _declared_type(name: str, sections: list[NewEntitySection]) -> str | None:
    for section in sections:
        if section.name == name and section.type:
            return section.type
    return None


def _legacy_kind(entity_type: str, declares_prebuilt: bool) -> ir.EntityKind | None:
    """Kind a legacy type string declares, or None for phrase lists and alterations."""
    lowered = entity_type.lower()
    if declares_prebuilt or is_builtin_type(entity_type):
        return ir.EntityKind.PREBUILT
    if lowered in ("simple", "ml"):
        return ir.EntityKind.SIMPLE
    if entity_type.endswith("="):
        return None if QNA_ALTERATIONS in lowered else ir.EntityKind.LIST
    if entity_type.startswith("["):
        return ir.EntityKind.COMPOSITE
    if entity_type.startswith("/"):
        return ir.EntityKind.REGEX
    return None


class DefinitionMixin:
    """
    Mixin dispatching entity sections to the kind handlers.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        content: Any
        registry: Any
        promote_pattern_any: Any
        handle_simple: Any
        handle_list: Any
        handle_list_synonyms: Any
        handle_composite: Any
        handle_regex: Any
        handle_prebuilt: Any
        handle_pattern_any: Any
        handle_phrase_list: Any

    def handle_new_entities(self, sections: list[NewEntitySection]) -> None:
        for section in sections:
            self.handle_new_entity(section, sections)

    def handle_new_entity(
        self, section: NewEntitySection, sections: list[NewEntitySection]
    ) -> None:
        """
        Handle one ``@`` definition.

        A definition without a type takes the type of another definition of the
        same name. ``ml`` is treated as ``simple``.

        Raises:
            ValidationError: If no type can be found, the name equals the type, or
                any kind-specific check fails
        """
        context = section.context
        name = section.name.strip("'\"")
        entity_type = section.type or _declared_type(section.name, sections)
        if not entity_type:
            raise make_validation_error(
                f'No type definition found for entity "{name}"',
                ErrorCode.INVALID_INPUT,
                context,
            )
        entity_type = entity_type.strip().lower()
        if entity_type == name:
            raise make_validation_error(
                f'Entity name "{name}" cannot be the same as entity type "{entity_type}"',
                ErrorCode.INVALID_INPUT,
                context,
            )
        if entity_type == "ml":
            entity_type = ir.EntityKind.SIMPLE.value
        try:
            kind = ir.EntityKind(entity_type)
        except ValueError:
            raise make_validation_error(
                f'Unknown type "{entity_type}" for entity "{name}"',
                ErrorCode.INVALID_INPUT,
                context,
            ) from None

        roles_text = section.roles
        interchangeable = False
        if kind is ir.EntityKind.PHRASE_LIST:
            name, interchangeable = split_interchangeable(name)
            if roles_text and "interchangeable" in roles_text.lower():
                roles_text, _ = split_interchangeable(roles_text)
                interchangeable = True

        roles = split_roles(roles_text)
        self.registry.assert_name_role_disjoint(name, roles, entity_type, context)
        roles = merge_roles(roles, self.promote_pattern_any(name, entity_type, context))

        if kind is ir.EntityKind.SIMPLE:
            self.handle_simple(name, roles, context)
        elif kind is ir.EntityKind.COMPOSITE:
            children = split_children(section.composite_definition)
            for line in section.list_body:
                children.extend(split_children(line))
            self.handle_composite(name, children, roles, context)
        elif kind is ir.EntityKind.LIST:
            self.handle_list(name, section.list_body, roles, context)
        elif kind is ir.EntityKind.PATTERN_ANY:
            self.handle_pattern_any(name, roles, context)
        elif kind is ir.EntityKind.PREBUILT:
            self.handle_prebuilt(name, roles, context)
        elif kind is ir.EntityKind.REGEX:
            definition = section.list_body[0] if section.list_body else section.regex_definition
            self.handle_regex(name, definition, roles, context)
        elif kind is ir.EntityKind.PHRASE_LIST:
            self.handle_phrase_list(name, interchangeable, roles, section.list_body, context)

    def handle_legacy_entities(self, sections: list[EntitySection]) -> None:
        for section in sections:
            self.handle_legacy_entity(section)

    def handle_legacy_entity(self, section: EntitySection) -> None:
        """
        Handle one ``$name : type`` definition.

        The type string selects the kind: a builtin type tag, ``simple``,
        ``<value> =`` for a list group, ``qna-alterations =``, ``phraselist``,
        ``[children]`` or ``/pattern/``.
        """
        context = section.context
        name = section.name
        entity_type, roles = get_roles_and_type(section.type)
        lowered = entity_type.lower()

        declares_prebuilt = name.lower() == "prebuilt"
        target = entity_type if declares_prebuilt else name
        kind = _legacy_kind(entity_type, declares_prebuilt)
        if kind is not None:
            declared = entity_type if kind is ir.EntityKind.PREBUILT else name
            self.registry.assert_name_role_disjoint(declared, roles, kind.value, context)
        roles = merge_roles(roles, self.promote_pattern_any(target, entity_type, context))

        if declares_prebuilt or is_builtin_type(entity_type):
            self.handle_prebuilt(entity_type, roles, context)
        elif lowered in ("simple", "ml"):
            self.handle_simple(name, roles, context)
        elif entity_type.endswith("="):
            if QNA_ALTERATIONS in lowered:
                self.handle_alterations(name, section.synonyms_or_phrase_list, context)
            else:
                self.handle_list_synonyms(
                    name,
                    entity_type[:-1].strip(),
                    section.synonyms_or_phrase_list,
                    roles,
                    context,
                )
        elif lowered.startswith("phraselist"):
            _, interchangeable = split_interchangeable(entity_type)
            self.handle_phrase_list(
                name, interchangeable, roles, section.synonyms_or_phrase_list, context
            )
        elif entity_type.startswith("["):
            self.handle_composite(
                name, split_children(entity_type), roles, context, inline_child_required=True
            )
        elif entity_type.startswith("/"):
            if len(entity_type) < 2 or not entity_type.endswith("/"):
                raise make_validation_error(
                    f"RegEx entity: {name} is missing trailing '/'. "
                    "Regex patterns need to be enclosed in forward slashes. e.g. /[0-9]/",
                    ErrorCode.INVALID_REGEX_ENTITY,
                    context,
                )
            self.handle_regex(name, entity_type, roles, context)
        else:
            raise make_validation_error(
                f'Unknown type "{entity_type}" for entity "{name}"',
                ErrorCode.INVALID_INPUT,
                context,
            )

    def handle_alterations(
        self, word: str, alternates: list[str], context: ErrorContext | None
    ) -> ir.Alterations:
        """
        Record a ``$word : qna-alterations =`` group.

        Raises:
            ValidationError: SynonymsNotAList if the group has no alternates
        """
        if not alternates:
            raise make_validation_error(
                f'QnA alteration section: "{word}" does not have list decoration. '
                'Prefix line with "-" or "+" or "*"',
                ErrorCode.SYNONYMS_NOT_A_LIST,
                context,
            )
        group = ir.Alterations(alterations=[word, *alternates])
        self.content.alterations.word_alterations.append(group)
        return group
