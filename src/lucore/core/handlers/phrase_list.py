"""
Phrase list handling.
"""

import re
from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorCode, ErrorContext, make_validation_error

_INTERCHANGEABLE_RE = re.compile(r"\(.*\)")
_VALUE_SEPARATOR_RE = re.compile(r"[,;]")


def split_interchangeable(name: str) -> tuple[str, bool]:
    """
    Strip an ``(interchangeable)`` marker from a phrase list name.

    Returns:
        The bare name and whether the marker was present
    """
    if "interchangeable" not in name.lower():
        return name, False
    return _INTERCHANGEABLE_RE.sub("", name).strip(), True


class PhraseListMixin:
    """
    Mixin providing phrase list declarations.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        registry: Any
        verify_and_update_simple_entity: Any

    def handle_phrase_list(
        self,
        name: str,
        interchangeable: bool,
        roles: list[str],
        values: list[str],
        context: ErrorContext | None,
    ) -> ir.PhraseListEntity:
        """
        Merge a phrase list declaration into the registry.

        Each body line may hold several values separated by ``,`` or ``;``.
        A phrase list may share its name with a simple entity.

        Raises:
            ValidationError: InvalidInput if roles are given, or if the phrase list
                was declared before with a different interchangeable flag
        """
        if roles:
            raise make_validation_error(
                f"Phrase list entity {name} has invalid role definition with "
                f"roles = {', '.join(roles)}. Roles are not supported for Phrase Lists",
                ErrorCode.INVALID_INPUT,
                context,
            )

        self.verify_and_update_simple_entity(name, ir.EntityKind.PHRASE_LIST, context)

        words: list[str] = []
        for line in values:
            words.extend(item.strip() for item in _VALUE_SEPARATOR_RE.split(line))

        existing = self.registry.get(ir.EntityKind.PHRASE_LIST, name)
        if existing is not None and existing.mode != interchangeable:
            raise make_validation_error(
                f'Phrase list: "{name}" has conflicting definitions. '
                "One marked interchangeable and another not interchangeable",
                ErrorCode.INVALID_INPUT,
                context,
            )

        entity = self.registry.upsert(ir.EntityKind.PHRASE_LIST, name, [])
        entity.mode = interchangeable
        entity.add_values(words)
        return entity
