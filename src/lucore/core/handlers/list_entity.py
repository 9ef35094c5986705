"""
List entity handling.

A list body is a sequence of items where ``value:`` items open a new
canonical form and every other item holds synonyms of the last opened one,
separated by ``,`` or ``;``::

    @ list city =
        - Seattle:
            - SEA, Emerald City
        - Portland:
            - PDX
"""

import re
from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorCode, ErrorContext, make_validation_error
from .base import merge_roles


class ListEntityMixin:
    """
    Mixin providing list entity declarations.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        registry: Any
        verify_and_update_simple_entity: Any

    def handle_list(
        self, name: str, lines: list[str], roles: list[str], context: ErrorContext | None
    ) -> ir.ListEntity:
        """
        Merge a ``@ list`` body into the list entity ``name``.

        Raises:
            ValidationError: SynonymsNotAList if a synonym appears before any
                ``value:`` header
        """
        roles = merge_roles(
            list(roles),
            self.verify_and_update_simple_entity(name, ir.EntityKind.LIST, context),
        )

        groups: list[ir.SubList] = []
        current: ir.SubList | None = None
        for line in lines:
            item = line.strip()
            if not item:
                continue
            if item.endswith(":"):
                current = ir.SubList(canonical_form=item[:-1].strip())
                groups.append(current)
                continue
            if current is None:
                raise make_validation_error(
                    f'[ERROR]: Synonyms section for list entity "{name}" is not a list. '
                    f"Found {item!r} before any normalized value",
                    ErrorCode.SYNONYMS_NOT_A_LIST,
                    context,
                )
            current.add_synonyms([s.strip() for s in re.split(r"[,;]", item) if s.strip()])

        entity = self.registry.upsert(ir.EntityKind.LIST, name, roles)
        for group in groups:
            self._merge_sub_list(entity, group.canonical_form, group.synonyms)
        return entity

    def handle_list_synonyms(
        self,
        name: str,
        normalized_value: str,
        synonyms: list[str],
        roles: list[str],
        context: ErrorContext | None,
    ) -> ir.ListEntity:
        """Merge one ``$name : value =`` group into the list entity ``name``."""
        roles = merge_roles(
            list(roles),
            self.verify_and_update_simple_entity(name, ir.EntityKind.LIST, context),
        )
        entity = self.registry.upsert(ir.EntityKind.LIST, name, roles)
        self._merge_sub_list(entity, normalized_value, synonyms)
        return entity

    def _merge_sub_list(
        self, entity: ir.ListEntity, canonical_form: str, synonyms: list[str]
    ) -> None:
        sub_list = entity.get_sub_list(canonical_form)
        if sub_list is None:
            sub_list = ir.SubList(canonical_form=canonical_form)
            entity.sub_lists.append(sub_list)
        sub_list.add_synonyms([s.strip() for s in synonyms if s.strip()])
