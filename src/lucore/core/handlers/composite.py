"""
Composite entity handling.
"""

import re
from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorCode, ErrorContext, make_validation_error
from .base import merge_roles


_CHILD_SEPARATOR_RE = re.compile(r"[,;]")


def split_children(definition: str | None) -> list[str]:
    """Split a ``[a, b; c]`` children definition, brackets optional."""
    if not definition:
        return []
    body = definition.replace("[", "").replace("]", "")
    return [child.strip() for child in _CHILD_SEPARATOR_RE.split(body) if child.strip()]


class CompositeEntityMixin:
    """
    Mixin providing composite entity declarations.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        registry: Any

    def handle_composite(
        self,
        name: str,
        children: list[str],
        roles: list[str],
        context: ErrorContext | None,
        inline_child_required: bool = False,
    ) -> ir.CompositeEntity:
        """
        Merge a composite declaration into the registry.

        A same-named simple entity is absorbed. Composites may be labelled in
        utterances, so existing labels are left alone.

        Raises:
            ValidationError: InvalidCompositeEntity if the composite already has a
                different non-empty child set, or if ``inline_child_required`` and
                no children were given
        """
        if inline_child_required and not children:
            raise make_validation_error(
                f'Composite entity "{name}" must have at least one child entity',
                ErrorCode.INVALID_COMPOSITE_ENTITY,
                context,
            )

        roles = list(roles)
        simple = self.registry.remove(ir.EntityKind.SIMPLE, name)
        if simple is not None:
            merge_roles(roles, simple.roles)

        existing = self.registry.get(ir.EntityKind.COMPOSITE, name)
        if (
            existing is not None
            and existing.children
            and children
            and sorted(existing.children) != sorted(children)
        ):
            raise make_validation_error(
                f'Composite entity "{name}" has multiple definitions with different children. '
                f"Existing children: [{', '.join(existing.children)}], "
                f"new children: [{', '.join(children)}]",
                ErrorCode.INVALID_COMPOSITE_ENTITY,
                context,
            )

        entity = self.registry.upsert(ir.EntityKind.COMPOSITE, name, roles)
        for child in children:
            if child not in entity.children:
                entity.children.append(child)
        return entity
