"""
Simple and pattern-any entity handling.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorContext
from .base import merge_roles


class SimpleEntityMixin:
    """
    Mixin providing simple and pattern-any declarations.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        registry: Any

    def handle_simple(
        self, name: str, roles: list[str], context: ErrorContext | None
    ) -> ir.SimpleEntity:
        return self.registry.upsert(ir.EntityKind.SIMPLE, name, roles)

    def handle_pattern_any(
        self, name: str, roles: list[str], context: ErrorContext | None
    ) -> ir.PatternAnyEntity:
        """
        Declare ``name`` as a pattern-any entity.

        Roles of prior pattern-any declarations are carried over.
        """
        prior = self.registry.remove_pattern_any(name) or []
        return self.registry.upsert(ir.EntityKind.PATTERN_ANY, name, merge_roles(prior, roles))
