"""
Regex entity handling.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..errors import ErrorCode, ErrorContext, make_validation_error
from .base import merge_roles


class RegexEntityMixin:
    """
    Mixin providing regex entity declarations.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        registry: Any
        verify_and_update_simple_entity: Any

    def handle_regex(
        self,
        name: str,
        definition: str | None,
        roles: list[str],
        context: ErrorContext | None,
    ) -> ir.RegexEntity:
        """
        Merge a regex declaration into the registry.

        Args:
            name: Entity name
            definition: Pattern enclosed in slashes, or None to only declare roles
            roles: Declared roles
            context: Source location of the declaration

        Raises:
            ValidationError: InvalidRegexEntity if the pattern is empty or differs
                from a pattern already recorded for ``name``
        """
        roles = merge_roles(
            list(roles),
            self.verify_and_update_simple_entity(name, ir.EntityKind.REGEX, context),
        )

        pattern = ""
        if definition:
            pattern = definition.strip()[1:-1]
            if not pattern:
                raise make_validation_error(
                    f"RegEx entity: {name} has empty regex pattern defined.",
                    ErrorCode.INVALID_REGEX_ENTITY,
                    context,
                )

        existing = self.registry.get(ir.EntityKind.REGEX, name)
        if existing is not None and existing.regex_pattern and pattern:
            if existing.regex_pattern != pattern:
                raise make_validation_error(
                    f"RegEx entity: {name} has multiple regex patterns defined. "
                    f"1. /{pattern}/ 2. /{existing.regex_pattern}/",
                    ErrorCode.INVALID_REGEX_ENTITY,
                    context,
                )

        entity = self.registry.upsert(ir.EntityKind.REGEX, name, roles)
        if not entity.regex_pattern:
            entity.regex_pattern = pattern
        return entity
