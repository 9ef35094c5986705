"""
Prebuilt entity handling.

Prebuilt entities are keyed by their builtin type tag. Availability depends
on the parse locale: a type may be available as is, available under a
substitute name, or not available at all.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..builtin_types import (
    CONSOLIDATED_LIST,
    DEFAULT_LOCALE,
    availability_for,
    is_builtin_type,
    supported_locales,
)
from ..errors import ErrorCode, ErrorContext, make_validation_error


class PrebuiltEntityMixin:
    """
    Mixin providing prebuilt entity declarations.

    Note: This mixin expects to be combined with BaseHandler via multiple inheritance.
    """

    if TYPE_CHECKING:
        registry: Any
        options: Any
        warn: Any

    def handle_prebuilt(
        self, entity_type: str, roles: list[str], context: ErrorContext | None
    ) -> ir.PrebuiltEntity | None:
        """
        Merge a prebuilt declaration into the registry.

        Returns:
            The prebuilt entity, or None if it was skipped because it is not
            available for the locale and verbose mode is on

        Raises:
            ValidationError: InvalidInput for an unknown type or locale, or for a
                type not available in the locale when not verbose
        """
        locale = (self.options.locale or DEFAULT_LOCALE).lower()

        if not is_builtin_type(entity_type):
            raise make_validation_error(
                f"Unknown PREBUILT entity '{entity_type}'. "
                f"Available pre-built types are {','.join(CONSOLIDATED_LIST)}",
                ErrorCode.INVALID_INPUT,
                context,
            )

        try:
            available = availability_for(locale, entity_type)
        except KeyError:
            raise make_validation_error(
                f"Locale '{locale}' is not supported. "
                f"Supported locales are {','.join(supported_locales())}",
                ErrorCode.INVALID_INPUT,
                context,
            ) from None

        if available is None:
            if self.options.verbose:
                self.warn(
                    'Requested PREBUILT entity "%s" is not available for the requested '
                    "locale: %s. Skipping this prebuilt entity.",
                    entity_type,
                    locale,
                )
                return None
            raise make_validation_error(
                f"PREBUILT entity '{entity_type}' is not available for the requested "
                f"locale '{locale}'",
                ErrorCode.INVALID_INPUT,
                context,
            )

        if available != entity_type:
            self.warn(
                'PREBUILT entity "%s" is not available for the requested locale: %s. '
                "Switching to %s instead.",
                entity_type,
                locale,
                available,
            )
            entity_type = available

        return self.registry.upsert(ir.EntityKind.PREBUILT, entity_type, roles)
