"""
LU declaration handler package.

Entity declarations are merged into the registry by one mixin per entity
kind, composed here into a single handler class.

The main exports are:
- DeclarationHandler: The complete handler class
- BaseHandler: Shared state and preamble

Usage:
    from lucore.core.handlers import DeclarationHandler

    handler = DeclarationHandler(content, options)
    handler.handle_new_entities(resource.new_entities)
"""

from .base import KIND_LABELS, BaseHandler, HandlerProtocol, merge_roles
from .composite import CompositeEntityMixin, split_children
from .definitions import DefinitionMixin, get_roles_and_type
from .list_entity import ListEntityMixin
from .phrase_list import PhraseListMixin, split_interchangeable
from .prebuilt import PrebuiltEntityMixin
from .regex import RegexEntityMixin
from .simple import SimpleEntityMixin


class DeclarationHandler(
    BaseHandler,
    SimpleEntityMixin,
    ListEntityMixin,
    CompositeEntityMixin,
    RegexEntityMixin,
    PrebuiltEntityMixin,
    PhraseListMixin,
    DefinitionMixin,
):
    """
    Complete entity declaration handler.

    This class composes all handler mixins. Each mixin merges one kind of
    declaration into the registry:

    - SimpleEntityMixin: Simple and pattern-any entities
    - ListEntityMixin: List entities and their canonical forms
    - CompositeEntityMixin: Composite entities and their children
    - RegexEntityMixin: Regex entities
    - PrebuiltEntityMixin: Prebuilt entities with locale availability
    - PhraseListMixin: Phrase lists
    - DefinitionMixin: Dispatch of ``@`` and legacy ``$`` sections
    """

    pass


__all__ = [
    "BaseHandler",
    "DeclarationHandler",
    "HandlerProtocol",
    "KIND_LABELS",
    "get_roles_and_type",
    "merge_roles",
    "split_children",
    "split_interchangeable",
]
