"""
LU Intermediate Representation (IR) types.

Types are organized into submodules and re-exported here.
"""

# Application
from .app import (
    EntityAndRoles,
    Intent,
    LuisApp,
    Pattern,
    Utterance,
    UtteranceEntityLabel,
)

# Entities
from .entities import (
    ENTITY_MODELS,
    CompositeEntity,
    EntityBase,
    EntityKind,
    EntityRecord,
    ListEntity,
    PatternAnyEntity,
    PhraseListEntity,
    PrebuiltEntity,
    RegexEntity,
    SimpleEntity,
    SubList,
)

# Knowledge base
from .qna import (
    QNA_SOURCE,
    Alterations,
    FileToParse,
    KnowledgeBase,
    QnaFile,
    QnaMetadata,
    QnaPair,
    WordAlterations,
)

__all__ = [
    # Application
    "EntityAndRoles",
    "Intent",
    "LuisApp",
    "Pattern",
    "Utterance",
    "UtteranceEntityLabel",
    # Entities
    "ENTITY_MODELS",
    "CompositeEntity",
    "EntityBase",
    "EntityKind",
    "EntityRecord",
    "ListEntity",
    "PatternAnyEntity",
    "PhraseListEntity",
    "PrebuiltEntity",
    "RegexEntity",
    "SimpleEntity",
    "SubList",
    # Knowledge base
    "QNA_SOURCE",
    "Alterations",
    "FileToParse",
    "KnowledgeBase",
    "QnaFile",
    "QnaMetadata",
    "QnaPair",
    "WordAlterations",
]
