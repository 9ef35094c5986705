"""
Intent-recognition application types for the LU IR.

``LuisApp`` is the read-only view handed to consumers once a parse pass has
finished; it mirrors the target service's application JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .entities import (
    CompositeEntity,
    ListEntity,
    PatternAnyEntity,
    PhraseListEntity,
    PrebuiltEntity,
    RegexEntity,
    SimpleEntity,
)


class Intent(BaseModel):
    """
    An intent, created on first reference.

    Attributes:
        name: Intent name
        inherits: Optional key/value metadata from ``@intent.inherits``
    """

    name: str
    inherits: dict[str, str] | None = None


class UtteranceEntityLabel(BaseModel):
    """A labelled span inside an utterance; offsets are inclusive."""

    entity: str
    start_pos: int = Field(alias="startPos")
    end_pos: int = Field(alias="endPos")
    role: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class Utterance(BaseModel):
    text: str
    intent: str
    entities: list[UtteranceEntityLabel] = Field(default_factory=list)

    def add_label(self, label: UtteranceEntityLabel) -> None:
        """Add ``label`` unless an identical label is already present."""
        if label not in self.entities:
            self.entities.append(label)


class Pattern(BaseModel):
    """Templated utterance with ``{entity}`` / ``{entity:role}`` placeholders."""

    pattern: str
    intent: str

    model_config = ConfigDict(frozen=True)


class EntityAndRoles(BaseModel):
    """
    Entry of the flat name/role index.

    Attributes:
        name: Entity name
        type: Declared entity type as written in the definition
        roles: Roles declared for the entity so far
    """

    name: str
    type: str
    roles: list[str] = Field(default_factory=list)

    def add_roles(self, roles: list[str]) -> None:
        for role in roles:
            if role not in self.roles:
                self.roles.append(role)


class LuisApp(BaseModel):
    """
    Consolidated intent-recognition model.

    ``settings`` holds ``@app.<key>`` directive values; :meth:`to_dict` emits
    them as top-level keys next to the model collections.
    """

    intents: list[Intent] = Field(default_factory=list)
    entities: list[SimpleEntity] = Field(default_factory=list)
    composites: list[CompositeEntity] = Field(default_factory=list)
    closed_lists: list[ListEntity] = Field(default_factory=list, alias="closedLists")
    regex_entities: list[RegexEntity] = Field(default_factory=list)
    model_features: list[PhraseListEntity] = Field(default_factory=list)
    pattern_any_entities: list[PatternAnyEntity] = Field(
        default_factory=list, alias="patternAnyEntities"
    )
    prebuilt_entities: list[PrebuiltEntity] = Field(
        default_factory=list, alias="prebuiltEntities"
    )
    utterances: list[Utterance] = Field(default_factory=list)
    patterns: list[Pattern] = Field(default_factory=list)
    settings: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    def to_dict(self) -> dict[str, Any]:
        """Dump with service field names and settings merged at the top level."""
        data = self.model_dump(by_alias=True, exclude={"settings"}, exclude_none=True)
        data.update(self.settings)
        return data
