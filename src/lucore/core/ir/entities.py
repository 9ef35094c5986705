"""
Entity record types for the LU IR.

Each entity kind is its own model with a fixed field set. ``EntityRecord`` is
the discriminated union over all seven kinds, keyed on ``kind``. Field aliases
follow the target service's JSON schema so ``model_dump(by_alias=True)``
produces the emitted shape directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityKind(str, Enum):
    """The seven entity kinds a name can be declared as."""

    SIMPLE = "simple"
    LIST = "list"
    COMPOSITE = "composite"
    REGEX = "regex"
    PREBUILT = "prebuilt"
    PATTERN_ANY = "patternany"
    PHRASE_LIST = "phraselist"


class EntityBase(BaseModel):
    """
    Fields shared by every entity kind.

    Attributes:
        name: Entity name, unique across kinds within one registry
        roles: Roles in first-seen order, without duplicates
    """

    name: str
    roles: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def add_roles(self, roles: list[str]) -> None:
        """Union ``roles`` into this entity, keeping first-seen order."""
        for role in roles:
            if role not in self.roles:
                self.roles.append(role)


class SimpleEntity(EntityBase):
    kind: Literal[EntityKind.SIMPLE] = Field(default=EntityKind.SIMPLE, exclude=True)
    inherits: dict[str, str] | None = None


class SubList(BaseModel):
    """One canonical form of a list entity and its synonyms."""

    canonical_form: str = Field(alias="canonicalForm")
    synonyms: list[str] = Field(default_factory=list, alias="list")

    model_config = ConfigDict(populate_by_name=True)

    def add_synonyms(self, synonyms: list[str]) -> None:
        for synonym in synonyms:
            if synonym not in self.synonyms:
                self.synonyms.append(synonym)


class ListEntity(EntityBase):
    kind: Literal[EntityKind.LIST] = Field(default=EntityKind.LIST, exclude=True)
    sub_lists: list[SubList] = Field(default_factory=list, alias="subLists")

    def get_sub_list(self, canonical_form: str) -> SubList | None:
        for sub_list in self.sub_lists:
            if sub_list.canonical_form == canonical_form:
                return sub_list
        return None


class CompositeEntity(EntityBase):
    kind: Literal[EntityKind.COMPOSITE] = Field(default=EntityKind.COMPOSITE, exclude=True)
    children: list[str] = Field(default_factory=list)


class RegexEntity(EntityBase):
    kind: Literal[EntityKind.REGEX] = Field(default=EntityKind.REGEX, exclude=True)
    regex_pattern: str = Field(default="", alias="regexPattern")


class PrebuiltEntity(EntityBase):
    """A prebuilt entity; ``name`` is the builtin type tag (e.g. ``number``)."""

    kind: Literal[EntityKind.PREBUILT] = Field(default=EntityKind.PREBUILT, exclude=True)


class PatternAnyEntity(EntityBase):
    """
    Placeholder kind for ``{name}`` references in patterns.

    Removed from the registry as soon as the same name is declared as any
    concrete kind; its roles carry over to the new declaration.
    """

    kind: Literal[EntityKind.PATTERN_ANY] = Field(default=EntityKind.PATTERN_ANY, exclude=True)
    explicit_list: list[str] = Field(default_factory=list, alias="explicitList")


class PhraseListEntity(EntityBase):
    """
    Phrase list (model feature).

    Attributes:
        words: Comma joined phrase values
        mode: True when the phrases are interchangeable
        activated: Always True for authored phrase lists
    """

    kind: Literal[EntityKind.PHRASE_LIST] = Field(default=EntityKind.PHRASE_LIST, exclude=True)
    words: str = ""
    mode: bool = False
    activated: bool = True

    @field_validator("roles")
    @classmethod
    def validate_no_roles(cls, v: list[str]) -> list[str]:
        """Phrase lists never carry roles."""
        if v:
            raise ValueError("Roles are not supported for phrase lists")
        return v

    @property
    def values(self) -> list[str]:
        return [word for word in self.words.split(",") if word]

    def add_values(self, values: list[str]) -> None:
        """Append values not already present, keeping the comma joined form."""
        current = self.values
        for value in values:
            if value and value not in current:
                current.append(value)
        self.words = ",".join(current)


EntityRecord = Annotated[
    SimpleEntity
    | ListEntity
    | CompositeEntity
    | RegexEntity
    | PrebuiltEntity
    | PatternAnyEntity
    | PhraseListEntity,
    Field(discriminator="kind"),
]

ENTITY_MODELS: dict[EntityKind, type[EntityBase]] = {
    EntityKind.SIMPLE: SimpleEntity,
    EntityKind.LIST: ListEntity,
    EntityKind.COMPOSITE: CompositeEntity,
    EntityKind.REGEX: RegexEntity,
    EntityKind.PREBUILT: PrebuiltEntity,
    EntityKind.PATTERN_ANY: PatternAnyEntity,
    EntityKind.PHRASE_LIST: PhraseListEntity,
}
