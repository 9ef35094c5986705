"""
Entity registry for one LU parse pass.

Holds every entity definition keyed by name, partitioned by kind, plus the
flat name/role index used to enforce global name and role disjointness.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from . import ir
from .errors import DuplicateEntityDefinition, ErrorContext, RoleNameCollision

# Lookup order used when an utterance label is resolved against the registry
RESOLUTION_ORDER: tuple[ir.EntityKind, ...] = (
    ir.EntityKind.COMPOSITE,
    ir.EntityKind.LIST,
    ir.EntityKind.PREBUILT,
    ir.EntityKind.REGEX,
    ir.EntityKind.PATTERN_ANY,
)


def split_roles(roles: str | None) -> list[str]:
    """Split a comma separated roles string, trimming and dropping duplicates."""
    if not roles:
        return []
    result: list[str] = []
    for role in roles.split(","):
        role = role.strip()
        if role and role not in result:
            result.append(role)
    return result


def _describe(entry: ir.EntityAndRoles) -> str:
    definition = f"@ {entry.type} {entry.name}"
    if entry.roles:
        definition += f" hasRoles {','.join(entry.roles)}"
    return definition


@dataclass
class EntityRegistry:
    """
    Name-indexed entity tables for every kind.

    Lookups return None when nothing matches; only the ``assert_*`` methods
    raise.
    """

    simple: dict[str, ir.SimpleEntity] = field(default_factory=dict)
    lists: dict[str, ir.ListEntity] = field(default_factory=dict)
    composites: dict[str, ir.CompositeEntity] = field(default_factory=dict)
    regexes: dict[str, ir.RegexEntity] = field(default_factory=dict)
    prebuilts: dict[str, ir.PrebuiltEntity] = field(default_factory=dict)
    pattern_any: dict[str, ir.PatternAnyEntity] = field(default_factory=dict)
    phrase_lists: dict[str, ir.PhraseListEntity] = field(default_factory=dict)

    # Flat name/role index built from explicit definitions
    flat_index: dict[str, ir.EntityAndRoles] = field(default_factory=dict)
    role_owners: dict[str, str] = field(default_factory=dict)

    def table(self, kind: ir.EntityKind) -> dict[str, ir.EntityRecord]:
        """Return the mutable table holding entities of ``kind``."""
        tables: dict[ir.EntityKind, dict] = {
            ir.EntityKind.SIMPLE: self.simple,
            ir.EntityKind.LIST: self.lists,
            ir.EntityKind.COMPOSITE: self.composites,
            ir.EntityKind.REGEX: self.regexes,
            ir.EntityKind.PREBUILT: self.prebuilts,
            ir.EntityKind.PATTERN_ANY: self.pattern_any,
            ir.EntityKind.PHRASE_LIST: self.phrase_lists,
        }
        return tables[kind]

    def get(self, kind: ir.EntityKind, name: str) -> ir.EntityRecord | None:
        return self.table(kind).get(name)

    def find(
        self, name: str, kinds: tuple[ir.EntityKind, ...] = tuple(ir.EntityKind)
    ) -> ir.EntityRecord | None:
        """Return the first entity named ``name`` among ``kinds``, in order."""
        for kind in kinds:
            record = self.table(kind).get(name)
            if record is not None:
                return record
        return None

    def upsert(self, kind: ir.EntityKind, name: str, roles: list[str]) -> ir.EntityRecord:
        """
        Find or create the ``kind`` entity called ``name`` and union ``roles`` into it.

        Only the table for ``kind`` is consulted; reconciling a name held by a
        different kind is left to the declaration handlers.
        """
        table = self.table(kind)
        record = table.get(name)
        if record is None:
            record = ir.ENTITY_MODELS[kind](name=name)
            table[name] = record
        record.add_roles(roles)
        return record

    def remove(self, kind: ir.EntityKind, name: str) -> ir.EntityRecord | None:
        return self.table(kind).pop(name, None)

    def remove_pattern_any(self, name: str) -> list[str] | None:
        """
        Pop a transient pattern-any entity.

        Returns:
            Its roles, or None if no pattern-any entity has that name
        """
        record = self.pattern_any.pop(name, None)
        if record is None:
            return None
        return list(record.roles)

    def find_by_role(self, role: str) -> ir.EntityAndRoles | None:
        owner = self.role_owners.get(role)
        if owner is None:
            return None
        return self.flat_index.get(owner)

    def assert_name_role_disjoint(
        self,
        name: str,
        roles: list[str],
        entity_type: str,
        context: ErrorContext | None = None,
    ) -> None:
        """
        Check ``name`` and ``roles`` against the flat index, then record them.

        Raises:
            DuplicateEntityDefinition: If ``name`` is already declared with another type
            RoleNameCollision: If ``name`` is a role, or a role is already a name or
                another entity's role
        """
        existing = self.flat_index.get(name)
        if existing is not None and existing.type != entity_type:
            raise DuplicateEntityDefinition(
                f'Entity names must be unique. Duplicate definition found for "{name}". '
                f"Prior definition - '{_describe(existing)}'",
                context,
            )

        role_owner = self.find_by_role(name)
        if role_owner is not None:
            raise RoleNameCollision(
                "Entity name cannot be the same as a role name. "
                f'Duplicate definition found for "{name}". '
                f"Prior definition - '{_describe(role_owner)}'",
                context,
            )

        for role in roles:
            conflict: ir.EntityAndRoles | None
            if role == name:
                conflict = existing or ir.EntityAndRoles(name=name, type=entity_type)
            else:
                conflict = self.flat_index.get(role)
                if conflict is None:
                    owner = self.find_by_role(role)
                    if owner is not None and owner.name != name:
                        conflict = owner
            if conflict is None:
                continue
            raise RoleNameCollision(
                "Roles must be unique across entity types. "
                f'Invalid role definition found "{role}" for "{name}". '
                f"Prior definition - '{_describe(conflict)}'",
                context,
            )

        if existing is None:
            existing = ir.EntityAndRoles(name=name, type=entity_type)
            self.flat_index[name] = existing
        existing.add_roles(roles)
        for role in roles:
            self.role_owners[role] = name

    def records(self) -> Iterator[ir.EntityRecord]:
        """Iterate every entity of every kind."""
        for kind in ir.EntityKind:
            yield from self.table(kind).values()
