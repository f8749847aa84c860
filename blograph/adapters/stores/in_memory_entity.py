"""Entity store adapter: in-memory."""

from __future__ import annotations

from blograph.domain.errors import DuplicateIdentifier
from blograph.domain.models import Entity, EntityKind
from blograph.ports.entity_store import EntityStorePort


class InMemoryEntityStore(EntityStorePort):
    """Non-persistent store — one insertion-ordered dict per entity kind."""

    def __init__(self) -> None:
        self._tables: dict[EntityKind, dict[str, Entity]] = {
            kind: {} for kind in EntityKind
        }

    def insert(self, entity: Entity) -> None:
        table = self._tables[entity.kind]
        if entity.id in table:
            raise DuplicateIdentifier(
                f"{entity.kind.value} with id '{entity.id}' already exists"
            )
        table[entity.id] = entity

    def delete_by_id(self, kind: EntityKind, entity_id: str) -> Entity | None:
        return self._tables[kind].pop(entity_id, None)

    def find_by_id(self, kind: EntityKind, entity_id: str) -> Entity | None:
        return self._tables[kind].get(entity_id)

    def scan(self, kind: EntityKind) -> tuple[Entity, ...]:
        return tuple(self._tables[kind].values())

    def count(self, kind: EntityKind) -> int:
        return len(self._tables[kind])

    def clear(self) -> None:
        for table in self._tables.values():
            table.clear()
