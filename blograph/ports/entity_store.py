"""Port: entity collection storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from blograph.domain.models import Entity, EntityKind


class EntityStorePort(ABC):
    """Hold the user, post and comment collections keyed by id.

    No method performs referential checks; that is layered above.
    """

    # ── write ──

    @abstractmethod
    def insert(self, entity: Entity) -> None:
        """Append *entity* to its collection.

        Raises ``DuplicateIdentifier`` if the id is already present.
        """

    @abstractmethod
    def delete_by_id(self, kind: EntityKind, entity_id: str) -> Entity | None:
        """Remove and return the entity, or ``None`` if absent."""

    # ── read ──

    @abstractmethod
    def find_by_id(self, kind: EntityKind, entity_id: str) -> Entity | None: ...

    @abstractmethod
    def scan(self, kind: EntityKind) -> Sequence[Entity]:
        """Snapshot of the collection in insertion order.

        The returned sequence is finite and can be iterated any number of
        times; later writes do not show through it.
        """

    @abstractmethod
    def count(self, kind: EntityKind) -> int: ...

    # ── lifecycle ──

    @abstractmethod
    def clear(self) -> None: ...
