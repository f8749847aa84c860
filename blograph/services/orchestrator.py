"""Orchestrator: the single handle that wires store, resolver and services.

Built once per process (or once per test) and passed to every boundary
adapter.  All reads go through the shared side of one ``ReadWriteLock``;
the integrity engine takes the exclusive side for every mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from blograph.domain.errors import Result
from blograph.domain.models import Comment, EntityKind, Post, User
from blograph.ports.entity_store import EntityStorePort
from blograph.ports.id_generator import IdGeneratorPort
from blograph.services.integrity import IntegrityEngine
from blograph.services.locking import ReadWriteLock
from blograph.services.queries import QueryService
from blograph.services.relationships import RelationshipResolver

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphView:
    """Read-side services, valid only inside ``GraphOrchestrator.reading()``."""

    queries: QueryService
    resolver: RelationshipResolver


class GraphOrchestrator:
    """Top-level entry point for the entity graph.

    The public methods are the whole call surface: three listings with
    search, and a create/delete pair per entity kind.
    """

    def __init__(self, store: EntityStorePort, ids: IdGeneratorPort) -> None:
        self._store = store
        self._ids = ids
        self._lock = ReadWriteLock()

        self._resolver = RelationshipResolver(store)
        self._queries = QueryService(store)
        self._engine = IntegrityEngine(store, ids, self._resolver, self._lock)
        log.debug(
            "Orchestrator wired: store=%s ids=%s",
            type(store).__name__, type(ids).__name__,
        )

    @property
    def store(self) -> EntityStorePort:
        return self._store

    # ── reads ──

    @contextmanager
    def reading(self) -> Iterator[GraphView]:
        """Hold the read lock across a query *and* the relation lookups it triggers.

        Do not call the orchestrator's own read methods inside this block.
        """
        with self._lock.read():
            yield GraphView(self._queries, self._resolver)

    def list_users(self, query: str | None = None) -> list[User]:
        with self._lock.read():
            return self._queries.list_users(query)

    def list_posts(self, query: str | None = None) -> list[Post]:
        with self._lock.read():
            return self._queries.list_posts(query)

    def list_comments(self) -> list[Comment]:
        with self._lock.read():
            return self._queries.list_comments()

    def stats(self) -> dict[str, int]:
        with self._lock.read():
            return {kind.plural: self._store.count(kind) for kind in EntityKind}

    # ── writes ──

    def create_user(self, name: str, email: str, age: int | None = None) -> Result[User]:
        return self._engine.create_user(name, email, age)

    def delete_user(self, user_id: str) -> Result[User]:
        return self._engine.delete_user(user_id)

    def create_post(
        self, title: str, body: str, published: bool, author_id: str
    ) -> Result[Post]:
        return self._engine.create_post(title, body, published, author_id)

    def delete_post(self, post_id: str) -> Result[Post]:
        return self._engine.delete_post(post_id)

    def create_comment(self, text: str, author_id: str, post_id: str) -> Result[Comment]:
        return self._engine.create_comment(text, author_id, post_id)

    def delete_comment(self, comment_id: str) -> Result[Comment]:
        return self._engine.delete_comment(comment_id)

    # ── bulk load ──

    @contextmanager
    def restoring(self) -> Iterator[EntityStorePort]:
        """Exclusive raw store access for loaders that bring their own checks."""
        with self._lock.write():
            yield self._store
