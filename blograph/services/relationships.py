"""Relationship resolution: turn foreign keys into related entities.

Every lookup scans the store at call time.  Nothing is cached and no
back-references are kept on the entities, so callers only pay for the
relations they actually ask for.
"""

from __future__ import annotations

from blograph.domain.errors import DanglingReference
from blograph.domain.models import Comment, EntityKind, Post, User
from blograph.ports.entity_store import EntityStorePort


class RelationshipResolver:
    """Stateless relation lookups over an entity store."""

    def __init__(self, store: EntityStorePort) -> None:
        self._store = store

    # ── to-one ──

    def author_of(self, entity: Post | Comment) -> User:
        user = self._store.find_by_id(EntityKind.USER, entity.author)
        if user is None:
            raise DanglingReference(
                f"{entity.kind.value} '{entity.id}' references missing "
                f"user '{entity.author}'"
            )
        return user  # type: ignore[return-value]

    def post_of(self, comment: Comment) -> Post:
        post = self._store.find_by_id(EntityKind.POST, comment.post)
        if post is None:
            raise DanglingReference(
                f"comment '{comment.id}' references missing post '{comment.post}'"
            )
        return post  # type: ignore[return-value]

    # ── to-many ──

    def posts_of(self, user: User) -> list[Post]:
        return [
            p for p in self._store.scan(EntityKind.POST) if p.author == user.id
        ]

    def comments_of(self, entity: User | Post) -> list[Comment]:
        """Comments authored by a User, or left on a Post."""
        if isinstance(entity, User):
            return [
                c
                for c in self._store.scan(EntityKind.COMMENT)
                if c.author == entity.id
            ]
        return [
            c for c in self._store.scan(EntityKind.COMMENT) if c.post == entity.id
        ]
