"""Integrity engine: create/delete operations that keep foreign keys valid.

Each operation runs under the exclusive side of the store lock and performs
every check before its first write, so a rejected mutation leaves the store
untouched.  Failures come back as ``Result.failure(...)`` rather than being
raised, forcing callers to branch on the outcome.
"""

from __future__ import annotations

import logging

from blograph.domain.errors import (
    AuthorNotFound,
    DuplicateEmail,
    NotFound,
    PostNotFound,
    Result,
)
from blograph.domain.models import Comment, EntityKind, Post, User
from blograph.ports.entity_store import EntityStorePort
from blograph.ports.id_generator import IdGeneratorPort
from blograph.services.locking import ReadWriteLock
from blograph.services.relationships import RelationshipResolver

log = logging.getLogger(__name__)


class IntegrityEngine:
    """The only writer of the entity store."""

    def __init__(
        self,
        store: EntityStorePort,
        ids: IdGeneratorPort,
        resolver: RelationshipResolver,
        lock: ReadWriteLock | None = None,
    ) -> None:
        self._store = store
        self._ids = ids
        self._resolver = resolver
        self._lock = lock or ReadWriteLock()

    # ── users ──

    def create_user(
        self, name: str, email: str, age: int | None = None
    ) -> Result[User]:
        with self._lock.write():
            # Exact, case-sensitive match.
            if any(u.email == email for u in self._store.scan(EntityKind.USER)):
                log.info("Rejected user: email %r already taken", email)
                return Result.failure(DuplicateEmail(f"Email '{email}' is already taken"))

            user = User(
                id=self._allocate(EntityKind.USER), name=name, email=email, age=age
            )
            self._store.insert(user)
            log.info("Created user %s (%s)", user.id, user.email)
            return Result.success(user)

    def delete_user(self, user_id: str) -> Result[User]:
        """Delete a user and everything that depends on it.

        Order: comments on the user's posts → the user's posts → the user's
        remaining comments (on other authors' posts) → the user.
        """
        with self._lock.write():
            user = self._store.find_by_id(EntityKind.USER, user_id)
            if user is None:
                return Result.failure(NotFound(f"User '{user_id}' not found"))

            posts = self._resolver.posts_of(user)  # type: ignore[arg-type]
            removed_comments = 0
            for post in posts:
                removed_comments += self._delete_comments_on(post)
                self._store.delete_by_id(EntityKind.POST, post.id)

            for comment in self._resolver.comments_of(user):  # type: ignore[arg-type]
                self._store.delete_by_id(EntityKind.COMMENT, comment.id)
                removed_comments += 1

            self._store.delete_by_id(EntityKind.USER, user_id)
            log.info(
                "Deleted user %s (cascade: %d post(s), %d comment(s))",
                user_id, len(posts), removed_comments,
            )
            return Result.success(user)  # type: ignore[arg-type]

    # ── posts ──

    def create_post(
        self, title: str, body: str, published: bool, author_id: str
    ) -> Result[Post]:
        with self._lock.write():
            if self._store.find_by_id(EntityKind.USER, author_id) is None:
                log.info("Rejected post: author %s not found", author_id)
                return Result.failure(AuthorNotFound(f"User '{author_id}' not found"))

            post = Post(
                id=self._allocate(EntityKind.POST),
                title=title,
                body=body,
                published=published,
                author=author_id,
            )
            self._store.insert(post)
            log.info("Created post %s by %s", post.id, author_id)
            return Result.success(post)

    def delete_post(self, post_id: str) -> Result[Post]:
        with self._lock.write():
            post = self._store.find_by_id(EntityKind.POST, post_id)
            if post is None:
                return Result.failure(NotFound(f"Post '{post_id}' not found"))

            removed = self._delete_comments_on(post)  # type: ignore[arg-type]
            self._store.delete_by_id(EntityKind.POST, post_id)
            log.info("Deleted post %s (cascade: %d comment(s))", post_id, removed)
            return Result.success(post)  # type: ignore[arg-type]

    # ── comments ──

    def create_comment(
        self, text: str, author_id: str, post_id: str
    ) -> Result[Comment]:
        with self._lock.write():
            if self._store.find_by_id(EntityKind.USER, author_id) is None:
                log.info("Rejected comment: author %s not found", author_id)
                return Result.failure(AuthorNotFound(f"User '{author_id}' not found"))

            post = self._store.find_by_id(EntityKind.POST, post_id)
            if post is None or not post.published:  # type: ignore[union-attr]
                log.info("Rejected comment: post %s missing or unpublished", post_id)
                return Result.failure(
                    PostNotFound(f"Post '{post_id}' not found or not published")
                )

            comment = Comment(
                id=self._allocate(EntityKind.COMMENT),
                text=text,
                author=author_id,
                post=post_id,
            )
            self._store.insert(comment)
            log.info("Created comment %s on post %s", comment.id, post_id)
            return Result.success(comment)

    def delete_comment(self, comment_id: str) -> Result[Comment]:
        with self._lock.write():
            comment = self._store.delete_by_id(EntityKind.COMMENT, comment_id)
            if comment is None:
                return Result.failure(NotFound(f"Comment '{comment_id}' not found"))
            log.info("Deleted comment %s", comment_id)
            return Result.success(comment)  # type: ignore[arg-type]

    # ── helpers ──

    def _delete_comments_on(self, post: Post) -> int:
        comments = self._resolver.comments_of(post)
        for c in comments:
            self._store.delete_by_id(EntityKind.COMMENT, c.id)
        if comments:
            log.debug("Removed %d comment(s) on post %s", len(comments), post.id)
        return len(comments)

    def _allocate(self, kind: EntityKind) -> str:
        """Next id from the generator that is free in *kind*'s collection.

        Seeded entities carry their own ids, which a generator may hand out
        again; those are skipped rather than inserted over.
        """
        entity_id = self._ids.next()
        while self._store.find_by_id(kind, entity_id) is not None:
            log.debug("Skipping id %s: already taken by a %s", entity_id, kind.value)
            entity_id = self._ids.next()
        return entity_id
