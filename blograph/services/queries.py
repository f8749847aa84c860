"""Query/filter layer: read-only listings with substring search."""

from __future__ import annotations

from blograph.domain.models import Comment, EntityKind, Post, User
from blograph.ports.entity_store import EntityStorePort


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


class QueryService:
    """Pure reads against the store as it is at call time."""

    def __init__(self, store: EntityStorePort) -> None:
        self._store = store

    def list_users(self, query: str | None = None) -> list[User]:
        """All users, or those whose name contains *query* (case-insensitive)."""
        users = self._store.scan(EntityKind.USER)
        if not query:
            return list(users)
        return [u for u in users if _contains(u.name, query)]

    def list_posts(self, query: str | None = None) -> list[Post]:
        """All posts, or those whose title or body contains *query*."""
        posts = self._store.scan(EntityKind.POST)
        if not query:
            return list(posts)
        return [p for p in posts if _contains(p.title, query) or _contains(p.body, query)]

    def list_comments(self) -> list[Comment]:
        return list(self._store.scan(EntityKind.COMMENT))

    # ── single lookups ──

    def get_user(self, user_id: str) -> User | None:
        return self._store.find_by_id(EntityKind.USER, user_id)  # type: ignore[return-value]

    def get_post(self, post_id: str) -> Post | None:
        return self._store.find_by_id(EntityKind.POST, post_id)  # type: ignore[return-value]

    def get_comment(self, comment_id: str) -> Comment | None:
        return self._store.find_by_id(EntityKind.COMMENT, comment_id)  # type: ignore[return-value]
