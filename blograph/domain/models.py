"""Pure domain models — zero external dependencies."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Union


class EntityKind(str, Enum):
    """Addresses one of the three entity collections."""

    USER = "user"
    POST = "post"
    COMMENT = "comment"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


# ── Entities ────────────────────────────────────────────────────────────────
#
# Foreign keys (``Post.author``, ``Comment.author``, ``Comment.post``) hold
# identifiers, never objects.  Resolve them through the RelationshipResolver.


@dataclass(frozen=True)
class User:
    """A registered author."""

    id: str
    name: str
    email: str
    age: int | None = None

    kind = EntityKind.USER

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Post:
    """A post written by a User."""

    id: str
    title: str
    body: str
    published: bool
    author: str  # → User.id

    kind = EntityKind.POST

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Comment:
    """A comment left by a User on a published Post."""

    id: str
    text: str
    author: str  # → User.id
    post: str  # → Post.id

    kind = EntityKind.COMMENT

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


Entity = Union[User, Post, Comment]
