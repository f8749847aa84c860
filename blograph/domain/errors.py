"""Error taxonomy and the tagged result returned by mutations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class GraphError(Exception):
    """Base class for every failure the entity graph reports."""

    kind = "GraphError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": self.message}


class NotFound(GraphError):
    """A delete targeted an id that is not in the store."""

    kind = "NotFound"


class AuthorNotFound(GraphError):
    """A create referenced a User that does not exist."""

    kind = "AuthorNotFound"


class PostNotFound(GraphError):
    """A comment referenced a Post that is absent or unpublished."""

    kind = "PostNotFound"


class DuplicateEmail(GraphError):
    """Another User already owns this email."""

    kind = "DuplicateEmail"


class DanglingReference(GraphError):
    """A foreign key points at an entity that no longer exists."""

    kind = "DanglingReference"


class DuplicateIdentifier(GraphError):
    """An insert reused an id already present in its collection."""

    kind = "DuplicateIdentifier"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a single mutation: either ``value`` or ``error``."""

    value: T | None = None
    error: GraphError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GraphError) -> Result[T]:
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
