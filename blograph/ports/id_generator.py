"""Port: identifier allocation."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IdGeneratorPort(ABC):
    """Produce identifiers that are never handed out twice."""

    @abstractmethod
    def next(self) -> str:
        """Return a fresh identifier."""
