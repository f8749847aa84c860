"""Id generator adapter: monotonically increasing counters."""

from __future__ import annotations

import itertools
import threading

from blograph.ports.id_generator import IdGeneratorPort


class SequentialGenerator(IdGeneratorPort):
    """Yields ``"<prefix>1"``, ``"<prefix>2"``, … — handy for fixtures and demos.

    Ids must not collide with seeded ones, so pass ``start`` past the
    largest numeric id you load.
    """

    def __init__(self, prefix: str = "", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self._prefix}{n}"
