"""Id generator adapter: random 128-bit identifiers."""

from __future__ import annotations

import uuid

from blograph.ports.id_generator import IdGeneratorPort


class UUIDGenerator(IdGeneratorPort):
    """Hex-rendered ``uuid4`` values; collisions are negligible."""

    def next(self) -> str:
        return uuid.uuid4().hex
