"""Identifier generators."""

from blograph.adapters.ids.sequential import SequentialGenerator
from blograph.adapters.ids.uuid_ids import UUIDGenerator

__all__ = ["SequentialGenerator", "UUIDGenerator"]
