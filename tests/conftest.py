"""Shared test fixtures — fresh stores and a small sample graph."""

from __future__ import annotations

import pytest

from blograph.adapters.ids.sequential import SequentialGenerator
from blograph.adapters.stores.in_memory_entity import InMemoryEntityStore
from blograph.services.orchestrator import GraphOrchestrator
from blograph.services.relationships import RelationshipResolver


# ── Fixtures ──


@pytest.fixture
def store():
    return InMemoryEntityStore()


@pytest.fixture
def ids():
    return SequentialGenerator()


@pytest.fixture
def resolver(store):
    return RelationshipResolver(store)


@pytest.fixture
def orch(store, ids):
    return GraphOrchestrator(store=store, ids=ids)


@pytest.fixture
def sample(orch):
    """Two users, one published and one draft post by Alice, comments from both.

    Returns a dict of the created entities keyed by a short name.
    """
    alice = orch.create_user("Alice", "alice@example.com", 30).unwrap()
    bob = orch.create_user("Bob", "bob@example.com").unwrap()
    first = orch.create_post("First post test", "hello world", True, alice.id).unwrap()
    draft = orch.create_post("Second post test", "work in progress", False, alice.id).unwrap()
    bobs = orch.create_post("Bob's notes", "Second thoughts", True, bob.id).unwrap()
    c_bob = orch.create_comment("Nice one", bob.id, first.id).unwrap()
    c_alice = orch.create_comment("Thanks!", alice.id, first.id).unwrap()
    c_alice_on_bob = orch.create_comment("Agreed", alice.id, bobs.id).unwrap()
    return {
        "alice": alice,
        "bob": bob,
        "first": first,
        "draft": draft,
        "bobs": bobs,
        "c_bob": c_bob,
        "c_alice": c_alice,
        "c_alice_on_bob": c_alice_on_bob,
    }
