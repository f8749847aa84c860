"""Tests for config loading and adapter wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from blograph.adapters.ids.sequential import SequentialGenerator
from blograph.adapters.ids.uuid_ids import UUIDGenerator
from blograph.adapters.stores.in_memory_entity import InMemoryEntityStore
from blograph.config import (
    build_entity_store,
    build_from_dict,
    build_id_generator,
    build_orchestrator,
    load_config,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class TestFactories:
    def test_defaults(self):
        assert isinstance(build_entity_store({}), InMemoryEntityStore)
        assert isinstance(build_id_generator({}), UUIDGenerator)

    def test_sequential_ids(self):
        gen = build_id_generator({"adapter": "sequential", "prefix": "x", "start": 7})
        assert isinstance(gen, SequentialGenerator)
        assert gen.next() == "x7"

    def test_unknown_adapters(self):
        with pytest.raises(ValueError, match="entity_store"):
            build_entity_store({"adapter": "postgres"})
        with pytest.raises(ValueError, match="ids"):
            build_id_generator({"adapter": "snowflake"})


class TestBuild:
    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_empty_config_builds_empty_graph(self):
        orch = build_from_dict({})
        assert orch.stats() == {"users": 0, "posts": 0, "comments": 0}

    def test_seed_path_relative_to_config(self, tmp_path):
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "seed.yaml").write_text(yaml.safe_dump({
            "users": [{"id": "u1", "name": "A", "email": "a@x"}],
        }))
        cfg = tmp_path / "config.yaml"
        cfg.write_text(yaml.safe_dump({
            "ids": {"adapter": "sequential"},
            "seed": {"path": "data/seed.yaml"},
        }))
        orch = build_orchestrator(str(cfg))
        assert [u.id for u in orch.list_users()] == ["u1"]

    def test_shipped_config_and_seed(self):
        orch = build_orchestrator(str(PROJECT_ROOT / "config.yaml"))
        st = orch.stats()
        assert st["users"] == 3
        assert st["posts"] == 3
        assert st["comments"] == 3

    def test_sequential_ids_with_shipped_seed(self, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(yaml.safe_dump({
            "ids": {"adapter": "sequential"},
            "seed": {"path": str(PROJECT_ROOT / "data" / "seed.yaml")},
        }))
        orch = build_orchestrator(str(cfg))
        seeded = {u.id for u in orch.list_users()}

        user = orch.create_user("New", "new@example.com")
        assert user.ok, user.error
        assert user.value.id not in seeded

        post = orch.create_post("Fresh", "", True, user.value.id)
        assert post.ok, post.error
        comment = orch.create_comment("hi", "1", post.value.id)
        assert comment.ok, comment.error
        assert orch.stats() == {"users": 4, "posts": 4, "comments": 4}

    def test_sequential_ids_with_shipped_seed_over_http(self, tmp_path):
        from fastapi.testclient import TestClient

        from blograph.api.server import create_app

        cfg = tmp_path / "config.yaml"
        cfg.write_text(yaml.safe_dump({
            "ids": {"adapter": "sequential"},
            "seed": {"path": str(PROJECT_ROOT / "data" / "seed.yaml")},
        }))
        client = TestClient(create_app(build_orchestrator(str(cfg))))
        for n in range(3):
            resp = client.post("/users", json={"name": f"U{n}", "email": f"u{n}@example.com"})
            assert resp.status_code == 200, resp.json()
