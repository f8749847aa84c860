"""Configuration loading and adapter factory.

Reads a YAML config file and instantiates the correct adapter
for each port, then wires them into the GraphOrchestrator.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Walk up from this file (blograph/config.py) to the project root and load .env
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env", override=False)

from blograph.ports.entity_store import EntityStorePort  # noqa: E402
from blograph.ports.id_generator import IdGeneratorPort  # noqa: E402
from blograph.services.orchestrator import GraphOrchestrator  # noqa: E402
from blograph.services.seeding import load_seed  # noqa: E402

log = logging.getLogger(__name__)

DEFAULT_CONFIG = "config.yaml"


def default_config_path() -> str:
    return os.environ.get("BLOGRAPH_CONFIG", DEFAULT_CONFIG)


def load_config(path: str = DEFAULT_CONFIG) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(p) as f:
        return yaml.safe_load(f) or {}


# ── Adapter factories ──


def build_entity_store(cfg: dict[str, Any]) -> EntityStorePort:
    adapter = cfg.get("adapter", "in_memory")

    if adapter == "in_memory":
        from blograph.adapters.stores.in_memory_entity import InMemoryEntityStore
        return InMemoryEntityStore()

    raise ValueError(f"Unknown entity_store adapter: {adapter}")


def build_id_generator(cfg: dict[str, Any]) -> IdGeneratorPort:
    adapter = cfg.get("adapter", "uuid")

    if adapter == "uuid":
        from blograph.adapters.ids.uuid_ids import UUIDGenerator
        return UUIDGenerator()

    elif adapter == "sequential":
        from blograph.adapters.ids.sequential import SequentialGenerator
        return SequentialGenerator(
            prefix=cfg.get("prefix", ""),
            start=int(cfg.get("start", 1)),
        )

    raise ValueError(f"Unknown ids adapter: {adapter}")


# ── Top-level builders ──


def build_from_dict(cfg: dict[str, Any], *, config_dir: str = ".") -> GraphOrchestrator:
    """Wire an orchestrator from an already-parsed config mapping."""
    log.info("  → building entity store …")
    store = build_entity_store(cfg.get("entity_store", {}))
    log.info("  ✓ entity store ready")

    log.info("  → building id generator …")
    ids = build_id_generator(cfg.get("ids", {}))
    log.info("  ✓ id generator ready")

    orch = GraphOrchestrator(store=store, ids=ids)

    seed_path = (cfg.get("seed") or {}).get("path")
    if seed_path:
        resolved = str((Path(config_dir) / seed_path).resolve())
        log.info("  → loading seed data from %s", resolved)
        load_seed(orch, resolved)

    return orch


def build_orchestrator(config_path: str = DEFAULT_CONFIG) -> GraphOrchestrator:
    """Load config and wire all adapters into the orchestrator."""
    cfg = load_config(config_path)
    config_parent = str(Path(config_path).resolve().parent)
    return build_from_dict(cfg, config_dir=config_parent)
