"""Seed loader: restore a known dataset with explicit ids.

The file (YAML or JSON) holds ``users``, ``posts`` and ``comments`` lists.
Every foreign key must point at a user/post already in the store or earlier
in the file.  The whole file is validated before the first insert, so a bad
seed leaves the store as it was.

Seeding restores state rather than creating it, so a comment on an
unpublished post is accepted here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from blograph.domain.errors import DanglingReference, DuplicateEmail, DuplicateIdentifier
from blograph.domain.models import Comment, Entity, EntityKind, Post, User
from blograph.services.orchestrator import GraphOrchestrator

log = logging.getLogger(__name__)


def read_seed(path: str) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")
    text = p.read_text(encoding="utf-8")
    if p.suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text) or {}


def parse_seed(data: dict[str, Any]) -> list[Entity]:
    """Turn raw seed dicts into entities, users first, then posts, then comments."""
    entities: list[Entity] = []
    for raw in data.get("users") or []:
        entities.append(
            User(
                id=str(raw["id"]),
                name=raw["name"],
                email=raw["email"],
                age=raw.get("age"),
            )
        )
    for raw in data.get("posts") or []:
        entities.append(
            Post(
                id=str(raw["id"]),
                title=raw["title"],
                body=raw.get("body", ""),
                published=bool(raw["published"]),
                author=str(raw["author"]),
            )
        )
    for raw in data.get("comments") or []:
        entities.append(
            Comment(
                id=str(raw["id"]),
                text=raw["text"],
                author=str(raw["author"]),
                post=str(raw["post"]),
            )
        )
    return entities


def load_seed(orch: GraphOrchestrator, path: str) -> int:
    """Validate and insert the seed file at *path*. Returns the entity count."""
    entities = parse_seed(read_seed(path))

    with orch.restoring() as store:
        seen: dict[EntityKind, set[str]] = {
            kind: {e.id for e in store.scan(kind)} for kind in EntityKind
        }
        emails = {u.email for u in store.scan(EntityKind.USER)}  # type: ignore[union-attr]

        for e in entities:
            if e.id in seen[e.kind]:
                raise DuplicateIdentifier(f"Seed {e.kind.value} id '{e.id}' is duplicated")
            if isinstance(e, User):
                if e.email in emails:
                    raise DuplicateEmail(f"Seed email '{e.email}' is duplicated")
                emails.add(e.email)
            else:
                if e.author not in seen[EntityKind.USER]:
                    raise DanglingReference(
                        f"Seed {e.kind.value} '{e.id}' references unknown user '{e.author}'"
                    )
                if isinstance(e, Comment) and e.post not in seen[EntityKind.POST]:
                    raise DanglingReference(
                        f"Seed comment '{e.id}' references unknown post '{e.post}'"
                    )
            seen[e.kind].add(e.id)

        for e in entities:
            store.insert(e)

    log.info("Seeded %d entities from %s", len(entities), path)
    return len(entities)
