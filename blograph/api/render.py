"""Render entities into response dicts, resolving relations per selected field."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from blograph.api.selection import FieldNode, SelectionError
from blograph.domain.models import Entity, EntityKind
from blograph.services.relationships import RelationshipResolver

_Relation = Callable[[RelationshipResolver, Any], "Entity | list[Entity]"]

SCALARS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.USER: ("id", "name", "email", "age"),
    EntityKind.POST: ("id", "title", "body", "published"),
    EntityKind.COMMENT: ("id", "text"),
}

RELATIONS: dict[EntityKind, dict[str, _Relation]] = {
    EntityKind.USER: {
        "posts": lambda r, u: r.posts_of(u),
        "comments": lambda r, u: r.comments_of(u),
    },
    EntityKind.POST: {
        "author": lambda r, p: r.author_of(p),
        "comments": lambda r, p: r.comments_of(p),
    },
    EntityKind.COMMENT: {
        "author": lambda r, c: r.author_of(c),
        "post": lambda r, c: r.post_of(c),
    },
}


def render(
    entity: Entity,
    selection: Iterable[FieldNode] | None,
    resolver: RelationshipResolver,
) -> dict[str, Any]:
    """Project *entity* onto *selection*.

    With no selection the entity's own fields are returned, foreign keys
    included as plain ids.  A relation is only looked up when it is named.
    """
    if selection is None:
        return entity.to_dict()

    kind = entity.kind
    out: dict[str, Any] = {}
    for node in selection:
        if node.name in SCALARS[kind]:
            if node.children:
                raise SelectionError(
                    f"Field '{node.name}' on {kind.value} has no sub-fields"
                )
            out[node.name] = getattr(entity, node.name)
        elif node.name in RELATIONS[kind]:
            related = RELATIONS[kind][node.name](resolver, entity)
            sub = node.children or None
            if isinstance(related, list):
                out[node.name] = [render(e, sub, resolver) for e in related]
            else:
                out[node.name] = render(related, sub, resolver)
        else:
            raise SelectionError(f"Unknown field '{node.name}' on {kind.value}")
    return out


def render_many(
    entities: Iterable[Entity],
    selection: Iterable[FieldNode] | None,
    resolver: RelationshipResolver,
) -> list[dict[str, Any]]:
    return [render(e, selection, resolver) for e in entities]
