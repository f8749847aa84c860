"""FastAPI boundary for the entity graph.

Endpoints::

    GET    /health                 — liveness
    GET    /stats                  — entity counts
    GET    /users?query=&fields=   — list / search users
    GET    /posts?query=&fields=   — list / search posts
    GET    /comments?fields=       — list comments
    GET    /{users|posts|comments}/{id}?fields=
    POST   /users | /posts | /comments
    DELETE /users/{id} | /posts/{id} | /comments/{id}

``fields`` takes a selection such as ``id title author { name }``; related
entities are resolved only for the fields it names.

Start with::

    blograph serve
    uvicorn blograph.api.server:get_app --factory
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from blograph.api.render import render, render_many
from blograph.api.selection import FieldNode, SelectionError, parse_selection
from blograph.domain.errors import (
    AuthorNotFound,
    DanglingReference,
    DuplicateEmail,
    DuplicateIdentifier,
    GraphError,
    NotFound,
    PostNotFound,
    Result,
)
from blograph.domain.models import Entity
from blograph.services.orchestrator import GraphOrchestrator

log = logging.getLogger(__name__)

ERROR_STATUS: dict[type[GraphError], int] = {
    NotFound: 404,
    AuthorNotFound: 404,
    PostNotFound: 404,
    DuplicateEmail: 409,
    DanglingReference: 500,
    DuplicateIdentifier: 500,
}

Fields = Annotated[
    str | None, Query(description="Selection, e.g. 'id name posts { title }'.")
]


# ── Request models ──────────────────────────────────────────────────────────


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Display name.")
    email: str = Field(..., min_length=1, description="Unique email address.")
    age: int | None = Field(None, description="Optional age.")


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Post title.")
    body: str = Field(..., description="Post body; may be empty.")
    published: bool = Field(..., description="Whether comments are allowed.")
    author_id: str = Field(..., alias="authorId", description="Id of an existing user.")


class CreateCommentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Comment text.")
    author_id: str = Field(..., alias="authorId", description="Id of an existing user.")
    post_id: str = Field(..., alias="postId", description="Id of a published post.")


# ── App factory ─────────────────────────────────────────────────────────────


def create_app(orch: GraphOrchestrator) -> FastAPI:
    """Build the HTTP app around an already-wired orchestrator."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Server status: UP")
        yield
        log.info("Server status: DOWN")

    app = FastAPI(
        title="BloGraph",
        description="In-memory users/posts/comments graph with cascading deletes.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.orchestrator = orch

    @app.exception_handler(GraphError)
    async def graph_error_handler(request: Request, exc: GraphError) -> JSONResponse:
        status = ERROR_STATUS.get(type(exc), 400)
        if status >= 500:
            log.error("Invariant violation on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content=exc.to_dict())

    @app.exception_handler(SelectionError)
    async def selection_error_handler(request: Request, exc: SelectionError) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"error": exc.kind, "message": str(exc)}
        )

    app.include_router(_build_router(orch))
    return app


def get_app() -> FastAPI:
    """Factory for ``uvicorn --factory``: wires from ``BLOGRAPH_CONFIG``."""
    from blograph.config import build_orchestrator, default_config_path

    return create_app(build_orchestrator(default_config_path()))


# ── Routes ──────────────────────────────────────────────────────────────────


def _build_router(orch: GraphOrchestrator) -> APIRouter:
    router = APIRouter()

    def found(entity: Entity | None, what: str, entity_id: str) -> Entity:
        if entity is None:
            raise NotFound(f"{what} '{entity_id}' not found")
        return entity

    def outcome(result: Result, sel: tuple[FieldNode, ...] | None) -> dict[str, Any]:
        entity = result.unwrap()
        with orch.reading() as view:
            return render(entity, sel, view.resolver)

    @router.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @router.get("/stats")
    def stats() -> dict[str, int]:
        return orch.stats()

    # ── reads ──

    @router.get("/users")
    def list_users(query: str | None = None, fields: Fields = None) -> list[dict[str, Any]]:
        sel = parse_selection(fields)
        with orch.reading() as view:
            return render_many(view.queries.list_users(query), sel, view.resolver)

    @router.get("/posts")
    def list_posts(query: str | None = None, fields: Fields = None) -> list[dict[str, Any]]:
        sel = parse_selection(fields)
        with orch.reading() as view:
            return render_many(view.queries.list_posts(query), sel, view.resolver)

    @router.get("/comments")
    def list_comments(fields: Fields = None) -> list[dict[str, Any]]:
        sel = parse_selection(fields)
        with orch.reading() as view:
            return render_many(view.queries.list_comments(), sel, view.resolver)

    @router.get("/users/{user_id}")
    def get_user(user_id: str, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        with orch.reading() as view:
            user = found(view.queries.get_user(user_id), "User", user_id)
            return render(user, sel, view.resolver)

    @router.get("/posts/{post_id}")
    def get_post(post_id: str, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        with orch.reading() as view:
            post = found(view.queries.get_post(post_id), "Post", post_id)
            return render(post, sel, view.resolver)

    @router.get("/comments/{comment_id}")
    def get_comment(comment_id: str, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        with orch.reading() as view:
            comment = found(view.queries.get_comment(comment_id), "Comment", comment_id)
            return render(comment, sel, view.resolver)

    # ── writes ──
    # Selections are parsed before the mutation runs.

    @router.post("/users")
    def create_user(body: CreateUserRequest, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        return outcome(orch.create_user(body.name, body.email, body.age), sel)

    @router.post("/posts")
    def create_post(body: CreatePostRequest, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        return outcome(
            orch.create_post(body.title, body.body, body.published, body.author_id),
            sel,
        )

    @router.post("/comments")
    def create_comment(body: CreateCommentRequest, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        return outcome(orch.create_comment(body.text, body.author_id, body.post_id), sel)

    @router.delete("/users/{user_id}")
    def delete_user(user_id: str, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        return outcome(orch.delete_user(user_id), sel)

    @router.delete("/posts/{post_id}")
    def delete_post(post_id: str, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        return outcome(orch.delete_post(post_id), sel)

    @router.delete("/comments/{comment_id}")
    def delete_comment(comment_id: str, fields: Fields = None) -> dict[str, Any]:
        sel = parse_selection(fields)
        return outcome(orch.delete_comment(comment_id), sel)

    return router
