"""BloGraph command-line interface."""

from __future__ import annotations

import json
import logging

import click


@click.group()
@click.option(
    "--config", "-c", default="config.yaml", envvar="BLOGRAPH_CONFIG",
    help="Path to config YAML.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config: str, verbose: bool) -> None:
    """BloGraph: users, posts and comments as an in-memory graph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _print_listing(ctx: click.Context, kind: str, query: str | None, fields: str | None) -> None:
    from blograph.api.render import render_many
    from blograph.api.selection import SelectionError, parse_selection
    from blograph.config import build_orchestrator

    try:
        sel = parse_selection(fields)
    except SelectionError as exc:
        raise click.BadParameter(str(exc), param_hint="--fields") from exc

    orch = build_orchestrator(ctx.obj["config"])
    with orch.reading() as view:
        if kind == "users":
            items = view.queries.list_users(query)
        elif kind == "posts":
            items = view.queries.list_posts(query)
        else:
            items = view.queries.list_comments()
        try:
            rendered = render_many(items, sel, view.resolver)
        except SelectionError as exc:
            raise click.BadParameter(str(exc), param_hint="--fields") from exc
    click.echo(json.dumps(rendered, indent=2))


@main.command()
@click.argument("query", required=False)
@click.option("--fields", "-f", default=None, help="Selection, e.g. 'id name posts { title }'.")
@click.pass_context
def users(ctx: click.Context, query: str | None, fields: str | None) -> None:
    """List users, optionally those whose name contains QUERY."""
    _print_listing(ctx, "users", query, fields)


@main.command()
@click.argument("query", required=False)
@click.option("--fields", "-f", default=None, help="Selection, e.g. 'title author { name }'.")
@click.pass_context
def posts(ctx: click.Context, query: str | None, fields: str | None) -> None:
    """List posts, optionally those whose title or body contains QUERY."""
    _print_listing(ctx, "posts", query, fields)


@main.command()
@click.option("--fields", "-f", default=None, help="Selection, e.g. 'text post { title }'.")
@click.pass_context
def comments(ctx: click.Context, fields: str | None) -> None:
    """List all comments."""
    _print_listing(ctx, "comments", None, fields)


@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show entity counts and the current configuration."""
    from blograph.config import build_orchestrator, load_config

    import yaml as _yaml

    cfg = load_config(ctx.obj["config"])
    orch = build_orchestrator(ctx.obj["config"])
    st = orch.stats()

    click.echo("=== Store Stats ===")
    click.echo(f"  Users:     {st['users']}")
    click.echo(f"  Posts:     {st['posts']}")
    click.echo(f"  Comments:  {st['comments']}")
    click.echo("\n=== Config ===")
    click.echo(_yaml.dump(cfg, default_flow_style=False))


@main.command()
@click.option("--host", default=None, help="Bind address (default: server.host from config).")
@click.option("--port", default=None, type=int, help="Port (default: server.port from config).")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Start the HTTP server.

    Examples:
        blograph serve
        blograph -c demo.yaml serve --port 4001
    """
    import uvicorn

    from blograph.api.server import create_app
    from blograph.config import build_orchestrator, load_config

    server_cfg = load_config(ctx.obj["config"]).get("server", {})
    orch = build_orchestrator(ctx.obj["config"])
    uvicorn.run(
        create_app(orch),
        host=host or server_cfg.get("host", "0.0.0.0"),
        port=port or int(server_cfg.get("port", 4000)),
    )


if __name__ == "__main__":
    main()
