"""BloGraph HTTP boundary.

Parses field selections, renders entities with lazily resolved relations,
and maps graph errors onto HTTP responses.
"""

from blograph.api.render import render, render_many
from blograph.api.selection import FieldNode, SelectionError, parse_selection
from blograph.api.server import create_app, get_app

__all__ = [
    # Selections
    "FieldNode",
    "SelectionError",
    "parse_selection",
    # Rendering
    "render",
    "render_many",
    # Server
    "create_app",
    "get_app",
]
