"""Field selections: which fields (and nested relations) a caller wants back.

The syntax is the GraphQL selection-set subset::

    id name posts { title comments { text author { name } } }

Commas between fields are optional and an outer pair of braces is allowed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_TOKEN = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_]*)|([{}])|(,))")


class SelectionError(ValueError):
    """Malformed selection text, or a field the entity does not have."""

    kind = "SelectionError"


@dataclass(frozen=True)
class FieldNode:
    """One selected field; ``children`` is non-empty only for relations."""

    name: str
    children: tuple[FieldNode, ...] = ()


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN.match(text, pos)
        if m is None or m.end() == pos:
            raise SelectionError(f"Unexpected character {text[pos:].lstrip()[:1]!r} at {pos}")
        name, brace, _comma = m.groups()
        if name:
            tokens.append(name)
        elif brace:
            tokens.append(brace)
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    def peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def take(self) -> str:
        tok = self.peek()
        if tok is None:
            raise SelectionError("Unexpected end of selection")
        self._pos += 1
        return tok

    def fields(self, closing: str | None) -> tuple[FieldNode, ...]:
        out: list[FieldNode] = []
        while self.peek() != closing:
            name = self.take()
            if name in ("{", "}"):
                raise SelectionError(f"Expected a field name, got {name!r}")
            children: tuple[FieldNode, ...] = ()
            if self.peek() == "{":
                self.take()
                children = self.fields("}")
                self.take()
            out.append(FieldNode(name, children))
        if not out:
            raise SelectionError("Empty selection")
        return tuple(out)

    def done(self) -> bool:
        return self.peek() is None


def parse_selection(text: str | None) -> tuple[FieldNode, ...] | None:
    """Parse *text*; ``None`` or blank means "default fields"."""
    if text is None or not text.strip():
        return None

    parser = _Parser(_tokenize(text))
    if parser.peek() == "{":
        parser.take()
        nodes = parser.fields("}")
        parser.take()
    else:
        nodes = parser.fields(None)
    if not parser.done():
        raise SelectionError("Unbalanced braces in selection")
    return nodes
