"""Dotted-key access into nested TOML tables."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any


def _split(key: str) -> tuple[str, str] | None:
    head, sep, tail = key.partition(".")
    return (head, tail) if sep else None


def read(table: Any, key: str) -> Any | None:
    """Look up a dotted ``key`` such as ``"output.html.theme"``.

    Returns ``None`` when any part of the path is missing or is not a table.
    """
    if not isinstance(table, Mapping):
        return None
    parts = _split(key)
    if parts is None:
        return table.get(key)
    head, tail = parts
    child = table.get(head)
    return None if child is None else read(child, tail)


def insert(table: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Set a dotted ``key`` to ``value``, creating intermediate tables.

    Any intermediate value that is not a table is replaced by a new table.
    """
    if not isinstance(table, MutableMapping):
        raise TypeError(f"cannot insert {key!r} into a {type(table).__name__}")
    parts = _split(key)
    if parts is None:
        table[key] = value
        return
    head, tail = parts
    child = table.get(head)
    if not isinstance(child, MutableMapping):
        child = {}
        table[head] = child
    insert(child, tail, value)


def delete(table: Any, key: str) -> Any | None:
    """Remove a dotted ``key`` and return its value, or ``None`` if it was absent."""
    if not isinstance(table, MutableMapping):
        return None
    parts = _split(key)
    if parts is None:
        return table.pop(key, None)
    head, tail = parts
    return delete(table.get(head), tail)