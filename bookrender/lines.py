"""Selecting ranges of lines and anchored sections from text."""

from __future__ import annotations

import re
from collections.abc import Iterator

_ANCHOR_START = re.compile(r"ANCHOR:\s*(?P<anchor_name>[\w_-]+)")
_ANCHOR_END = re.compile(r"ANCHOR_END:\s*(?P<anchor_name>[\w_-]+)")


def _lines(text: str) -> list[str]:
    """Split on ``\\n`` or ``\\r\\n`` with no trailing empty line."""
    if not text:
        return []
    pieces = text.split("\n")
    if text.endswith("\n"):
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def _anchor_name(pattern: re.Pattern[str], line: str) -> str | None:
    match = pattern.search(line)
    return match.group("anchor_name") if match else None


def take_lines(text: str, start: int = 0, stop: int | None = None) -> str:
    """Return lines ``start`` (inclusive) to ``stop`` (exclusive) joined by newlines."""
    return "\n".join(_lines(text)[start:stop])


def take_anchored_lines(text: str, anchor: str) -> str:
    """Return the lines between ``ANCHOR: anchor`` and ``ANCHOR_END: anchor``.

    Lines holding any anchor marker are left out.
    """

    def retained() -> Iterator[str]:
        anchor_found = False
        for line in _lines(text):
            if anchor_found:
                end_name = _anchor_name(_ANCHOR_END, line)
                if end_name is not None:
                    if end_name == anchor:
                        return
                elif not _ANCHOR_START.search(line):
                    yield line
            elif _anchor_name(_ANCHOR_START, line) == anchor:
                anchor_found = True

    return "\n".join(retained())


def take_rustdoc_include_lines(text: str, start: int = 0, stop: int | None = None) -> str:
    """Keep lines in ``[start, stop)`` as they are and prefix all others with ``# ``."""
    kept = range(start, len(_lines(text)) if stop is None else stop)
    return "\n".join(
        line if index in kept else f"# {line}"
        for index, line in enumerate(_lines(text))
    )


def take_rustdoc_include_anchored_lines(text: str, anchor: str) -> str:
    """Keep lines inside the named anchors as they are and hide the rest with ``# ``."""
    output: list[str] = []
    within_section = False
    for line in _lines(text):
        if within_section:
            end_name = _anchor_name(_ANCHOR_END, line)
            if end_name is not None:
                if end_name == anchor:
                    within_section = False
            elif not _ANCHOR_START.search(line):
                output.append(line)
        else:
            start_name = _anchor_name(_ANCHOR_START, line)
            if start_name is not None:
                if start_name == anchor:
                    within_section = True
            elif not _ANCHOR_END.search(line):
                output.append(f"# {line}")
    return "\n".join(output)