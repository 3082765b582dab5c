"""Template helpers linking to the previous and next chapters."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import PurePath
from typing import Any

from bookrender.fsutil import path_to_root

log = logging.getLogger(__name__)


class Target(Enum):
    """Which neighbour of the current chapter to look for."""

    PREVIOUS = "previous"
    NEXT = "next"

    def find(
        self,
        base_path: str,
        current_path: str,
        current_item: Mapping[str, str],
        previous_item: Mapping[str, str],
    ) -> dict[str, str] | None:
        """Return the target chapter if this pair of chapters identifies it."""
        if self is Target.NEXT:
            previous_path = previous_item.get("path")
            if previous_path is None:
                raise ValueError("No path found for chapter in JSON data")
            if previous_path == base_path:
                return dict(current_item)
        elif current_path == base_path:
            return dict(previous_item)
        return None


def _decode_chapters(value: Any) -> list[Mapping[str, str]]:
    if not isinstance(value, list) or not all(
        isinstance(item, Mapping)
        and all(isinstance(k, str) and isinstance(v, str) for k, v in item.items())
        for item in value
    ):
        raise ValueError("Could not decode the JSON data")
    return value


def _base_path(data: Mapping[str, Any]) -> str:
    path = data.get("path")
    if not isinstance(path, str):
        raise TypeError("Type error for `path`, string expected")
    return path.replace('"', "")


def find_chapter(data: Mapping[str, Any], target: Target) -> dict[str, str] | None:
    """Find the chapter before or after the current page in the template data."""
    chapters = _decode_chapters(data.get("chapters"))
    base_path = _base_path(data)

    if "is_index" in data:
        # The index page may be synthetic, so no chapter matches its path.
        if target is Target.PREVIOUS:
            return None
        with_paths = [chapter for chapter in chapters if "path" in chapter]
        return dict(with_paths[1]) if len(with_paths) > 1 else None

    previous: Mapping[str, str] | None = None
    for item in chapters:
        path = item.get("path")
        if not path:
            continue
        if previous is not None:
            found = target.find(base_path, path, item, previous)
            if found is not None:
                return found
        previous = item
    return None


def navigation_context(data: Mapping[str, Any], chapter: Mapping[str, str]) -> dict[str, str]:
    """Build the values a navigation block renders: title, link and path to root."""
    base_path = _base_path(data)
    name = chapter.get("name")
    if name is None:
        raise ValueError("No title found for chapter in JSON data")
    path = chapter.get("path")
    if path is None:
        raise ValueError("No path found for chapter in JSON data")
    link = str(PurePath(path).with_suffix(".html")).replace("\\", "/")
    return {"path_to_root": path_to_root(base_path), "title": name, "link": link}


def previous_chapter(data: Mapping[str, Any]) -> dict[str, str] | None:
    """Navigation values for the previous chapter, or ``None`` on the first page."""
    log.debug("previous (template helper)")
    chapter = find_chapter(data, Target.PREVIOUS)
    return None if chapter is None else navigation_context(data, chapter)


def next_chapter(data: Mapping[str, Any]) -> dict[str, str] | None:
    """Navigation values for the next chapter, or ``None`` on the last page."""
    log.debug("next (template helper)")
    chapter = find_chapter(data, Target.NEXT)
    return None if chapter is None else navigation_context(data, chapter)