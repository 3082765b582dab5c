"""Template helper that renders the book's table of contents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from bookrender.fsutil import path_to_root
from bookrender.markup import bracket_escape


def _decode_chapters(value: Any) -> list[Mapping[str, str]]:
    if not isinstance(value, list) or not all(
        isinstance(item, Mapping)
        and all(isinstance(k, str) and isinstance(v, str) for k, v in item.items())
        for item in value
    ):
        raise ValueError("Could not decode the JSON data")
    return value


def _current_path(data: Mapping[str, Any]) -> str:
    path = data.get("path")
    if not isinstance(path, str):
        raise TypeError("Type error for `path`, string expected")
    return path.replace('"', "")


def _html_link(path: str) -> str:
    return str(PurePath(path).with_suffix(".html")).replace("\\", "/")


def _li_open_tag(is_expanded: bool, is_affix: bool) -> str:
    classes = "chapter-item "
    if is_expanded:
        classes += "expanded "
    if is_affix:
        classes += "affix "
    return f'<li class="{classes}">'


@dataclass(frozen=True)
class RenderToc:
    """Renders the chapter list of the template data as nested ordered lists."""

    no_section_label: bool = False

    def render(self, data: Mapping[str, Any]) -> str:
        """Return the table of contents HTML for the page described by ``data``."""
        chapters = _decode_chapters(data.get("chapters"))
        current_path = _current_path(data)

        section_value = data.get("section")
        current_section = section_value if isinstance(section_value, str) else ""

        fold_enable = data.get("fold_enable")
        if not isinstance(fold_enable, bool):
            raise TypeError("Type error for `fold_enable`, bool expected")

        fold_level = data.get("fold_level")
        if isinstance(fold_level, bool) or not isinstance(fold_level, int) or fold_level < 0:
            raise TypeError("Type error for `fold_level`, u64 expected")

        out: list[str] = ['<ol class="chapter">']
        current_level = 1
        # The index page aliases the first chapter, so its first link is active.
        is_first_chapter = "is_index" in data

        for item in chapters:
            if "spacer" in item:
                out.append('<li class="spacer"></li>')
                continue

            section = item.get("section")
            if section is not None:
                level = section.count(".")
            else:
                section, level = "", 1

            if not fold_enable or (section and current_section.startswith(section)):
                is_expanded = True
            else:
                is_expanded = level - 1 < fold_level

            if level > current_level:
                while level > current_level:
                    out.append('<li><ol class="section">')
                    current_level += 1
                out.append(_li_open_tag(is_expanded, False))
            elif level < current_level:
                while level < current_level:
                    out.append("</ol></li>")
                    current_level -= 1
                out.append(_li_open_tag(is_expanded, False))
            else:
                out.append(_li_open_tag(is_expanded, "section" not in item))

            title = item.get("part")
            if title is not None:
                out.append(f'<li class="part-title">{bracket_escape(title)}</li>')
                continue

            path = item.get("path")
            path_exists = bool(path)
            if path_exists:
                out.append('<a href="')
                out.append(path_to_root(current_path))
                out.append(_html_link(path))
                out.append('"')
                if path == current_path or is_first_chapter:
                    is_first_chapter = False
                    out.append(' class="active"')
                out.append(">")
            else:
                out.append("<div>")

            if not self.no_section_label and "section" in item:
                out.append(f'<strong aria-hidden="true">{item["section"]}</strong> ')

            name = item.get("name")
            if name is not None:
                out.append(bracket_escape(name))

            out.append("</a>" if path_exists else "</div>")

            if fold_enable and item.get("has_sub_items") == "true":
                out.append('<a class="toggle"><div>▹</div></a>')
            out.append("</li>")

        while current_level > 1:
            out.append("</ol></li>")
            current_level -= 1

        out.append("</ol>")
        return "".join(out)