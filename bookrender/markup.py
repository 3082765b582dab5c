"""Markdown rendering and heading-id helpers."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, MutableMapping, Sequence
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

log = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s\s+")
_HTML_TAG = re.compile(r"(<.*?>)")
_ENTITIES = ("&lt;", "&gt;", "&amp;", "&#39;", "&quot;")
_SCHEME_LINK = re.compile(r"^[a-z][a-z0-9+.-]*:")
_MD_LINK = re.compile(r"(?P<link>.*)\.md(?P<anchor>#.*)?")
_HTML_LINK = re.compile(r'(<(?:a|img) [^>]*?(?:src|href)=")([^"]+?)"')


def collapse_whitespace(text: str) -> str:
    """Replace runs of two or more whitespace characters with one space."""
    return _WHITESPACE_RUN.sub(" ", text)


def normalize_id(content: str) -> str:
    """Turn ``content`` into an HTML element id without ASCII whitespace."""

    def convert(ch: str) -> str:
        if ch.isalnum() or ch in "_-":
            return ch.lower() if ch.isascii() else ch
        if ch.isspace():
            return "-"
        return ""

    return "".join(convert(ch) for ch in content)


def id_from_content(content: str) -> str:
    """Derive an anchor id from header text, ignoring tags and HTML entities."""
    content = _HTML_TAG.sub("", content)
    for entity in _ENTITIES:
        content = content.replace(entity, "")
    trimmed = content.strip().lstrip("#").strip()
    return normalize_id(trimmed)


def unique_id_from_content(content: str, id_counter: MutableMapping[str, int]) -> str:
    """Derive an anchor id that is unique among ids sharing ``id_counter``."""
    base = id_from_content(content)
    count = id_counter.get(base, 0)
    id_counter[base] = count + 1
    return base if count == 0 else f"{base}-{count}"


def _smart_punctuation(state: StateCore) -> None:
    for block in state.tokens:
        if block.type != "inline" or not block.children:
            continue
        for child in block.children:
            if child.type == "text":
                child.content = (
                    child.content.replace("---", "\u2014")
                    .replace("--", "\u2013")
                    .replace("...", "\u2026")
                )


def new_parser(curly_quotes: bool) -> MarkdownIt:
    """Create a Markdown parser with tables and strikethrough enabled.

    With ``curly_quotes`` quotes, dashes and ellipses are made typographic.
    """
    md = MarkdownIt("commonmark", {"typographer": curly_quotes})
    md.enable(["table", "strikethrough"])
    if curly_quotes:
        md.enable("smartquotes")
        md.core.ruler.after("inline", "smart_punctuation", _smart_punctuation)
    return md


def _fix_link(dest: str, path: str | os.PathLike[str] | None) -> str:
    if dest.startswith("#"):
        if path is None:
            return dest
        base = os.fspath(path)
        if base.endswith(".md"):
            base = base[:-3] + ".html"
        return base + dest
    if _SCHEME_LINK.match(dest):
        return dest

    fixed = ""
    if path is not None:
        raw = os.fspath(path)
        if not raw:
            raise ValueError("path can't be empty")
        base = os.path.dirname(raw)
        if base:
            fixed = f"{base}/"
    match = _MD_LINK.search(dest)
    if match:
        return fixed + match["link"] + ".html" + (match["anchor"] or "")
    return fixed + dest


def _fix_html(html: str, path: str | os.PathLike[str] | None) -> str:
    return _HTML_LINK.sub(lambda m: f'{m[1]}{_fix_link(m[2], path)}"', html)


def _clean_info(info: str) -> str:
    commas = info.replace(" ", ",").replace("\t", ",")
    return "".join(ch for ch in commas if not ch.isspace())


def _adjust_tokens(tokens: Sequence[Token], path: str | os.PathLike[str] | None) -> None:
    for token in tokens:
        if token.type == "fence":
            token.info = _clean_info(token.info)
        elif token.type in ("html_block", "html_inline"):
            token.content = _fix_html(token.content, path)
        elif token.type == "link_open":
            token.attrSet("href", _fix_link(str(token.attrGet("href") or ""), path))
        elif token.type == "image":
            token.attrSet("src", _fix_link(str(token.attrGet("src") or ""), path))
        if token.children:
            _adjust_tokens(token.children, path)


def _fixed(html: str):
    def rule(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        return html

    return rule


def _table_close(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
    trailer = "\n" if idx + 1 < len(tokens) else ""
    return "</tbody></table>\n</div>" + trailer


def _row_close(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
    in_head = idx + 1 < len(tokens) and tokens[idx + 1].type == "thead_close"
    return "</tr>" if in_head else "</tr>\n"


def _cell_open(tag: str):
    def rule(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        style = tokens[idx].attrGet("style")
        if isinstance(style, str) and style.startswith("text-align:"):
            return f'<{tag} style="text-align: {style.split(":", 1)[1].strip()}">'
        return f"<{tag}>"

    return rule


_RENDER_RULES = {
    "table_open": _fixed('<div class="table-wrapper"><table>'),
    "table_close": _table_close,
    "thead_open": _fixed("<thead>"),
    "thead_close": _fixed("</thead><tbody>\n"),
    "tbody_open": _fixed(""),
    "tbody_close": _fixed(""),
    "tr_open": _fixed("<tr>"),
    "tr_close": _row_close,
    "th_open": _cell_open("th"),
    "th_close": _fixed("</th>"),
    "td_open": _cell_open("td"),
    "td_close": _fixed("</td>"),
    "s_open": _fixed("<del>"),
    "s_close": _fixed("</del>"),
}


def render_markdown_with_path(
    text: str,
    curly_quotes: bool,
    path: str | os.PathLike[str] | None = None,
) -> str:
    """Render Markdown to HTML, fixing links relative to the page at ``path``.

    Links to ``.md`` files become ``.html`` links, fenced code block info
    strings have their whitespace turned into commas, and tables are wrapped
    in a ``table-wrapper`` div.
    """
    md = new_parser(curly_quotes)
    for name, rule in _RENDER_RULES.items():
        md.add_render_rule(name, rule)
    env: dict[str, Any] = {}
    tokens = md.parse(text, env)
    _adjust_tokens(tokens, path)
    return md.renderer.render(tokens, md.options, env)


def render_markdown(text: str, curly_quotes: bool) -> str:
    """Render Markdown to HTML for a normal page."""
    return render_markdown_with_path(text, curly_quotes, None)


def _causes(error: BaseException) -> Iterator[BaseException]:
    current: BaseException | None = error
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def log_backtrace(error: BaseException) -> None:
    """Log an error together with the chain of errors that caused it."""
    chain = _causes(error)
    log.error("Error: %s", next(chain))
    for cause in chain:
        log.error("\tCaused By: %s", cause)


def bracket_escape(text: str) -> str:
    """Escape ``<`` and ``>`` as HTML entities."""
    return text.replace("<", "&lt;").replace(">", "&gt;")