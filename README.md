# bookrender

Building blocks for turning a book written in Markdown into HTML pages, and
for handing a book to an external rendering program.

## Installation

```
pip install bookrender
```

To run the test suite:

```
pip install "bookrender[test]"
pytest
```

## Modules

- `bookrender.markup` renders Markdown to HTML with `render_markdown` and
  `render_markdown_with_path`. Tables and strikethrough are enabled. Links to
  `.md` files become `.html` links, and with a page path, relative links are
  made relative to that page's directory. Tables are wrapped in a
  `<div class="table-wrapper">`. Whitespace in fenced code block info strings
  becomes commas. With `curly_quotes` set, quotes, dashes and ellipses are
  made typographic. The module also derives anchor ids from heading text
  (`normalize_id`, `id_from_content`, `unique_id_from_content`), and provides
  `collapse_whitespace`, `bracket_escape`, `new_parser` and `log_backtrace`.
  `log_backtrace` logs an exception and the chain of exceptions that caused it.
- `bookrender.toc` has `RenderToc`, whose `render(data)` builds the
  table-of-contents HTML from a page's data. It reads `chapters`, `path`,
  `section`, `fold_enable`, `fold_level` and `is_index`. Setting
  `no_section_label=True` leaves out the section numbers.
- `bookrender.navigation` finds the neighbouring chapters. `previous_chapter`
  and `next_chapter` return a dict with `title`, `link` and `path_to_root`,
  or `None` when there is no such chapter. `find_chapter` and the `Target`
  enum are the lower-level pieces these use.
- `bookrender.theme_helper` has `theme_option(param, default_theme)`. It
  returns the theme name, with ` (default)` appended when the name matches
  the default theme. The comparison ignores case.
- `bookrender.lines` selects lines by range (`take_lines`) or by
  `ANCHOR: name` / `ANCHOR_END: name` markers (`take_anchored_lines`). Its
  `take_rustdoc_include_*` variants keep every line but prefix the ones
  outside the selection with `# `.
- `bookrender.fsutil` holds filesystem helpers: `write_file`, `create_file`,
  `remove_dir_content`, `copy_files_except_ext`, `path_to_root`,
  `normalize_path` and `get_404_output_file`.
- `bookrender.toml_ext` reads, inserts and deletes values in nested
  dictionaries with dotted keys such as `"output.html.optional"`.
- `bookrender.backend` defines `RenderContext`, the abstract `Renderer` and
  `CmdRenderer`. A `CmdRenderer` runs a command in the destination directory
  and writes the context to the command's standard input as JSON. It raises
  `BackendError` when the command cannot be started or exits with a non-zero
  status. A command that is not found is only logged as a warning when
  `output.<name>.optional` is `true` in the config.

## Example

```python
from pathlib import Path

from bookrender.backend import CmdRenderer, RenderContext
from bookrender.markup import render_markdown
from bookrender.navigation import next_chapter

html = render_markdown("See [the intro](intro.md).", False)
# '<p>See <a href="intro.html">the intro</a>.</p>\n'

page = {
    "path": "one.md",
    "chapters": [
        {"name": "One", "path": "one.md"},
        {"name": "Two", "path": "two.md"},
    ],
}
print(next_chapter(page))
# {'path_to_root': '', 'title': 'Two', 'link': 'two.html'}

ctx = RenderContext(
    root=Path("my-book"),
    book={"sections": []},
    config={"book": {"src": "src"}},
    destination=Path("my-book/book/epub"),
)
CmdRenderer(name="epub", cmd="python render_epub.py").render(ctx)
```

## What it does not do

bookrender provides the pieces described above and nothing more. It does not
load a book from disk and has no template engine or bundled themes. It does
not assemble complete HTML pages: it adds no anchors to rendered headers,
does not build a print page, a 404 page or a search index, and does not post-process code blocks
for playgrounds. It has no command-line program.