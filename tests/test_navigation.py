import pytest

from bookrender.navigation import (
    Target,
    find_chapter,
    navigation_context,
    next_chapter,
    previous_chapter,
)

CHAPTERS = [
    {"name": "one", "path": "one.path"},
    {"name": "two", "path": "two.path"},
    {"name": "three", "path": "three.path"},
]


def render(data):
    """Render like the template ``{{#previous}}{{title}}: {{link}}{{/previous}}|{{#next}}...``."""
    parts = []
    for found in (previous_chapter(data), next_chapter(data)):
        parts.append("" if found is None else f"{found['title']}: {found['link']}")
    return "|".join(parts)


def data_for(name):
    return {"name": name, "path": f"{name}.path", "chapters": CHAPTERS}


def test_next_previous():
    assert render(data_for("two")) == "one: one.html|three: three.html"


def test_first():
    assert render(data_for("one")) == "|two: two.html"


def test_last():
    assert render(data_for("three")) == "two: two.html|"


def test_find_chapter_returns_neighbours():
    data = data_for("two")
    assert find_chapter(data, Target.PREVIOUS) == CHAPTERS[0]
    assert find_chapter(data, Target.NEXT) == CHAPTERS[2]


def test_spacers_and_drafts_are_skipped():
    chapters = [
        CHAPTERS[0],
        {"spacer": "_spacer_"},
        {"name": "draft", "path": ""},
        CHAPTERS[1],
    ]
    data = {"path": "two.path", "chapters": chapters}
    assert find_chapter(data, Target.PREVIOUS) == CHAPTERS[0]
    data = {"path": "one.path", "chapters": chapters}
    assert find_chapter(data, Target.NEXT) == CHAPTERS[1]


def test_index_page_has_no_previous_and_second_chapter_as_next():
    data = {"path": "index.md", "is_index": True, "chapters": CHAPTERS}
    assert previous_chapter(data) is None
    assert find_chapter(data, Target.NEXT) == CHAPTERS[1]


def test_index_page_with_single_chapter_has_no_next():
    data = {"path": "index.md", "is_index": True, "chapters": CHAPTERS[:1]}
    assert next_chapter(data) is None


def test_unknown_path_has_no_neighbours():
    data = {"path": "missing.path", "chapters": CHAPTERS}
    assert previous_chapter(data) is None
    assert next_chapter(data) is None


def test_navigation_context_is_relative_to_current_page():
    data = {"path": "nested/two.path", "chapters": CHAPTERS}
    got = navigation_context(data, {"name": "one", "path": "dir/one.md"})
    assert got == {"path_to_root": "../", "title": "one", "link": "dir/one.html"}


def test_navigation_context_requires_name():
    with pytest.raises(ValueError):
        navigation_context(data_for("two"), {"path": "one.path"})


def test_navigation_context_requires_path():
    with pytest.raises(ValueError):
        navigation_context(data_for("two"), {"name": "one"})


def test_missing_chapters_is_error():
    with pytest.raises(ValueError):
        find_chapter({"path": "one.path"}, Target.NEXT)


def test_non_string_chapter_values_are_error():
    with pytest.raises(ValueError):
        find_chapter({"path": "one.path", "chapters": [{"name": 1}]}, Target.NEXT)


def test_path_must_be_string():
    with pytest.raises(TypeError):
        find_chapter({"path": None, "chapters": CHAPTERS}, Target.PREVIOUS)


def test_target_find_next_requires_previous_path():
    with pytest.raises(ValueError):
        Target.NEXT.find("one.path", "two.path", CHAPTERS[1], {"name": "one"})