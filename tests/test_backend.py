import io
import json
import shlex
import sys
from pathlib import Path

import pytest

from bookrender.backend import BackendError, CmdRenderer, RenderContext, Renderer


def _ctx(tmp_path, config=None):
    return RenderContext(
        root=tmp_path,
        book={"sections": []},
        config=config if config is not None else {"book": {"src": "src"}},
        destination=tmp_path / "book" / "out",
    )


def _python_cmd(code):
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


def test_json_round_trip(tmp_path):
    ctx = _ctx(tmp_path)
    loaded = RenderContext.from_json(io.StringIO(ctx.to_json()))
    assert loaded == ctx


def test_json_omits_chapter_titles(tmp_path):
    ctx = _ctx(tmp_path)
    ctx.chapter_titles[Path("a.md")] = "A"
    raw = json.loads(ctx.to_json())
    assert set(raw) == {"version", "root", "book", "config", "destination"}


def test_from_json_rejects_bad_input():
    with pytest.raises(BackendError, match="Unable to deserialize"):
        RenderContext.from_json(io.StringIO("{not json"))
    with pytest.raises(BackendError):
        RenderContext.from_json(io.StringIO('{"root": "x"}'))


def test_source_dir(tmp_path):
    ctx = _ctx(tmp_path, {"book": {"src": "chapters"}})
    assert ctx.source_dir() == tmp_path / "chapters"
    assert _ctx(tmp_path, {}).source_dir() == tmp_path / "src"


def test_renderer_is_abstract():
    with pytest.raises(TypeError):
        Renderer()


def test_compose_empty_command(tmp_path):
    with pytest.raises(BackendError, match="Command string was empty"):
        CmdRenderer("x", "   ").compose_command(tmp_path, tmp_path)


def test_compose_bare_name_kept(tmp_path):
    argv = CmdRenderer("x", "renderer --from book 'two words'").compose_command(tmp_path, tmp_path)
    assert argv == ["renderer", "--from", "book", "two words"]


def test_compose_prefers_root(tmp_path):
    dest = tmp_path / "dest"
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "tool").write_text("")
    (dest / "bin").mkdir(parents=True)
    (dest / "bin" / "tool").write_text("")
    argv = CmdRenderer("x", "bin/tool arg").compose_command(tmp_path, dest)
    assert argv == [str(tmp_path / "bin" / "tool"), "arg"]


def test_compose_legacy_destination(tmp_path):
    dest = tmp_path / "dest"
    (dest / "bin").mkdir(parents=True)
    (dest / "bin" / "tool").write_text("")
    argv = CmdRenderer("x", "bin/tool").compose_command(tmp_path, dest)
    assert argv == [str(dest / "bin" / "tool")]


def test_compose_missing_falls_back_to_root(tmp_path):
    argv = CmdRenderer("x", "bin/tool").compose_command(tmp_path, tmp_path / "dest")
    assert argv == [str(tmp_path / "bin" / "tool")]


def test_render_passes_context(tmp_path):
    ctx = _ctx(tmp_path)
    code = "import sys; open('out.json', 'w').write(sys.stdin.read())"
    CmdRenderer("dump", _python_cmd(code)).render(ctx)
    written = (ctx.destination / "out.json").read_text()
    assert RenderContext.from_json(io.StringIO(written)) == ctx


def test_render_failure(tmp_path):
    ctx = _ctx(tmp_path)
    with pytest.raises(BackendError, match='The "bad" renderer failed'):
        CmdRenderer("bad", _python_cmd("import sys; sys.exit(3)")).render(ctx)


def test_missing_command_fails(tmp_path):
    ctx = _ctx(tmp_path)
    with pytest.raises(BackendError, match="Unable to start the backend") as info:
        CmdRenderer("ghost", "bookrender-no-such-command-here").render(ctx)
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_missing_optional_command_is_ignored(tmp_path):
    ctx = _ctx(tmp_path, {"output": {"ghost": {"optional": True}}})
    result = CmdRenderer("ghost", "bookrender-no-such-command-here").render(ctx)
    assert result is None
    assert ctx.destination.is_dir()