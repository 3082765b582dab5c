"""File-system helpers used while writing rendered output."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path, PurePath
from typing import BinaryIO

log = logging.getLogger(__name__)

_SEPARATORS = {os.sep, os.altsep or "/", "/"}


def normalize_path(path: str) -> str:
    """Replace every path separator with a forward slash."""
    return "".join("/" if ch in _SEPARATORS else ch for ch in path)


def create_file(path: str | os.PathLike[str]) -> BinaryIO:
    """Create (or truncate) a file for binary writing, making missing parent directories."""
    target = Path(path)
    log.debug("Creating %s", target)
    target.parent.mkdir(parents=True, exist_ok=True)
    return target.open("wb")


def write_file(
    build_dir: str | os.PathLike[str],
    filename: str | os.PathLike[str],
    content: bytes | str,
) -> None:
    """Write ``content`` to ``build_dir/filename``, creating directories as needed."""
    data = content.encode("utf-8") if isinstance(content, str) else content
    with create_file(Path(build_dir) / filename) as handle:
        handle.write(data)


def path_to_root(path: str | os.PathLike[str]) -> str:
    """Return enough ``../`` segments to lead from ``path``'s directory back to its root.

    >>> path_to_root("some/relative/path")
    '../../'
    """
    raw = os.fspath(path)
    pure = PurePath(raw)
    if not raw or (pure.anchor and pure.parts == (pure.anchor,)):
        raise ValueError(f"path {raw!r} has no parent")
    skipped = {pure.anchor, ".", ".."}
    return "".join("../" for part in pure.parent.parts if part not in skipped)


def remove_dir_content(directory: str | os.PathLike[str]) -> None:
    """Remove everything inside ``directory`` but keep the directory itself."""
    for item in Path(directory).iterdir():
        if item.is_dir() and not item.is_symlink():
            shutil.rmtree(item)
        else:
            item.unlink()


def copy_files_except_ext(
    source: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    recursive: bool = False,
    avoid_dir: str | os.PathLike[str] | None = None,
    ext_blacklist: Iterable[str] = (),
) -> None:
    """Copy files from ``source`` to ``destination``, skipping blacklisted extensions.

    Directories are descended into only when ``recursive`` is set; the
    destination itself and ``avoid_dir`` are never copied into themselves.
    """
    source, destination = Path(source), Path(destination)
    avoid = Path(avoid_dir) if avoid_dir is not None else None
    blacklist = set(ext_blacklist)
    log.debug(
        "Copying all files from %s to %s (blacklist: %s), avoiding %s",
        source, destination, sorted(blacklist), avoid,
    )

    if source == destination:
        return

    for entry in source.iterdir():
        target = destination / entry.name
        if entry.is_dir() and recursive:
            if entry == destination or entry == avoid:
                continue
            if not target.exists():
                target.mkdir()
            copy_files_except_ext(entry, target, True, avoid, blacklist)
        elif entry.is_file():
            if entry.suffix and entry.suffix[1:] in blacklist:
                continue
            log.debug("Copying %s to %s", entry, target)
            shutil.copy(entry, target)
        elif not entry.exists():
            raise FileNotFoundError(f"Failed to read {entry}")


def get_404_output_file(input_404: str | None) -> str:
    """Name of the rendered 404 page for the configured input file."""
    return ("404.md" if input_404 is None else input_404).replace(".md", ".html")