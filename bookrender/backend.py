"""The rendering interface and a backend that runs an external command."""

from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any

from bookrender import toml_ext

log = logging.getLogger(__name__)

VERSION = "0.1.0"
_SEPARATORS = {sep for sep in (os.sep, os.altsep, "/") if sep}


class BackendError(Exception):
    """Raised when a backend cannot be started, fails, or gets unusable input."""


@dataclass
class RenderContext:
    """Everything a renderer needs to know about the book it renders.

    ``destination`` is where build artefacts must go; it is not guaranteed to
    be empty or even to exist.
    """

    root: Path
    book: Any
    config: dict[str, Any]
    destination: Path
    version: str = VERSION
    chapter_titles: dict[Path, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self.destination = Path(self.destination)

    def source_dir(self) -> Path:
        """The directory holding the book's sources."""
        src = toml_ext.read(self.config, "book.src")
        return self.root / (src if isinstance(src, str) else "src")

    @classmethod
    def from_json(cls, reader: IO[str] | IO[bytes]) -> RenderContext:
        """Load a context from the JSON that ``to_json`` produces."""
        try:
            raw = json.load(reader)
            return cls(
                root=Path(raw["root"]),
                book=raw["book"],
                config=raw["config"],
                destination=Path(raw["destination"]),
                version=raw["version"],
            )
        except (ValueError, KeyError, TypeError) as error:
            raise BackendError("Unable to deserialize the `RenderContext`") from error

    def to_json(self) -> str:
        """Serialise the context; chapter titles are not included."""
        return json.dumps(
            {
                "version": self.version,
                "root": os.fspath(self.root),
                "book": self.book,
                "config": self.config,
                "destination": os.fspath(self.destination),
            }
        )


class Renderer(ABC):
    """A backend that turns a loaded book into output."""

    name: str

    @abstractmethod
    def render(self, ctx: RenderContext) -> None:
        """Render the book described by ``ctx``."""


@dataclass
class CmdRenderer(Renderer):
    """A renderer that runs ``cmd`` and passes it the context as JSON on stdin.

    The command runs in the destination directory; a non-zero exit status
    means rendering failed.
    """

    name: str
    cmd: str

    def compose_command(self, root: str | os.PathLike[str], destination: str | os.PathLike[str]) -> list[str]:
        """Split the command string and resolve the executable.

        Bare names are looked up on ``PATH``; relative paths are resolved
        against the book root, or, as a deprecated fallback, the destination.
        """
        words = shlex.split(self.cmd)
        if not words:
            raise BackendError("Command string was empty")
        exe, *args = words

        if any(sep in exe for sep in _SEPARATORS):
            abs_exe = Path(root) / exe
            resolved = abs_exe
            if not abs_exe.exists():
                legacy_path = Path(destination) / exe
                if legacy_path.exists():
                    log.warning(
                        "Renderer command `%s` uses a path relative to the renderer output "
                        "directory `%s`. This was previously accepted, but has been deprecated. "
                        "Relative executable paths should be relative to the book root.",
                        exe,
                        destination,
                    )
                    resolved = legacy_path
            exe = os.fspath(resolved)

        return [exe, *args]

    def _handle_start_error(self, ctx: RenderContext, error: OSError) -> None:
        if isinstance(error, FileNotFoundError):
            optional = toml_ext.read(ctx.config, f"output.{self.name}.optional")
            if optional is True:
                log.warning(
                    "The command `%s` for backend `%s` was not found, but was marked as optional.",
                    self.cmd,
                    self.name,
                )
                return
            log.error(
                'The command `%s` wasn\'t found, is the "%s" backend installed? '
                'If you want to ignore this error when the "%s" backend is not installed, '
                "set `optional = true` in the `[output.%s]` section of the book.toml "
                "configuration file.",
                self.cmd,
                self.name,
                self.name,
                self.name,
            )
        raise BackendError("Unable to start the backend") from error

    def render(self, ctx: RenderContext) -> None:
        """Run the command, feed it the context and check its exit status."""
        log.info('Invoking the "%s" renderer', self.name)
        try:
            ctx.destination.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass

        argv = self.compose_command(ctx.root, ctx.destination)
        try:
            child = subprocess.Popen(argv, stdin=subprocess.PIPE, cwd=ctx.destination)
        except OSError as error:
            self._handle_start_error(ctx, error)
            return

        assert child.stdin is not None
        try:
            child.stdin.write(ctx.to_json().encode("utf-8"))
        except OSError as error:
            # The backend hung up before it read the whole context.
            log.warning("Error writing the RenderContext to the backend, %s", error)
        try:
            child.stdin.close()
        except OSError:
            pass

        status = child.wait()
        log.debug("%s exited with status %s", self.cmd, status)
        if status != 0:
            log.error("Renderer exited with non-zero return code.")
            raise BackendError(f'The "{self.name}" renderer failed')