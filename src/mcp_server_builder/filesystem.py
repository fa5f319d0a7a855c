"""Filesystem collaborator used by the analyzer and the writer."""

from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileStat:
    """Type and size of an existing path."""

    kind: Literal["file", "directory", "other"]
    size: int

    @property
    def is_dir(self) -> bool:
        return self.kind == "directory"


@dataclass(frozen=True)
class NotFound:
    """The path does not exist."""

    path: Path


@dataclass(frozen=True)
class OtherFailure:
    """The path exists (or may exist) but could not be inspected."""

    path: Path
    reason: str


StatResult = FileStat | NotFound | OtherFailure


class FileSystem(Protocol):
    """Protocol for the filesystem operations scaffolding needs."""

    def exists(self, path: Path) -> bool:
        """Return whether the path is known to exist, without raising."""
        ...

    def stat(self, path: Path) -> StatResult:
        """Return the type and size of a path without raising."""
        ...

    def list_dir(self, path: Path) -> list[str]:
        """Return the names of a directory's immediate children."""
        ...

    def make_dirs(self, path: Path) -> None:
        """Create a directory and any missing parents."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read a whole file."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write a whole file as UTF-8."""
        ...


class LocalFileSystem:
    """pathlib-backed filesystem."""

    def exists(self, path: Path) -> bool:
        return isinstance(self.stat(path), FileStat)

    def stat(self, path: Path) -> StatResult:
        try:
            st = path.stat()
        except FileNotFoundError:
            return NotFound(path)
        except OSError as e:
            return OtherFailure(path, e.strerror or str(e))

        if stat.S_ISDIR(st.st_mode):
            kind: Literal["file", "directory", "other"] = "directory"
        elif stat.S_ISREG(st.st_mode):
            kind = "file"
        else:
            kind = "other"
        return FileStat(kind=kind, size=st.st_size)

    def list_dir(self, path: Path) -> list[str]:
        return sorted(child.name for child in path.iterdir())

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created directory: {path}")

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Created file: {path}")
