"""Error types raised while scaffolding a project."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ScaffoldError(Exception):
    """Base error for project scaffolding failures."""


class ValidationError(ScaffoldError):
    """Raised when the project name or request is malformed."""


class ConflictError(ScaffoldError):
    """Raised when the target already holds an incompatible project."""


class AlreadyExistsError(ConflictError):
    """Raised when the requested project subdirectory already exists."""


class AnalysisAccessError(ScaffoldError):
    """Raised when a candidate path cannot be inspected.

    The analyzer absorbs this into evidence; it never reaches the caller.
    """


class WriteFailure(ScaffoldError):
    """Raised when a generated file cannot be written.

    Files written before the failure are left on disk.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason
