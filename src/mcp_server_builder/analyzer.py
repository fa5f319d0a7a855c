"""Capability analyzer - infers resource needs from sample files.

The rules are a best-effort heuristic. False positives and negatives are
expected; a single unreadable path never aborts the batch.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath

from mcp_server_builder.errors import AnalysisAccessError
from mcp_server_builder.filesystem import (
    FileStat,
    FileSystem,
    LocalFileSystem,
    NotFound,
    OtherFailure,
)
from mcp_server_builder.models import NO_FILES_ANALYZED, CapabilityDecision

logger = logging.getLogger(__name__)

DATA_EXTENSIONS = frozenset({".json", ".yaml", ".yml", ".xml", ".csv", ".txt", ".md", ".log"})
CODE_EXTENSIONS = frozenset({".js", ".ts", ".py", ".java", ".go", ".rs", ".cpp", ".c"})
CONFIG_EXTENSIONS = frozenset({".config", ".conf", ".ini", ".env"})

DATA_NAME_HINTS = ("data", "content")
CONFIG_NAME_HINT = "config"

# Files at or above this size are not read for content sniffing.
SNIFF_SIZE_LIMIT = 1024 * 1024
MIN_TEXT_LENGTH = 100


class FileKind(str, Enum):
    """How a candidate path was classified."""

    DATA_FILE = "data_file"
    DATA_DIRECTORY = "data_directory"
    DIRECTORY = "directory"
    CODE_FILE = "code_file"
    CONFIG_FILE = "config_file"
    JSON_CONTENT = "json_content"
    YAML_CONTENT = "yaml_content"
    TEXT_CONTENT = "text_content"
    BINARY_CONTENT = "binary_content"
    TOO_LARGE = "too_large"
    UNSIGNALLED = "unsignalled"
    INACCESSIBLE = "inaccessible"


_RESOURCE_KINDS = frozenset(
    {
        FileKind.DATA_FILE,
        FileKind.DATA_DIRECTORY,
        FileKind.CONFIG_FILE,
        FileKind.JSON_CONTENT,
        FileKind.YAML_CONTENT,
        FileKind.TEXT_CONTENT,
        FileKind.BINARY_CONTENT,
    }
)


@dataclass(frozen=True)
class FileClassification:
    """Classification of one candidate path."""

    path: str
    kind: FileKind

    @property
    def needs_resources(self) -> bool:
        return self.kind in _RESOURCE_KINDS

    @property
    def evidence(self) -> str:
        name = PurePath(self.path).name or self.path
        match self.kind:
            case FileKind.DATA_FILE:
                return f"📄 {name}: Data file detected - will expose as resource"
            case FileKind.DATA_DIRECTORY:
                return f"📁 {name}/: Directory with data files - will expose as resources"
            case FileKind.DIRECTORY:
                return f"📁 {name}/: Directory without data files - no resources inferred"
            case FileKind.CODE_FILE:
                return f"⚙️ {name}: Code file detected - will create corresponding tools"
            case FileKind.CONFIG_FILE:
                return f"⚙️ {name}: Config file - will expose as resource"
            case FileKind.JSON_CONTENT:
                return f"🔍 {name}: JSON-like content detected - will expose as resource"
            case FileKind.YAML_CONTENT:
                return f"🔍 {name}: YAML-like content detected - will expose as resource"
            case FileKind.TEXT_CONTENT:
                return f"📝 {name}: Text content detected - will expose as resource"
            case FileKind.BINARY_CONTENT:
                return f"📦 {name}: Binary file - will expose as resource"
            case FileKind.TOO_LARGE:
                return f"📦 {name}: File too large to inspect - no resources inferred"
            case FileKind.UNSIGNALLED:
                return f"➖ {name}: No capability signal detected"
            case FileKind.INACCESSIBLE:
                return f"❌ {self.path}: File not accessible"


class FileCapabilityAnalyzer:
    """Classifies candidate paths and aggregates a capability decision."""

    def __init__(
        self,
        fs: FileSystem | None = None,
        *,
        sniff_size_limit: int = SNIFF_SIZE_LIMIT,
    ) -> None:
        self.fs = fs if fs is not None else LocalFileSystem()
        self.sniff_size_limit = sniff_size_limit

    def analyze(self, paths: Iterable[str | Path]) -> CapabilityDecision:
        """Classify every path in order and OR the resource signals."""
        classifications = [self.classify(str(p)) for p in paths]
        if not classifications:
            return CapabilityDecision(needs_resources=False, evidence=[NO_FILES_ANALYZED])

        needs_resources = any(c.needs_resources for c in classifications)
        logger.debug(
            f"Analyzed {len(classifications)} path(s), needs_resources={needs_resources}"
        )
        return CapabilityDecision(
            needs_resources=needs_resources,
            evidence=[c.evidence for c in classifications],
        )

    def classify(self, path: str) -> FileClassification:
        """Classify a single path; inaccessible paths are recorded, not raised."""
        try:
            kind = self._classify(Path(path))
        except AnalysisAccessError as e:
            logger.debug(f"Skipping {path}: {e}")
            kind = FileKind.INACCESSIBLE
        return FileClassification(path=path, kind=kind)

    def _classify(self, path: Path) -> FileKind:
        stat = self._stat(path)
        ext = path.suffix.lower()
        name = path.name

        if ext in DATA_EXTENSIONS or any(hint in name for hint in DATA_NAME_HINTS):
            return FileKind.DATA_FILE
        if stat.is_dir:
            return self._classify_directory(path)
        if ext in CODE_EXTENSIONS:
            return FileKind.CODE_FILE
        if ext in CONFIG_EXTENSIONS or CONFIG_NAME_HINT in name:
            return FileKind.CONFIG_FILE
        if stat.size >= self.sniff_size_limit:
            return FileKind.TOO_LARGE
        return self._sniff_content(path)

    def _stat(self, path: Path) -> FileStat:
        result = self.fs.stat(path)
        match result:
            case NotFound():
                raise AnalysisAccessError(f"{path} does not exist")
            case OtherFailure(reason=reason):
                raise AnalysisAccessError(f"{path}: {reason}")
        return result

    def _classify_directory(self, path: Path) -> FileKind:
        try:
            children = self.fs.list_dir(path)
        except OSError as e:
            raise AnalysisAccessError(f"cannot list {path}: {e}") from e

        if any(PurePath(child).suffix.lower() in DATA_EXTENSIONS for child in children):
            return FileKind.DATA_DIRECTORY
        return FileKind.DIRECTORY

    def _sniff_content(self, path: Path) -> FileKind:
        # A file that passed stat but cannot be read is an opaque resource.
        try:
            raw = self.fs.read_bytes(path)
        except OSError as e:
            logger.debug(f"Treating unreadable {path} as binary: {e}")
            return FileKind.BINARY_CONTENT

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError:
            return FileKind.BINARY_CONTENT

        stripped = content.strip()
        if stripped.startswith(("{", "[")):
            return FileKind.JSON_CONTENT
        if "---" in content and (":" in content or "-" in content):
            return FileKind.YAML_CONTENT
        if len(content) > MIN_TEXT_LENGTH:
            return FileKind.TEXT_CONTENT
        return FileKind.UNSIGNALLED


def analyze_files(
    paths: Iterable[str | Path], fs: FileSystem | None = None
) -> CapabilityDecision:
    """Convenience function to analyze candidate files."""
    return FileCapabilityAnalyzer(fs).analyze(paths)
