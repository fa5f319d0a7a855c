"""Project writer - materializes a generated bundle on disk."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from mcp_server_builder.errors import AlreadyExistsError, ConflictError, WriteFailure
from mcp_server_builder.filesystem import FileStat, FileSystem, LocalFileSystem, OtherFailure
from mcp_server_builder.models import SDK_PACKAGE, ProjectBundle

logger = logging.getLogger(__name__)

DESCRIPTOR_FILE = "package.json"
MAX_WRITE_WORKERS = 8


@dataclass
class WrittenProject:
    """Where a bundle was written and which files were created."""

    project_dir: Path
    files: list[str] = field(default_factory=list)


class ProjectWriter:
    """Writes a ProjectBundle into a target directory.

    Writes are not transactional. If a write fails partway, files already
    written stay on disk and no cleanup is attempted.
    """

    def __init__(self, fs: FileSystem | None = None, *, max_workers: int = MAX_WRITE_WORKERS):
        self.fs = fs if fs is not None else LocalFileSystem()
        self.max_workers = max_workers

    def write(
        self, project_dir: Path, bundle: ProjectBundle, *, create_subdirectory: bool
    ) -> WrittenProject:
        """Check for conflicts, create directories, then write every file."""
        if create_subdirectory:
            match self.fs.stat(project_dir):
                case FileStat():
                    raise AlreadyExistsError(
                        f"Directory '{project_dir.name}' already exists in {project_dir.parent}"
                    )
                case OtherFailure(reason=reason):
                    raise WriteFailure(project_dir, reason)
        elif self.has_existing_project(project_dir):
            raise ConflictError(
                "Directory already contains an MCP server project. "
                "Use a different directory or set createSubdirectory: true."
            )

        logger.info(f"Writing {len(bundle.files)} file(s) to {project_dir}")
        self._make_dirs(project_dir, bundle)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                (
                    file.relative_path,
                    pool.submit(self._write_file, project_dir, file.relative_path, file.content),
                )
                for file in bundle.files
            ]
            for relative_path, future in futures:
                try:
                    future.result()
                except OSError as e:
                    raise WriteFailure(project_dir / relative_path, str(e)) from e

        return WrittenProject(project_dir=project_dir, files=bundle.paths)

    def has_existing_project(self, project_dir: Path) -> bool:
        """Best-effort check for a descriptor that already depends on the SDK.

        A descriptor that cannot be read or parsed is not treated as a conflict.
        """
        descriptor = project_dir / DESCRIPTOR_FILE
        if not self.fs.exists(descriptor):
            return False

        try:
            data = json.loads(self.fs.read_bytes(descriptor))
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable {descriptor}: {e}")
            return False

        if not isinstance(data, dict):
            return False
        dependencies = data.get("dependencies")
        return isinstance(dependencies, dict) and SDK_PACKAGE in dependencies

    def _make_dirs(self, project_dir: Path, bundle: ProjectBundle) -> None:
        directories = {project_dir}
        for relative_path in bundle.paths:
            parent = PurePosixPath(relative_path).parent
            directories.add(project_dir.joinpath(*parent.parts))

        # Sorted so parents are created before their children.
        for directory in sorted(directories):
            try:
                self.fs.make_dirs(directory)
            except OSError as e:
                raise WriteFailure(directory, str(e)) from e

    def _write_file(self, project_dir: Path, relative_path: str, content: str) -> None:
        path = project_dir.joinpath(*PurePosixPath(relative_path).parts)
        self.fs.write_text(path, content)


def write_bundle(
    project_dir: Path,
    bundle: ProjectBundle,
    *,
    create_subdirectory: bool,
    fs: FileSystem | None = None,
) -> WrittenProject:
    """Convenience function to write a bundle."""
    return ProjectWriter(fs).write(project_dir, bundle, create_subdirectory=create_subdirectory)
