"""Tests for the project writer."""

import json
from pathlib import Path

import pytest

from mcp_server_builder.errors import AlreadyExistsError, ConflictError, WriteFailure
from mcp_server_builder.filesystem import LocalFileSystem, OtherFailure, StatResult
from mcp_server_builder.models import GeneratedFile, ProjectBundle
from mcp_server_builder.writer import ProjectWriter, write_bundle


def _bundle() -> ProjectBundle:
    return ProjectBundle(
        files=[
            GeneratedFile(relative_path="package.json", content="{}\n"),
            GeneratedFile(relative_path="src/index.ts", content="// index\n"),
            GeneratedFile(relative_path="src/tools/example-tool.ts", content="// tool\n"),
        ]
    )


class TestCreateSubdirectory:
    """Tests for writing into a new subdirectory."""

    def test_creates_directory_and_files(self, temp_output_dir: Path) -> None:
        project_dir = temp_output_dir / "nested" / "demo"

        written = write_bundle(project_dir, _bundle(), create_subdirectory=True)

        assert written.project_dir == project_dir
        assert written.files == ["package.json", "src/index.ts", "src/tools/example-tool.ts"]
        assert (project_dir / "src" / "tools" / "example-tool.ts").read_text() == "// tool\n"

    def test_existing_directory_conflicts(self, temp_output_dir: Path) -> None:
        """An existing target fails and is left untouched."""
        project_dir = temp_output_dir / "demo"
        project_dir.mkdir()
        (project_dir / "keep.txt").write_text("mine")

        with pytest.raises(AlreadyExistsError, match="already exists"):
            write_bundle(project_dir, _bundle(), create_subdirectory=True)

        assert sorted(p.name for p in project_dir.iterdir()) == ["keep.txt"]
        assert (project_dir / "keep.txt").read_text() == "mine"

    def test_already_exists_is_a_conflict(self, temp_output_dir: Path) -> None:
        with pytest.raises(ConflictError):
            write_bundle(temp_output_dir, _bundle(), create_subdirectory=True)


class TestWriteInPlace:
    """Tests for writing into an existing directory."""

    def test_creates_missing_target(self, temp_output_dir: Path) -> None:
        project_dir = temp_output_dir / "fresh"

        write_bundle(project_dir, _bundle(), create_subdirectory=False)

        assert (project_dir / "src" / "index.ts").exists()

    def test_writes_alongside_existing_files(self, temp_output_dir: Path) -> None:
        (temp_output_dir / "notes.md").write_text("hello")

        write_bundle(temp_output_dir, _bundle(), create_subdirectory=False)

        assert (temp_output_dir / "notes.md").read_text() == "hello"
        assert (temp_output_dir / "package.json").exists()

    def test_existing_mcp_project_conflicts(self, temp_output_dir: Path) -> None:
        descriptor = {"name": "old", "dependencies": {"@modelcontextprotocol/sdk": "^1.0.0"}}
        (temp_output_dir / "package.json").write_text(json.dumps(descriptor))

        with pytest.raises(ConflictError, match="already contains an MCP server project"):
            write_bundle(temp_output_dir, _bundle(), create_subdirectory=False)

        assert not (temp_output_dir / "src").exists()
        assert json.loads((temp_output_dir / "package.json").read_text()) == descriptor

    def test_unrelated_package_json_is_overwritten(self, temp_output_dir: Path) -> None:
        """A descriptor without the SDK dependency is not a conflict."""
        descriptor = {"name": "web", "dependencies": {"react": "^18.0.0"}}
        (temp_output_dir / "package.json").write_text(json.dumps(descriptor))

        write_bundle(temp_output_dir, _bundle(), create_subdirectory=False)

        assert (temp_output_dir / "package.json").read_text() == "{}\n"

    def test_sdk_only_in_dev_dependencies_is_not_a_conflict(self, temp_output_dir: Path) -> None:
        descriptor = {"devDependencies": {"@modelcontextprotocol/sdk": "^1.0.0"}}
        (temp_output_dir / "package.json").write_text(json.dumps(descriptor))

        write_bundle(temp_output_dir, _bundle(), create_subdirectory=False)

        assert (temp_output_dir / "src" / "index.ts").exists()

    @pytest.mark.parametrize(
        "content",
        [
            '{"dependencies": {"@modelcontextprotocol/sdk": ',
            "not json at all",
            '["@modelcontextprotocol/sdk"]',
            '{"dependencies": ["@modelcontextprotocol/sdk"]}',
        ],
    )
    def test_malformed_descriptor_is_not_a_conflict(
        self, temp_output_dir: Path, content: str
    ) -> None:
        """Unparseable or oddly shaped descriptors fall through the heuristic."""
        (temp_output_dir / "package.json").write_text(content)

        assert ProjectWriter().has_existing_project(temp_output_dir) is False


class _FailingFileSystem(LocalFileSystem):
    """Local filesystem that refuses to write one file."""

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on

    def write_text(self, path: Path, content: str) -> None:
        if path.name == self.fail_on:
            raise PermissionError(13, "Permission denied", str(path))
        super().write_text(path, content)


class _UnstatableFileSystem(LocalFileSystem):
    """Local filesystem that cannot inspect one path."""

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on

    def stat(self, path: Path) -> StatResult:
        if path.name == self.fail_on:
            return OtherFailure(path, "Input/output error")
        return super().stat(path)


class TestWriteFailures:
    """Tests for partial writes."""

    def test_failure_is_raised_without_rollback(self, temp_output_dir: Path) -> None:
        """Files written before the failure remain on disk."""
        project_dir = temp_output_dir / "demo"
        writer = ProjectWriter(_FailingFileSystem("index.ts"), max_workers=1)

        with pytest.raises(WriteFailure) as exc_info:
            writer.write(project_dir, _bundle(), create_subdirectory=True)

        assert exc_info.value.path == project_dir / "src" / "index.ts"
        assert "Permission denied" in str(exc_info.value)
        assert (project_dir / "package.json").exists()
        assert (project_dir / "src").is_dir()

    def test_directory_failure(self, temp_output_dir: Path) -> None:
        blocker = temp_output_dir / "demo"
        blocker.write_text("a file where a directory should be")

        with pytest.raises(WriteFailure):
            write_bundle(blocker / "inner", _bundle(), create_subdirectory=False)


class TestBundleModel:
    """Tests for bundle path uniqueness."""

    def test_duplicate_paths_rejected(self) -> None:
        from pydantic import ValidationError

        with pytest.raises(ValidationError, match="Duplicate generated path"):
            ProjectBundle(
                files=[
                    GeneratedFile(relative_path="a.ts", content=""),
                    GeneratedFile(relative_path="a.ts", content="x"),
                ]
            )


class TestInspectionFailures:
    """Tests for targets the filesystem cannot inspect."""

    def test_uninspectable_subdirectory_fails_before_writing(
        self, temp_output_dir: Path
    ) -> None:
        project_dir = temp_output_dir / "demo"
        writer = ProjectWriter(_UnstatableFileSystem("demo"))

        with pytest.raises(WriteFailure, match="Input/output error") as exc_info:
            writer.write(project_dir, _bundle(), create_subdirectory=True)

        assert exc_info.value.path == project_dir
        assert list(temp_output_dir.iterdir()) == []

    def test_uninspectable_descriptor_is_not_a_conflict(self, temp_output_dir: Path) -> None:
        writer = ProjectWriter(_UnstatableFileSystem("package.json"))

        written = writer.write(temp_output_dir, _bundle(), create_subdirectory=False)

        assert written.files == _bundle().paths

    def test_name_too_long_is_a_write_failure(self, temp_output_dir: Path) -> None:
        with pytest.raises(WriteFailure):
            write_bundle(temp_output_dir / ("a" * 300), _bundle(), create_subdirectory=True)

    def test_exists_does_not_raise(self, temp_output_dir: Path) -> None:
        fs = LocalFileSystem()

        assert fs.exists(temp_output_dir) is True
        assert fs.exists(temp_output_dir / "missing") is False
        assert fs.exists(temp_output_dir / ("a" * 300)) is False
