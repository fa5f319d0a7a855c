"""Project validation utilities."""

import json
import logging
import re
from pathlib import Path

from mcp_server_builder.models import SDK_PACKAGE
from mcp_server_builder.synthesizer import RESOURCE_MODULE_PATH, RESOURCE_TYPE_NAMES

logger = logging.getLogger(__name__)

REQUIRED_FILES = (
    "tsconfig.json",
    ".gitignore",
    "README.md",
    "src/index.ts",
    "src/server.ts",
    "src/tools/example-tool.ts",
)

_ENTRYPOINT_CLASS = re.compile(r"new (\w+)\(\)")
_SERVER_CLASS = re.compile(r"export class (\w+)")


class ValidationResult:
    """Result of a validation check."""

    def __init__(self, passed: bool, message: str, details: str | None = None) -> None:
        self.passed = passed
        self.message = message
        self.details = details

    def __bool__(self) -> bool:
        return self.passed

    def __repr__(self) -> str:
        status = "✓" if self.passed else "✗"
        return f"{status} {self.message}"


class ProjectValidator:
    """Validates that a generated MCP server project is structurally sound."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir
        self.results: list[ValidationResult] = []

    def validate_all(self) -> list[ValidationResult]:
        """Run all validation checks."""
        self.results = [self._check_project_exists()]
        if not self.results[0]:
            return self.results

        self.results.append(self._check_package_json())
        self.results.extend(self._check_required_file(path) for path in REQUIRED_FILES)
        self.results.append(self._check_resource_consistency())
        self.results.append(self._check_server_symbol())

        return self.results

    def is_valid(self) -> bool:
        """Check if all validations passed."""
        if not self.results:
            self.validate_all()
        return all(self.results)

    def _read(self, relative_path: str) -> str | None:
        path = self.project_dir / relative_path
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def _check_project_exists(self) -> ValidationResult:
        """Check that the project directory exists."""
        if self.project_dir.exists() and self.project_dir.is_dir():
            return ValidationResult(True, "Project directory exists")
        return ValidationResult(False, "Project directory does not exist")

    def _check_package_json(self) -> ValidationResult:
        """Check that package.json exists, parses, and depends on the SDK."""
        text = self._read("package.json")
        if text is None:
            return ValidationResult(False, "package.json is missing")

        try:
            data = json.loads(text)
        except ValueError as e:
            return ValidationResult(False, "package.json is invalid JSON", str(e))

        dependencies = data.get("dependencies") if isinstance(data, dict) else None
        if not isinstance(dependencies, dict) or SDK_PACKAGE not in dependencies:
            return ValidationResult(False, f"package.json does not depend on {SDK_PACKAGE}")
        return ValidationResult(True, "package.json is valid")

    def _check_required_file(self, relative_path: str) -> ValidationResult:
        if (self.project_dir / relative_path).is_file():
            return ValidationResult(True, f"{relative_path} exists")
        return ValidationResult(False, f"{relative_path} is missing")

    def _check_resource_consistency(self) -> ValidationResult:
        """Check that the resource module and the server's resource wiring agree."""
        server = self._read("src/server.ts") or ""
        has_module = (self.project_dir / RESOURCE_MODULE_PATH).is_file()
        wired = [name for name in RESOURCE_TYPE_NAMES if re.search(rf"\b{name}\b", server)]

        if has_module and len(wired) == len(RESOURCE_TYPE_NAMES):
            return ValidationResult(True, "Resource capability is fully wired")
        if not has_module and not wired:
            return ValidationResult(True, "Project exposes tools only")
        return ValidationResult(
            False,
            "Resource module and server resource handlers are out of sync",
            f"resource module present: {has_module}, server references: {wired}",
        )

    def _check_server_symbol(self) -> ValidationResult:
        """Check that the entrypoint instantiates the class the server module exports."""
        index = _ENTRYPOINT_CLASS.search(self._read("src/index.ts") or "")
        server = _SERVER_CLASS.search(self._read("src/server.ts") or "")
        if index is None or server is None:
            return ValidationResult(False, "Cannot locate the server class")
        if index.group(1) != server.group(1):
            return ValidationResult(
                False,
                "Entrypoint and server module disagree on the server class",
                f"{index.group(1)} != {server.group(1)}",
            )
        return ValidationResult(True, f"Server class {server.group(1)} is consistent")


def validate_project(project_dir: Path) -> tuple[bool, list[ValidationResult]]:
    """Validate a project directory.

    Returns:
        Tuple of (is_valid, list of validation results)
    """
    validator = ProjectValidator(project_dir)
    results = validator.validate_all()
    return validator.is_valid(), results
