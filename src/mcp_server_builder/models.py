"""Data models for mcp-server-builder."""

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from mcp_server_builder.errors import ValidationError
from mcp_server_builder.naming import sanitize_project_name, to_symbol_name

SDK_PACKAGE = "@modelcontextprotocol/sdk"
NO_FILES_ANALYZED = "No files analyzed"


class Capability(StrEnum):
    """Capability surface a generated server advertises."""

    TOOLS = "tools"
    RESOURCES = "resources"


class ProjectSpec(BaseModel):
    """What the caller asked for, with the derived names."""

    model_config = ConfigDict(frozen=True)

    raw_name: str = Field(..., description="Project name as supplied by the caller")
    description: str = Field("", description="Project description")
    author: str = Field("", description="Project author")
    output_path: Path = Field(default_factory=Path.cwd, description="Target directory")
    include_resources: bool = Field(False, description="Always include the resource capability")
    create_subdirectory: bool = Field(
        False, description="Create the project in a new subdirectory of output_path"
    )

    @model_validator(mode="after")
    def _check_name(self) -> "ProjectSpec":
        # Raises our ValidationError, which pydantic lets propagate unwrapped.
        sanitize_project_name(self.raw_name)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def project_name(self) -> str:
        """Kebab-case project slug."""
        return sanitize_project_name(self.raw_name)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def symbol_name(self) -> str:
        """PascalCase symbol used for the generated server class."""
        return to_symbol_name(self.project_name)

    @property
    def project_path(self) -> Path:
        """Directory the project files are written into."""
        if self.create_subdirectory:
            return self.output_path / self.project_name
        return self.output_path


class CapabilityDecision(BaseModel):
    """Outcome of sample file analysis."""

    needs_resources: bool = Field(False, description="Whether any input signalled resources")
    evidence: list[str] = Field(
        default_factory=list, description="One audit line per analyzed input, in input order"
    )

    @property
    def summary(self) -> str:
        """Human-readable rendering of the evidence."""
        if not self.evidence or self.evidence == [NO_FILES_ANALYZED]:
            return NO_FILES_ANALYZED
        lines = "\n".join(self.evidence)
        return f"Analyzed {len(self.evidence)} file(s):\n{lines}"


def resolve_capabilities(spec: ProjectSpec, decision: CapabilityDecision) -> list[Capability]:
    """Merge the caller's default with the analysis outcome."""
    if spec.include_resources or decision.needs_resources:
        return [Capability.TOOLS, Capability.RESOURCES]
    return [Capability.TOOLS]


class GeneratedFile(BaseModel):
    """A single generated file."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(..., description="POSIX path relative to the project root")
    content: str = Field(..., description="File content")


class ProjectBundle(BaseModel):
    """The ordered set of files produced for one project."""

    files: list[GeneratedFile] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_paths(self) -> "ProjectBundle":
        seen: set[str] = set()
        for file in self.files:
            if file.relative_path in seen:
                raise ValueError(f"Duplicate generated path: {file.relative_path}")
            seen.add(file.relative_path)
        return self

    @property
    def paths(self) -> list[str]:
        return [f.relative_path for f in self.files]

    def get(self, relative_path: str) -> GeneratedFile | None:
        for file in self.files:
            if file.relative_path == relative_path:
                return file
        return None


class CreateProjectArguments(BaseModel):
    """Arguments accepted at the tool boundary (camelCase or snake_case)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Project name (kebab-case recommended)")
    description: str = Field("", description="Project description")
    author: str = Field("", description="Author name")
    output_path: str | None = Field(None, alias="outputPath", description="Target directory")
    include_resources: bool = Field(
        False, alias="includeResources", description="Include the resources capability"
    )
    analyze_files: list[str] = Field(
        default_factory=list, alias="analyzeFiles", description="Sample files to analyze"
    )
    create_subdirectory: bool = Field(
        False, alias="createSubdirectory", description="Create project in a new subdirectory"
    )


class WellFormedRequest(BaseModel):
    """A request that passed boundary validation."""

    kind: Literal["well_formed"] = "well_formed"
    spec: ProjectSpec
    analyze_files: list[str] = Field(default_factory=list)


class MalformedRequest(BaseModel):
    """A request rejected at the boundary, with the reasons why."""

    kind: Literal["malformed"] = "malformed"
    problems: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(self.problems) or "Malformed request"


CreateProjectRequest = Annotated[
    WellFormedRequest | MalformedRequest, Field(discriminator="kind")
]


def parse_request(arguments: Mapping[str, Any]) -> WellFormedRequest | MalformedRequest:
    """Validate a loosely-typed arguments mapping once, up front.

    Never raises: problems are reported through ``MalformedRequest``.
    """
    try:
        args = CreateProjectArguments.model_validate(dict(arguments))
    except PydanticValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        ]
        return MalformedRequest(problems=problems)

    try:
        spec = ProjectSpec(
            raw_name=args.name,
            description=args.description,
            author=args.author,
            output_path=Path(args.output_path) if args.output_path else Path.cwd(),
            include_resources=args.include_resources,
            create_subdirectory=args.create_subdirectory,
        )
    except ValidationError as e:
        return MalformedRequest(problems=[str(e)])

    return WellFormedRequest(spec=spec, analyze_files=args.analyze_files)


class CreateProjectReport(BaseModel):
    """Structured result of a successful scaffold."""

    project_name: str
    resolved_path: Path
    capabilities: list[Capability]
    analysis_evidence: str | None = None
    files: list[str] = Field(default_factory=list)
    create_subdirectory: bool = False

    @property
    def next_steps(self) -> list[str]:
        steps = ["npm install", "npm run dev"]
        if self.create_subdirectory:
            return [f"cd {self.project_name}", *steps]
        return steps

    def to_text(self) -> str:
        """Render the report the way it is shown to a human."""
        capabilities = " + ".join(c.value.capitalize() for c in self.capabilities)
        parts = [
            f"✅ Successfully created MCP server project '{self.project_name}'",
            f"📁 Location: {self.resolved_path}",
            f"🎯 Capabilities: {capabilities}",
        ]
        if self.analysis_evidence:
            parts.append(f"🔍 Analysis: {self.analysis_evidence}")
        steps = "\n".join(f"   {step}" for step in self.next_steps)
        parts.append(f"🚀 Next steps:\n{steps}")
        parts.append("📖 See README.md for configuration instructions.")
        return "\n\n".join(parts)
