"""Project generator - creates MCP server projects from requests."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mcp_server_builder.analyzer import FileCapabilityAnalyzer
from mcp_server_builder.errors import ScaffoldError, ValidationError
from mcp_server_builder.filesystem import FileSystem
from mcp_server_builder.models import (
    CapabilityDecision,
    CreateProjectReport,
    CreateProjectRequest,
    MalformedRequest,
    ProjectBundle,
    ProjectSpec,
    WellFormedRequest,
    parse_request,
    resolve_capabilities,
)
from mcp_server_builder.synthesizer import synthesize
from mcp_server_builder.writer import ProjectWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectPlan:
    """Everything decided for a project before anything is written."""

    spec: ProjectSpec
    decision: CapabilityDecision
    bundle: ProjectBundle
    analysis_ran: bool

    @property
    def analysis_evidence(self) -> str | None:
        return self.decision.summary if self.analysis_ran else None


@dataclass(frozen=True)
class ToolResult:
    """Success/failure envelope for callers that do not handle exceptions."""

    is_error: bool
    text: str
    report: CreateProjectReport | None = None


def _require_well_formed(request: CreateProjectRequest) -> WellFormedRequest:
    if isinstance(request, MalformedRequest):
        raise ValidationError(request.message)
    return request


def plan_project(
    request: CreateProjectRequest, *, fs: FileSystem | None = None
) -> ProjectPlan:
    """Analyze sample files and synthesize the bundle without writing it."""
    well_formed = _require_well_formed(request)
    spec = well_formed.spec

    analysis_ran = bool(well_formed.analyze_files)
    if analysis_ran:
        decision = FileCapabilityAnalyzer(fs).analyze(well_formed.analyze_files)
    else:
        decision = CapabilityDecision()

    bundle = synthesize(spec, decision)
    return ProjectPlan(spec=spec, decision=decision, bundle=bundle, analysis_ran=analysis_ran)


def create_project(
    request: CreateProjectRequest, *, fs: FileSystem | None = None
) -> CreateProjectReport:
    """Scaffold an MCP server project.

    Args:
        request: A parsed request (see ``parse_request``)
        fs: Filesystem collaborator, defaults to the local filesystem

    Returns:
        Report naming the project path, capabilities and analysis evidence

    Raises:
        ValidationError: The request or project name is malformed
        ConflictError: The target already holds a project
        WriteFailure: A file could not be written (earlier files are kept)
    """
    plan = plan_project(request, fs=fs)
    spec = plan.spec
    logger.info(f"Creating MCP server project '{spec.project_name}' at {spec.project_path}")

    written = ProjectWriter(fs).write(
        spec.project_path, plan.bundle, create_subdirectory=spec.create_subdirectory
    )

    logger.info(f"Project '{spec.project_name}' created successfully")
    return CreateProjectReport(
        project_name=spec.project_name,
        resolved_path=written.project_dir,
        capabilities=resolve_capabilities(spec, plan.decision),
        analysis_evidence=plan.analysis_evidence,
        files=written.files,
        create_subdirectory=spec.create_subdirectory,
    )


def run_create_project(
    arguments: Mapping[str, Any], *, fs: FileSystem | None = None
) -> ToolResult:
    """Parse raw arguments and create a project, reporting failures as text."""
    try:
        report = create_project(parse_request(arguments), fs=fs)
    except ScaffoldError as e:
        logger.debug(f"Project creation failed: {e}")
        return ToolResult(is_error=True, text=f"❌ Failed to create MCP server project: {e}")
    return ToolResult(is_error=False, text=report.to_text(), report=report)
