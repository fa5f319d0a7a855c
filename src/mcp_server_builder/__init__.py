"""mcp-server-builder - scaffold TypeScript MCP server projects."""

from mcp_server_builder.analyzer import FileCapabilityAnalyzer, analyze_files
from mcp_server_builder.errors import (
    AlreadyExistsError,
    AnalysisAccessError,
    ConflictError,
    ScaffoldError,
    ValidationError,
    WriteFailure,
)
from mcp_server_builder.generator import create_project, plan_project, run_create_project
from mcp_server_builder.models import (
    Capability,
    CapabilityDecision,
    CreateProjectReport,
    GeneratedFile,
    ProjectBundle,
    ProjectSpec,
    parse_request,
)
from mcp_server_builder.naming import sanitize_project_name, to_symbol_name
from mcp_server_builder.synthesizer import synthesize
from mcp_server_builder.writer import ProjectWriter, write_bundle

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "AnalysisAccessError",
    "Capability",
    "CapabilityDecision",
    "ConflictError",
    "CreateProjectReport",
    "FileCapabilityAnalyzer",
    "GeneratedFile",
    "ProjectBundle",
    "ProjectSpec",
    "ProjectWriter",
    "ScaffoldError",
    "ValidationError",
    "WriteFailure",
    "analyze_files",
    "create_project",
    "parse_request",
    "plan_project",
    "run_create_project",
    "sanitize_project_name",
    "synthesize",
    "to_symbol_name",
    "write_bundle",
]
