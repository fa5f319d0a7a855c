"""MCP tool handlers - actions an AI assistant can invoke."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Annotated

from pydantic import Field

if TYPE_CHECKING:
    from fastmcp import FastMCP


def register_tools(mcp: FastMCP) -> None:
    """Register all tool handlers on the given MCP server."""

    # ------------------------------------------------------------------
    # create_mcp_server
    # ------------------------------------------------------------------
    @mcp.tool(
        name="create_mcp_server",
        description=(
            "Generate a new MCP server project with proper structure and configuration. "
            "Sample files can be analyzed to decide whether to include resources."
        ),
        tags={"project", "create"},
    )
    def create_mcp_server(
        name: Annotated[str, Field(description="Project name (kebab-case recommended)")],
        description: Annotated[str | None, Field(description="Project description")] = None,
        author: Annotated[str | None, Field(description="Author name")] = None,
        output_path: Annotated[
            str | None,
            Field(description="Target directory (defaults to current working directory)"),
        ] = None,
        include_resources: Annotated[
            bool | None, Field(description="Include resources capability and example resource")
        ] = None,
        analyze_files: Annotated[
            list[str] | None,
            Field(description="File paths to analyze; data files auto-enable resources"),
        ] = None,
        create_subdirectory: Annotated[
            bool | None, Field(description="Create project in a new subdirectory of output_path")
        ] = None,
    ) -> str:
        from fastmcp.exceptions import ToolError

        from mcp_server_builder.generator import run_create_project
        from mcp_server_builder.user_config import apply_user_defaults

        # Unset options are left out so user defaults can fill them in.
        supplied = {
            "description": description,
            "author": author,
            "output_path": output_path,
            "include_resources": include_resources,
            "analyze_files": analyze_files,
            "create_subdirectory": create_subdirectory,
        }
        arguments = {"name": name, **{k: v for k, v in supplied.items() if v is not None}}

        result = run_create_project(apply_user_defaults(arguments))
        if result.is_error or result.report is None:
            raise ToolError(result.text)

        report = result.report
        return json.dumps(
            {
                "project_dir": str(report.resolved_path),
                "project_name": report.project_name,
                "capabilities": [c.value for c in report.capabilities],
                "analysis": report.analysis_evidence,
                "files": report.files,
                "message": result.text,
            }
        )

    # ------------------------------------------------------------------
    # analyze_files
    # ------------------------------------------------------------------
    @mcp.tool(
        name="analyze_files",
        description="Classify sample files and report whether resources should be enabled.",
        tags={"analysis"},
    )
    def analyze_files(
        paths: Annotated[list[str], Field(description="Files or directories to analyze")],
    ) -> str:
        from mcp_server_builder.analyzer import analyze_files as _analyze

        decision = _analyze(paths)
        return json.dumps(
            {
                "needs_resources": decision.needs_resources,
                "evidence": decision.evidence,
                "summary": decision.summary,
            }
        )

    # ------------------------------------------------------------------
    # preview_project
    # ------------------------------------------------------------------
    @mcp.tool(
        name="preview_project",
        description="Render the files a project would contain without writing anything.",
        tags={"project", "preview"},
    )
    def preview_project(
        name: Annotated[str, Field(description="Project name")],
        description: Annotated[str, Field(description="Project description")] = "",
        author: Annotated[str, Field(description="Author name")] = "",
        include_resources: Annotated[
            bool, Field(description="Include resources capability")
        ] = False,
    ) -> str:
        from fastmcp.exceptions import ToolError

        from mcp_server_builder.errors import ScaffoldError
        from mcp_server_builder.generator import plan_project
        from mcp_server_builder.models import parse_request, resolve_capabilities

        request = parse_request(
            {
                "name": name,
                "description": description,
                "author": author,
                "include_resources": include_resources,
            }
        )
        try:
            plan = plan_project(request)
        except ScaffoldError as e:
            raise ToolError(str(e)) from e
        return json.dumps(
            {
                "project_name": plan.spec.project_name,
                "symbol_name": plan.spec.symbol_name,
                "capabilities": [
                    c.value for c in resolve_capabilities(plan.spec, plan.decision)
                ],
                "files": [
                    {"path": f.relative_path, "content": f.content} for f in plan.bundle.files
                ],
            }
        )
