"""MCP resource handlers - read-only data exposed to AI assistants."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP


def register_resources(mcp: FastMCP) -> None:
    """Register all resource handlers on the given MCP server."""

    @mcp.resource(
        "config://user",
        name="User Configuration",
        description="Current user-level default configuration values.",
        mime_type="application/json",
    )
    def user_config() -> str:
        from mcp_server_builder.user_config import get_config_path, load_user_config

        config = load_user_config()
        return json.dumps(
            {
                "config_path": str(get_config_path()),
                "values": config,
            }
        )

    @mcp.resource(
        "template://list",
        name="Project Template",
        description="Files a generated project contains and the capability gating each one.",
        mime_type="application/json",
    )
    def template_list() -> str:
        from mcp_server_builder.synthesizer import PROJECT_TEMPLATE

        return json.dumps(
            [
                {
                    "path": template_file.path,
                    "requires": template_file.requires.value if template_file.requires else None,
                    "sections": [
                        {
                            "template": section.template,
                            "requires": section.requires.value if section.requires else None,
                        }
                        for section in template_file.sections
                    ],
                }
                for template_file in PROJECT_TEMPLATE
            ]
        )
