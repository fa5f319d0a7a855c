"""MCP server for mcp-server-builder - exposes project scaffolding via Model Context Protocol."""

from fastmcp import FastMCP


def create_server() -> FastMCP:
    """Create and configure the FastMCP server instance."""
    mcp = FastMCP(
        name="mcp-server-builder",
        instructions=(
            "MCP server that scaffolds new TypeScript MCP server projects. Use "
            "create_mcp_server to generate a project, analyze_files to see which "
            "capabilities sample files suggest, and preview_project to inspect the "
            "generated files without writing them."
        ),
    )

    # Import and register tools and resources
    from mcp_server_builder.mcp_server.resources import register_resources
    from mcp_server_builder.mcp_server.tools import register_tools

    register_tools(mcp)
    register_resources(mcp)

    return mcp


def main() -> None:
    """Entry point for the mcp-server-builder-mcp CLI command."""
    server = create_server()
    server.run()
