"""CLI interface for mcp-server-builder."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mcp_server_builder.analyzer import analyze_files
from mcp_server_builder.errors import ScaffoldError
from mcp_server_builder.generator import ProjectPlan, create_project, plan_project
from mcp_server_builder.models import parse_request, resolve_capabilities
from mcp_server_builder.user_config import (
    apply_user_defaults,
    get_config_path,
    get_default_config_template,
    load_user_config,
    save_user_config,
)
from mcp_server_builder.validator import validate_project

app = typer.Typer(
    name="mcp-server-builder",
    help="Scaffold TypeScript MCP server projects with tool and resource capabilities.",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Manage user-level default preferences.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _build_arguments(
    name: str,
    description: str | None,
    author: str | None,
    output_dir: Path | None,
    resources: bool | None,
    analyze: list[Path] | None,
    subdirectory: bool | None,
) -> dict[str, Any]:
    """Collect only the options the user actually passed."""
    arguments: dict[str, Any] = {"name": name}
    if description is not None:
        arguments["description"] = description
    if author is not None:
        arguments["author"] = author
    if output_dir is not None:
        arguments["outputPath"] = str(output_dir.absolute())
    if resources is not None:
        arguments["includeResources"] = resources
    if analyze:
        arguments["analyzeFiles"] = [str(p) for p in analyze]
    if subdirectory is not None:
        arguments["createSubdirectory"] = subdirectory
    return arguments


@app.command("create")
def create_cmd(
    name: Annotated[str, typer.Argument(help="Name of the MCP server project")],
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Project description")
    ] = None,
    author: Annotated[str | None, typer.Option("--author", help="Author name")] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output", "-o", help="Target directory")
    ] = None,
    resources: Annotated[
        bool | None,
        typer.Option("--resources/--no-resources", help="Include the resources capability"),
    ] = None,
    analyze: Annotated[
        list[Path] | None,
        typer.Option("--analyze", "-a", help="Sample file to analyze (repeatable)"),
    ] = None,
    subdirectory: Annotated[
        bool | None,
        typer.Option(
            "--subdirectory/--no-subdirectory", help="Create the project in a new subdirectory"
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Preview what would be created without writing anything"),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False,
) -> None:
    """Create a new MCP server project."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    arguments = apply_user_defaults(
        _build_arguments(name, description, author, output_dir, resources, analyze, subdirectory)
    )
    request = parse_request(arguments)

    try:
        if dry_run:
            _display_dry_run(plan_project(request))
            return

        report = create_project(request)
    except ScaffoldError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    capabilities = " + ".join(c.value.capitalize() for c in report.capabilities)
    steps = "\n".join(f"  {step}" for step in report.next_steps)
    rprint(
        Panel.fit(
            f"[green]✓ MCP server project '{report.project_name}' "
            "created successfully![/green]\n\n"
            f"Location: [cyan]{report.resolved_path}[/cyan]\n"
            f"Capabilities: [cyan]{capabilities}[/cyan]\n\n"
            f"[dim]Next steps:[/dim]\n{steps}",
            title="Success",
        )
    )
    if report.analysis_evidence:
        rprint(f"\n[dim]{report.analysis_evidence}[/dim]")


def _display_dry_run(plan: ProjectPlan) -> None:
    """Display a dry-run summary of what would be created."""
    spec = plan.spec
    capabilities = resolve_capabilities(spec, plan.decision)

    rprint(
        Panel.fit(
            "[bold]Dry run[/bold] - nothing will be created",
            title=f"mcp-server-builder create {spec.project_name}",
            border_style="yellow",
        )
    )

    overview = Table(title="Project Overview", show_header=False, box=None, padding=(0, 2))
    overview.add_column(style="cyan")
    overview.add_column()
    overview.add_row("Location", str(spec.project_path))
    overview.add_row("Server class", f"{spec.symbol_name}Server")
    overview.add_row("Capabilities", ", ".join(c.value for c in capabilities))
    console.print(overview)

    files = Table(title="Files")
    files.add_column("Path", style="cyan")
    files.add_column("Size", justify="right")
    for file in plan.bundle.files:
        files.add_row(file.relative_path, f"{len(file.content)} chars")
    console.print(files)

    if plan.analysis_evidence:
        rprint(f"\n[dim]{plan.analysis_evidence}[/dim]")


@app.command("analyze")
def analyze_cmd(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to analyze")],
) -> None:
    """Show which capabilities sample files suggest, without creating anything."""
    decision = analyze_files(paths)

    table = Table(title="Capability Analysis")
    table.add_column("Evidence")
    for line in decision.evidence:
        table.add_row(line)
    console.print(table)

    if decision.needs_resources:
        rprint("\n[green]Resources capability recommended.[/green]")
    else:
        rprint("\n[dim]Tools only.[/dim]")


@app.command("validate")
def validate_cmd(
    project_dir: Annotated[Path, typer.Argument(help="Path to the project to validate")] = Path(
        "."
    ),
) -> None:
    """Validate a generated MCP server project."""
    project_path = project_dir.absolute()

    if not project_path.exists():
        rprint(f"[red]Error: Directory '{project_path}' does not exist[/red]")
        raise typer.Exit(1)

    rprint(f"[blue]Validating project at {project_path}...[/blue]\n")

    is_valid, results = validate_project(project_path)

    for result in results:
        if result.passed:
            rprint(f"  [green]✓[/green] {result.message}")
        else:
            rprint(f"  [red]✗[/red] {result.message}")
            if result.details:
                rprint(f"    [dim]{result.details}[/dim]")

    if is_valid:
        rprint("\n[green]All validations passed![/green]")
    else:
        rprint("\n[red]Some validations failed.[/red]")
        raise typer.Exit(1)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show current user configuration."""
    config_path = get_config_path()
    user_cfg = load_user_config()

    if not user_cfg:
        rprint(f"[yellow]No user config found at {config_path}[/yellow]")
        rprint("[dim]Run 'mcp-server-builder config init' to create one.[/dim]")
        return

    rprint(f"[cyan]Config file:[/cyan] {config_path}\n")
    table = Table(title="User Defaults")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in user_cfg.items():
        table.add_row(key, str(value))

    console.print(table)


@config_app.command("init")
def config_init_cmd(
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing config")] = False,
) -> None:
    """Create a default user configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        rprint(f"[yellow]Config already exists at {config_path}[/yellow]")
        rprint("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(1)

    saved_path = save_user_config(get_default_config_template())
    rprint(f"[green]Created default config at {saved_path}[/green]")
    rprint("[dim]Edit this file to customize your defaults.[/dim]")


@config_app.command("path")
def config_path_cmd() -> None:
    """Print the path to the user config file."""
    rprint(str(get_config_path()))


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
