"""Template synthesizer - maps a project spec to a bundle of generated files."""

import logging

from mcp_server_builder.models import (
    Capability,
    CapabilityDecision,
    ProjectBundle,
    ProjectSpec,
    resolve_capabilities,
)
from mcp_server_builder.template_engine import (
    TemplateFile,
    TemplateSection,
    create_jinja_environment,
    get_template_context,
    render_file,
)

logger = logging.getLogger(__name__)

RESOURCE_MODULE_PATH = "src/resources/example-resource.ts"

# Type names the server module imports only when resources are enabled.
RESOURCE_TYPE_NAMES = ("ListResourcesRequestSchema", "ReadResourceRequestSchema", "Resource")

_RESOURCES = Capability.RESOURCES

SERVER_MODULE = TemplateFile(
    path="src/server.ts",
    sections=(
        TemplateSection("src/server/sdk_imports.ts.j2"),
        TemplateSection("src/server/sdk_resource_imports.ts.j2", requires=_RESOURCES),
        TemplateSection("src/server/module_imports.ts.j2"),
        TemplateSection("src/server/resource_module_import.ts.j2", requires=_RESOURCES),
        TemplateSection("src/server/class_open.ts.j2"),
        TemplateSection("src/server/resource_capability.ts.j2", requires=_RESOURCES),
        TemplateSection("src/server/tool_handlers.ts.j2"),
        TemplateSection("src/server/resource_handlers.ts.j2", requires=_RESOURCES),
        TemplateSection("src/server/class_close.ts.j2"),
    ),
)

PROJECT_TEMPLATE: tuple[TemplateFile, ...] = (
    TemplateFile.single("package.json", "package.json.j2"),
    TemplateFile.single("tsconfig.json", "tsconfig.json.j2"),
    TemplateFile.single(".gitignore", "gitignore.j2"),
    TemplateFile.single("README.md", "README.md.j2"),
    TemplateFile.single("src/index.ts", "src/index.ts.j2"),
    SERVER_MODULE,
    TemplateFile.single("src/tools/example-tool.ts", "src/example-tool.ts.j2"),
    TemplateFile.single(RESOURCE_MODULE_PATH, "src/example-resource.ts.j2", requires=_RESOURCES),
)


def synthesize(spec: ProjectSpec, decision: CapabilityDecision) -> ProjectBundle:
    """Render the complete, internally consistent file bundle for a project.

    Pure: the same spec and decision always produce an identical bundle.
    """
    capabilities = resolve_capabilities(spec, decision)
    env = create_jinja_environment()
    context = get_template_context(spec)

    files = [
        render_file(env, template_file, context, capabilities)
        for template_file in PROJECT_TEMPLATE
        if template_file.is_enabled(capabilities)
    ]
    logger.debug(
        f"Synthesized {len(files)} file(s) for '{spec.project_name}' "
        f"with capabilities {[c.value for c in capabilities]}"
    )
    return ProjectBundle(files=files)
