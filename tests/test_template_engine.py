"""Tests for template engine functionality."""

import pytest
from jinja2 import UndefinedError

from mcp_server_builder.models import Capability, ProjectSpec
from mcp_server_builder.synthesizer import PROJECT_TEMPLATE
from mcp_server_builder.template_engine import (
    TemplateFile,
    TemplateSection,
    create_jinja_environment,
    get_template_context,
    get_templates_dir,
    render_file,
    render_template,
)


class TestGetTemplatesDir:
    """Tests for get_templates_dir function."""

    def test_templates_dir_exists(self) -> None:
        templates_dir = get_templates_dir()
        assert templates_dir.exists()
        assert templates_dir.is_dir()


class TestCreateJinjaEnvironment:
    """Tests for create_jinja_environment function."""

    def test_environment_can_load_templates(self) -> None:
        env = create_jinja_environment()

        templates = env.list_templates()
        assert "package.json.j2" in templates
        assert "src/server/sdk_imports.ts.j2" in templates

    def test_every_declared_section_exists(self) -> None:
        """Every template named by the project template is on disk."""
        templates = set(create_jinja_environment().list_templates())
        for template_file in PROJECT_TEMPLATE:
            for name in template_file.templates:
                assert name in templates, name

    def test_json_string_filter(self) -> None:
        env = create_jinja_environment()
        assert env.filters["json_string"]('a "b"') == '"a \\"b\\""'

    def test_undefined_variables_fail(self) -> None:
        env = create_jinja_environment()
        with pytest.raises(UndefinedError):
            env.from_string("{{ project.missing }}").render(project={})


class TestGetTemplateContext:
    """Tests for get_template_context function."""

    def test_basic_context(self) -> None:
        spec = ProjectSpec(raw_name="My App", description="Does things", author="Ann")

        context = get_template_context(spec)

        assert context["project"]["name"] == "my-app"
        assert context["project"]["symbol_name"] == "MyApp"
        assert context["project"]["server_class"] == "MyAppServer"
        assert context["project"]["description"] == "Does things"
        assert context["project"]["author"] == "Ann"
        assert context["sdk_package"] == "@modelcontextprotocol/sdk"

    def test_default_description(self) -> None:
        context = get_template_context(ProjectSpec(raw_name="notes"))
        assert context["project"]["description"] == "MCP server for notes"

    def test_context_has_no_capability_flags(self) -> None:
        """Capability gating is structural, never a template variable."""
        spec = ProjectSpec(raw_name="notes", include_resources=True)
        context = get_template_context(spec)

        assert "resources" not in str(context).lower()


class TestTemplateModel:
    """Tests for gated sections and files."""

    def test_ungated_section_always_enabled(self) -> None:
        section = TemplateSection("a.j2")
        assert section.is_enabled([])
        assert section.is_enabled([Capability.TOOLS])

    def test_gated_section(self) -> None:
        section = TemplateSection("a.j2", requires=Capability.RESOURCES)
        assert not section.is_enabled([Capability.TOOLS])
        assert section.is_enabled([Capability.TOOLS, Capability.RESOURCES])

    def test_single_file(self) -> None:
        file = TemplateFile.single("x.ts", "x.ts.j2", requires=Capability.RESOURCES)
        assert file.templates == ["x.ts.j2"]
        assert not file.is_enabled([Capability.TOOLS])

    def test_render_file_skips_disabled_sections(self) -> None:
        env = create_jinja_environment()
        context = get_template_context(ProjectSpec(raw_name="demo"))
        template_file = TemplateFile(
            path="src/server.ts",
            sections=(
                TemplateSection(
                    "src/server/resource_capability.ts.j2", requires=Capability.RESOURCES
                ),
                TemplateSection("src/index.ts.j2"),
            ),
        )

        tools_only = render_file(env, template_file, context, [Capability.TOOLS])
        both = render_file(env, template_file, context, [Capability.TOOLS, Capability.RESOURCES])

        index = render_template(env, "src/index.ts.j2", context)
        assert tools_only.relative_path == "src/server.ts"
        assert tools_only.content == index
        assert both.content == "          resources: {},\n" + index
