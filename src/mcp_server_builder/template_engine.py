"""Template engine for rendering generated project files.

A generated file is declared as an ordered list of sections. Each section
names a Jinja2 template fragment and, optionally, the capability it belongs
to. A gated section is rendered only when its capability is enabled, so
everything tied to one capability appears or disappears together.
"""

import json
import logging
from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from mcp_server_builder.models import SDK_PACKAGE, Capability, GeneratedFile, ProjectSpec

logger = logging.getLogger(__name__)

PROJECT_VERSION = "1.0.0"


@dataclass(frozen=True)
class TemplateSection:
    """One fragment of a generated file."""

    template: str
    requires: Capability | None = None

    def is_enabled(self, capabilities: Collection[Capability]) -> bool:
        return self.requires is None or self.requires in capabilities


@dataclass(frozen=True)
class TemplateFile:
    """A generated file built from ordered sections."""

    path: str
    sections: tuple[TemplateSection, ...]
    requires: Capability | None = None

    @classmethod
    def single(
        cls, path: str, template: str, requires: Capability | None = None
    ) -> "TemplateFile":
        """Declare a file rendered from one template."""
        return cls(path=path, sections=(TemplateSection(template),), requires=requires)

    def is_enabled(self, capabilities: Collection[Capability]) -> bool:
        return self.requires is None or self.requires in capabilities

    @property
    def templates(self) -> list[str]:
        return [s.template for s in self.sections]


def get_templates_dir() -> Path:
    """Get the directory containing built-in templates."""
    return Path(__file__).parent / "templates"


def _json_string(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def create_jinja_environment() -> Environment:
    """Create a Jinja2 environment with the templates directory."""
    templates_dir = get_templates_dir()
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["json_string"] = _json_string
    return env


def get_template_context(spec: ProjectSpec) -> dict[str, Any]:
    """Build the template context from a project spec.

    Capabilities are not part of the context; gating happens through sections.
    """
    name = spec.project_name
    return {
        "project": {
            "name": name,
            "symbol_name": spec.symbol_name,
            "server_class": f"{spec.symbol_name}Server",
            "version": PROJECT_VERSION,
            "description": spec.description or f"MCP server for {name}",
            "author": spec.author,
        },
        "sdk_package": SDK_PACKAGE,
    }


def render_template(env: Environment, template_name: str, context: dict[str, Any]) -> str:
    """Render a template with the given context."""
    template = env.get_template(template_name)
    return template.render(**context)


def render_file(
    env: Environment,
    template_file: TemplateFile,
    context: dict[str, Any],
    capabilities: Collection[Capability],
) -> GeneratedFile:
    """Render every enabled section of a file, in declaration order."""
    content = "".join(
        render_template(env, section.template, context)
        for section in template_file.sections
        if section.is_enabled(capabilities)
    )
    logger.debug(f"Rendered {template_file.path} ({len(content)} chars)")
    return GeneratedFile(relative_path=template_file.path, content=content)
