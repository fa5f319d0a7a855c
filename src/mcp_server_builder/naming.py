"""Project name normalization."""

import re

from mcp_server_builder.errors import ValidationError

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-+")


def sanitize_project_name(raw_name: str) -> str:
    """Normalize free text into a kebab-case project slug.

    Examples:
        >>> sanitize_project_name(" My Cool App! ")
        'my-cool-app'

    Raises:
        ValidationError: If nothing usable remains after normalization.
    """
    slug = _INVALID_CHARS.sub("-", raw_name.lower())
    slug = _HYPHEN_RUNS.sub("-", slug).strip("-")
    if not slug:
        raise ValidationError(
            "Invalid project name. Please use alphanumeric characters and hyphens."
        )
    return slug


def to_symbol_name(project_name: str) -> str:
    """Derive the PascalCase symbol used for the generated server class."""
    return "".join(part[:1].upper() + part[1:] for part in project_name.split("-"))
