"""Pytest fixtures for mcp-server-builder tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from mcp_server_builder.models import CapabilityDecision, ProjectSpec


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config at a file that does not exist yet."""
    config_path = tmp_path / "user-config" / "config.yaml"
    monkeypatch.setattr("mcp_server_builder.user_config.get_config_path", lambda: config_path)
    monkeypatch.setattr("mcp_server_builder.cli.get_config_path", lambda: config_path)
    return config_path


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary directory for project generation."""
    output_dir = tmp_path / "projects"
    output_dir.mkdir(parents=True, exist_ok=True)
    yield output_dir


@pytest.fixture
def spec(temp_output_dir: Path) -> ProjectSpec:
    """A typical project spec writing into a new subdirectory."""
    return ProjectSpec(
        raw_name="Weather Server",
        description="Forecasts over MCP",
        author="Jane Doe",
        output_path=temp_output_dir,
        create_subdirectory=True,
    )


@pytest.fixture
def tools_only() -> CapabilityDecision:
    return CapabilityDecision(needs_resources=False)


@pytest.fixture
def with_resources() -> CapabilityDecision:
    return CapabilityDecision(needs_resources=True, evidence=["📄 data.json: Data file"])
