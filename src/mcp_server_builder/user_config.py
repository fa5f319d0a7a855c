"""User-level configuration for mcp-server-builder defaults.

Reads from ~/.config/mcp-server-builder/config.yaml and provides defaults
that are applied to create requests before validation.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "mcp-server-builder"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Config key -> (expected type, request argument alias)
_FIELDS: dict[str, tuple[type, str]] = {
    "author": (str, "author"),
    "description": (str, "description"),
    "output_dir": (str, "outputPath"),
    "include_resources": (bool, "includeResources"),
    "create_subdirectory": (bool, "createSubdirectory"),
}

_SNAKE_CASE_ARGS = {
    "outputPath": "output_path",
    "includeResources": "include_resources",
    "createSubdirectory": "create_subdirectory",
}


def get_config_path() -> Path:
    """Return the path to the user config file."""
    return CONFIG_FILE


def load_user_config() -> dict[str, Any]:
    """Load user configuration from disk.

    Returns an empty dict if the file doesn't exist or is invalid.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load user config from {config_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"User config is not a mapping: {config_path}")
        return {}

    validated: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _FIELDS:
            logger.warning(f"Unknown key '{key}' in user config, ignoring")
            continue
        expected, _ = _FIELDS[key]
        if value is None:
            continue
        if not isinstance(value, expected):
            logger.warning(
                f"Invalid value '{value}' for '{key}' in user config. "
                f"Expected {expected.__name__}"
            )
            continue
        validated[key] = value

    return validated


def apply_user_defaults(arguments: dict[str, Any]) -> dict[str, Any]:
    """Apply user defaults to raw create arguments.

    Arguments supplied by the caller (in camelCase or snake_case) win.
    """
    user_cfg = load_user_config()
    if not user_cfg:
        return arguments

    result = dict(arguments)
    for key, value in user_cfg.items():
        _, alias = _FIELDS[key]
        snake = _SNAKE_CASE_ARGS.get(alias, alias)
        if alias in result or snake in result:
            continue
        result[alias] = value
    return result


def save_user_config(config: dict[str, Any]) -> Path:
    """Save configuration to the user config file.

    Returns the path written to.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
    return config_path


def get_default_config_template() -> dict[str, Any]:
    """Return an example config for scaffolding."""
    return {
        "author": "",
        "description": "",
        "output_dir": ".",
        "include_resources": False,
        "create_subdirectory": True,
    }
