#!/usr/bin/env python3
"""
Option resolution for the pull command.

Values come from, highest priority first: command-line flags, environment
variables (a ``.env`` file is loaded if present), a YAML config file, and
built-in defaults.

Config file example (``.tolgee-pull.yaml``):
```yaml
project_id: "1234"
base_url: https://tolgee.example.com
format: xml
output_dir: app/src/main/res/values
tags: android
exclude_tags: deprecated
```
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError
from .service import DEFAULT_BASE_URL

DEFAULT_CONFIG_FILE = ".tolgee-pull.yaml"

ENV_VARS = {
    "api_key": "TOLGEE_API_KEY",
    "project_id": "TOLGEE_PROJECT_ID",
    "base_url": "TOLGEE_BASE_URL",
}

DEFAULTS = {
    "base_url": DEFAULT_BASE_URL,
    "format": "xml",
    "output_dir": "i18n",
    "tags": "android",
    "exclude_tags": "deprecated",
}


@dataclass
class PullOptions:
    """Resolved options for one pull run."""
    api_key: str
    project_id: str
    base_url: str = DEFAULT_BASE_URL
    format: str = "xml"
    output_dir: str = "i18n"
    tags: Optional[str] = "android"
    exclude_tags: Optional[str] = "deprecated"
    verbose: bool = False


def load_config_file(path: Optional[str] = None) -> dict[str, Any]:
    """
    Read a YAML config file.

    Args:
        path: Explicit config path; must exist. When None, the default
            file is used only if present in the working directory.

    Returns:
        Mapping of option name -> value (empty if no file)

    Raises:
        ConfigError: explicit file missing, unparseable, or not a mapping
    """
    if path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)
        if not config_path.exists():
            return {}
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    # YAML keys may use dashes like the CLI flags
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def resolve_options(
    cli_values: dict[str, Any],
    config_path: Optional[str] = None,
) -> PullOptions:
    """
    Merge CLI values, environment, config file and defaults.

    Args:
        cli_values: Option name -> value from argparse (None means unset)
        config_path: Optional explicit YAML config file

    Returns:
        PullOptions

    Raises:
        ConfigError: api key or project id missing from every source
    """
    load_dotenv(find_dotenv(usecwd=True))
    file_values = load_config_file(config_path)

    known = {f.name for f in fields(PullOptions)}
    unknown = sorted(set(file_values) - known)
    if unknown:
        raise ConfigError(f"Unknown option(s) in config file: {', '.join(unknown)}")

    resolved: dict[str, Any] = {}
    for name in known:
        value = cli_values.get(name)
        if value is None and name in ENV_VARS:
            value = os.environ.get(ENV_VARS[name]) or None
        if value is None:
            value = file_values.get(name)
        if value is None:
            value = DEFAULTS.get(name)
        resolved[name] = value

    if not resolved["api_key"]:
        raise ConfigError(
            f"API key is required. Use --api-key or set {ENV_VARS['api_key']}."
        )
    if not resolved["project_id"]:
        raise ConfigError(
            f"Project ID is required. Use --project-id or set {ENV_VARS['project_id']}."
        )

    resolved["project_id"] = str(resolved["project_id"])
    resolved["verbose"] = bool(resolved["verbose"])
    return PullOptions(**resolved)
