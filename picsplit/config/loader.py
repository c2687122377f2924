"""Configuration loading and merging."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from picsplit.config.config import PicsplitConfig
from picsplit.config.env import load_from_env
from picsplit.errors import ConfigError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from a file.

    Parameters
    ----------
    path : Path
        YAML file.

    Returns
    -------
    dict[str, Any]
        Parsed mapping (empty for an empty file).

    Raises
    ------
    ConfigError
        If the file is missing, unparsable, or not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two config dicts, override winning.

    Parameters
    ----------
    base : dict[str, Any]
        Base values.
    override : dict[str, Any]
        Values taking precedence.

    Returns
    -------
    dict[str, Any]
        New merged dict; inputs are not modified.

    Examples
    --------
    >>> merge_configs({"search": {"seed": 1, "iter": 9}}, {"search": {"seed": 2}})
    {'search': {'seed': 2, 'iter': 9}}
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    use_env: bool = True,
) -> PicsplitConfig:
    """Build a configuration from defaults, file, environment and overrides.

    Later sources win: defaults < YAML file < environment < overrides.

    Parameters
    ----------
    config_path : Path | None
        Optional YAML file.
    overrides : dict[str, Any] | None
        Explicit overrides (e.g. from CLI options).
    use_env : bool, default=True
        Whether to apply ``PICSPLIT_*`` environment variables.

    Returns
    -------
    PicsplitConfig
        Validated configuration.

    Raises
    ------
    ConfigError
        If any source is invalid.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data = load_yaml_file(config_path)
    if use_env:
        data = merge_configs(data, load_from_env())
    if overrides:
        data = merge_configs(data, overrides)

    try:
        return PicsplitConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
