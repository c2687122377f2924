"""YAML serialization of picsplit configuration."""

from __future__ import annotations

from pathlib import Path

import yaml

from picsplit.config.config import PicsplitConfig


def to_yaml(config: PicsplitConfig) -> str:
    """Render a configuration as YAML.

    Parameters
    ----------
    config : PicsplitConfig
        Configuration to render.

    Returns
    -------
    str
        YAML document.
    """
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)


def save_yaml(config: PicsplitConfig, path: Path) -> None:
    """Write a configuration to a YAML file.

    Parameters
    ----------
    config : PicsplitConfig
        Configuration to write.
    path : Path
        Destination file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_yaml(config), encoding="utf-8")
