"""Configuration system for the picsplit pipeline.

Provides configuration models, defaults, YAML loading and environment
overrides.
"""

from __future__ import annotations

from picsplit.config.config import PicsplitConfig
from picsplit.config.data import DataConfig
from picsplit.config.defaults import DEFAULT_CONFIG, get_default_config
from picsplit.config.env import load_from_env
from picsplit.config.loader import load_config, load_yaml_file, merge_configs
from picsplit.config.logging import LoggingConfig
from picsplit.config.paths import PathsConfig
from picsplit.config.pool import PoolConfig
from picsplit.config.search import SearchConfig
from picsplit.config.serialization import save_yaml, to_yaml

__all__ = [
    # Main config
    "PicsplitConfig",
    # Config sections
    "DataConfig",
    "PoolConfig",
    "SearchConfig",
    "PathsConfig",
    "LoggingConfig",
    # Defaults
    "DEFAULT_CONFIG",
    "get_default_config",
    # Loading
    "load_config",
    "load_yaml_file",
    "merge_configs",
    # Environment
    "load_from_env",
    # Serialization
    "to_yaml",
    "save_yaml",
]
