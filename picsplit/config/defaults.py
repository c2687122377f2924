"""Default configuration for the picsplit pipeline."""

from __future__ import annotations

from picsplit.config.config import PicsplitConfig

DEFAULT_CONFIG = PicsplitConfig()


def get_default_config() -> PicsplitConfig:
    """Return a fresh copy of the default configuration.

    Returns
    -------
    PicsplitConfig
        Deep copy of DEFAULT_CONFIG, safe to modify.
    """
    return DEFAULT_CONFIG.model_copy(deep=True)
