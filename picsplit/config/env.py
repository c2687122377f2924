"""Environment variable overrides for picsplit configuration.

Variables named ``PICSPLIT_<SECTION>__<FIELD>`` override the matching field,
e.g. ``PICSPLIT_SEARCH__ITERATIONS=5000``. Values are parsed as YAML scalars
so numbers, booleans and lists work without extra quoting rules.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "PICSPLIT_"


def load_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect configuration overrides from environment variables.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read. Defaults to os.environ.

    Returns
    -------
    dict[str, Any]
        Nested override dict keyed by section then field.

    Examples
    --------
    >>> load_from_env({"PICSPLIT_SEARCH__SEED": "7"})
    {'search': {'seed': 7}}
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for key, raw in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX) :].lower().split("__")
        if len(parts) != 2 or not all(parts):
            logger.warning(f"Ignoring malformed config variable {key}")
            continue
        section, field = parts
        overrides.setdefault(section, {})[field] = yaml.safe_load(raw)
    return overrides
