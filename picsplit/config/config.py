"""Top-level configuration model for the picsplit pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from picsplit.config.data import DataConfig
from picsplit.config.logging import LoggingConfig
from picsplit.config.paths import PathsConfig
from picsplit.config.pool import PoolConfig
from picsplit.config.search import SearchConfig


class PicsplitConfig(BaseModel):
    """Complete picsplit configuration.

    Attributes
    ----------
    data : DataConfig
        Input table settings.
    pool : PoolConfig
        Candidate pool settings.
    search : SearchConfig
        Partition search settings.
    paths : PathsConfig
        Output locations.
    logging : LoggingConfig
        Logging settings.

    Examples
    --------
    >>> config = PicsplitConfig()
    >>> config.pool.pool_size
    310
    >>> config.search.iterations
    1000000
    """

    model_config = ConfigDict(extra="forbid")

    data: DataConfig = Field(default_factory=DataConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

