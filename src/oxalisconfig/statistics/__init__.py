"""Raw statistics repositories.

One implementation per supported SQL dialect, all satisfying
RawStatisticsRepository. Which one is used is decided by
oxalisconfig.container.RepositorySelector.
"""

from .base import ConnectionFactory, RawStatisticsRepository, StatisticsTransformer
from .sql import (
    HSqlRawStatisticsRepository,
    MsSqlRawStatisticsRepository,
    MySqlRawStatisticsRepository,
    OracleRawStatisticsRepository,
)

__all__ = [
    "ConnectionFactory",
    "RawStatisticsRepository",
    "StatisticsTransformer",
    "HSqlRawStatisticsRepository",
    "MsSqlRawStatisticsRepository",
    "MySqlRawStatisticsRepository",
    "OracleRawStatisticsRepository",
]
