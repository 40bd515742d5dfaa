"""Dialect keyed selection of the raw statistics repository."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from ..statistics.base import ConnectionFactory, RawStatisticsRepository
from ..statistics.sql import (
    HSqlRawStatisticsRepository,
    MsSqlRawStatisticsRepository,
    MySqlRawStatisticsRepository,
    OracleRawStatisticsRepository,
)

if TYPE_CHECKING:
    from ..config.global_config import GlobalConfiguration

logger = logging.getLogger(__name__)

H2 = "H2"
MYSQL = "MySQL"
MSSQL = "MsSql"
ORACLE = "Oracle"
HSQLDB = "HSqlDB"

RepositoryFactory = Callable[[ConnectionFactory], RawStatisticsRepository]

# H2 is served by the SQL Server implementation
DIALECT_BINDINGS: Mapping[str, RepositoryFactory] = MappingProxyType({
    H2: MsSqlRawStatisticsRepository,
    MYSQL: MySqlRawStatisticsRepository,
    MSSQL: MsSqlRawStatisticsRepository,
    ORACLE: OracleRawStatisticsRepository,
    HSQLDB: HSqlRawStatisticsRepository,
})

DEFAULT_DIALECT = MYSQL


def _describe(factory: RepositoryFactory) -> str:
    return getattr(factory, "__name__", repr(factory))


@dataclass(frozen=True)
class Selection:
    """Outcome of a lookup.

    Attributes:
        requested: Dialect key as configured
        dialect: Key of the binding actually used
        factory: Repository factory for that binding
        fallback: True when the requested key had no binding
    """
    requested: Optional[str]
    dialect: str
    factory: RepositoryFactory
    fallback: bool

    def describe(self) -> str:
        return _describe(self.factory)


class RepositorySelector:
    """Maps a configured dialect name to a repository factory.

    The table is fixed at construction. Unknown dialects never fail: they
    fall back to the default binding, and the fallback is logged so a
    misconfiguration is visible to operators.
    """

    def __init__(
        self,
        bindings: Optional[Mapping[str, RepositoryFactory]] = None,
        default_dialect: str = DEFAULT_DIALECT,
    ):
        table = dict(DIALECT_BINDINGS if bindings is None else bindings)
        if default_dialect not in table:
            raise ValueError(f"Default dialect {default_dialect!r} has no binding")
        self._bindings: Mapping[str, RepositoryFactory] = MappingProxyType(table)
        self._default_dialect = default_dialect

    @property
    def bindings(self) -> Mapping[str, RepositoryFactory]:
        return self._bindings

    @property
    def default_dialect(self) -> str:
        return self._default_dialect

    def select(self, dialect: Optional[str]) -> Selection:
        key = (dialect or "").strip()
        factory = self._bindings.get(key)
        if factory is not None:
            logger.info(f"Using {_describe(factory)} for dialect {key}")
            return Selection(dialect, key, factory, fallback=False)

        factory = self._bindings[self._default_dialect]
        logger.warning(
            f"No repository bound for dialect {dialect!r}, "
            f"falling back to {_describe(factory)} ({self._default_dialect})"
        )
        return Selection(dialect, self._default_dialect, factory, fallback=True)

    def resolve(self, dialect: Optional[str]) -> RepositoryFactory:
        """Return the factory bound to dialect, or the default factory."""
        return self.select(dialect).factory


def create_repository(
    config: "GlobalConfiguration",
    connection_factory: ConnectionFactory,
    selector: Optional[RepositorySelector] = None,
) -> RawStatisticsRepository:
    """Build the repository matching the configured JDBC dialect.

    Args:
        config: GlobalConfiguration, only ``jdbc_dialect`` is read
        connection_factory: Source of DB-API connections for the repository
        selector: Custom selector, defaults to the standard bindings
    """
    factory = (selector or RepositorySelector()).resolve(config.jdbc_dialect)
    return factory(connection_factory)
