"""oxalis-config: runtime configuration for an Oxalis access point.

Resolves and verifies oxalis-global.properties, and selects the raw
statistics repository for the configured JDBC dialect.
"""

from .config import GlobalConfiguration, HomeDirectoryLocator
from .container import RepositorySelector, create_repository
from .errors import (
    ConfigCloseError,
    ConfigError,
    ConfigNotFoundError,
    ConfigReadError,
    InvalidNumberFormatError,
    MissingRequiredPropertyError,
    UnknownEnumValueError,
    UnknownPropertyError,
)
from .interfaces import OperationalMode, PkiVersion

__version__ = "0.1.0"

__all__ = [
    "GlobalConfiguration",
    "HomeDirectoryLocator",
    "RepositorySelector",
    "create_repository",
    "ConfigCloseError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigReadError",
    "InvalidNumberFormatError",
    "MissingRequiredPropertyError",
    "UnknownEnumValueError",
    "UnknownPropertyError",
    "OperationalMode",
    "PkiVersion",
]
