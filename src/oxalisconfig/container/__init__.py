"""Wiring of the dialect specific statistics repository."""

from .selector import (
    DEFAULT_DIALECT,
    DIALECT_BINDINGS,
    RepositorySelector,
    Selection,
    create_repository,
)

__all__ = [
    "DEFAULT_DIALECT",
    "DIALECT_BINDINGS",
    "RepositorySelector",
    "Selection",
    "create_repository",
]
