"""Errors raised while loading, validating and reading configuration.

Every error here is fatal: configuration is a startup gate and nothing
is retried.
"""

from typing import Iterable, Optional


class ConfigError(Exception):
    """Base class for all configuration errors."""


class ConfigNotFoundError(ConfigError):
    """The configuration file is missing, not a regular file or unreadable."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Unable to locate the global configuration file: {path}")


class ConfigReadError(ConfigError):
    """The configuration bytes could not be read or decoded."""


class ConfigCloseError(ConfigError):
    """A handle opened while loading could not be released."""


class MissingRequiredPropertyError(ConfigError):
    """A required property resolved to no value."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Property {key} is required, please inspect your config file")


class InvalidNumberFormatError(ConfigError):
    """An integer property holds a value that is not an integer."""

    def __init__(self, key: str, value: Optional[str]):
        self.key = key
        self.value = value
        super().__init__(f"Property {key} must be an integer, got {value!r}")


class UnknownEnumValueError(ConfigError):
    """An enumerated property holds a value outside its closed set."""

    def __init__(self, key: str, value: Optional[str], allowed: Iterable[str]):
        self.key = key
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Property {key} has unknown value {value!r}, "
            f"expected one of: {', '.join(self.allowed)}"
        )


class UnknownPropertyError(ConfigError):
    """Lookup of a key that is not part of the property catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown configuration property: {key}")
