"""Closed catalog of every known configuration property."""

import os
import tempfile
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from ..errors import UnknownPropertyError


@dataclass(frozen=True)
class PropertyDefinition:
    """A single configuration property.

    Attributes:
        key: Name of the property in the properties file
        default_value: Value used when the file does not set it. None means
            the property has no value at all, which differs from ""
        required: Whether the property must resolve to a value
        hidden: Whether the value must be kept out of logs and dumps
    """
    key: str
    default_value: Optional[str] = None
    required: bool = False
    hidden: bool = False


@unique
class PropertyDef(Enum):
    """All runtime configurable properties, in logging order."""
    JDBC_DRIVER_CLASS = PropertyDefinition("oxalis.jdbc.driver.class", required=True)
    JDBC_URI = PropertyDefinition("oxalis.jdbc.connection.uri", required=True)
    JDBC_USER = PropertyDefinition("oxalis.jdbc.user", required=True)
    JDBC_PASSWORD = PropertyDefinition("oxalis.jdbc.password", required=True, hidden=True)
    JNDI_DATA_SOURCE = PropertyDefinition("oxalis.datasource.jndi.name", "jdbc/oxalis")
    JDBC_DRIVER_CLASS_PATH = PropertyDefinition("oxalis.jdbc.class.path")
    JDBC_DIALECT = PropertyDefinition("oxalis.jdbc.dialect", "MySQL")
    JDBC_VALIDATION_QUERY = PropertyDefinition("oxalis.jdbc.validation.query", "select 1")
    STATISTICS_PRIVATE_KEY_PATH = PropertyDefinition("oxalis.statistics.private.key")
    # Default derived from the home directory, see GlobalConfiguration
    KEYSTORE_PATH = PropertyDefinition("oxalis.keystore")
    KEYSTORE_PASSWORD = PropertyDefinition("oxalis.keystore.password", required=True, hidden=True)
    TRUSTSTORE_PASSWORD = PropertyDefinition("oxalis.truststore.password", "changeit", hidden=True)
    INBOUND_MESSAGE_STORE = PropertyDefinition(
        "oxalis.inbound.message.store",
        os.path.join(tempfile.gettempdir(), "inbound"),
    )
    PERSISTENCE_CLASS_PATH = PropertyDefinition("oxalis.persistence.class.path")
    INBOUND_LOGGING_CONFIG = PropertyDefinition("oxalis.inbound.log.config", "logback-oxalis-server.xml")
    PKI_VERSION = PropertyDefinition("oxalis.pki.version", "V2")
    OPERATION_MODE = PropertyDefinition("oxalis.operation.mode", "PRODUCTION")
    CONNECTION_TIMEOUT = PropertyDefinition("oxalis.connection.timeout", "5000")
    READ_TIMEOUT = PropertyDefinition("oxalis.read.timeout", "5000")
    SML_HOSTNAME = PropertyDefinition("oxalis.sml.hostname", "")
    TRANSMISSION_BUILDER_OVERRIDE = PropertyDefinition("oxalis.transmissionbuilder.override", "false")

    @property
    def key(self) -> str:
        return self.value.key

    @property
    def definition(self) -> PropertyDefinition:
        return self.value


_BY_KEY: dict[str, PropertyDefinition] = {}
for _member in PropertyDef.__members__.values():
    _definition = _member.definition
    if _definition.key in _BY_KEY:
        raise RuntimeError(f"Duplicate property key in catalog: {_definition.key}")
    if _definition.required and _definition.default_value is not None:
        raise RuntimeError(f"Required property {_definition.key} must not carry a default value")
    _BY_KEY[_definition.key] = _definition


def definition_for(key: str) -> PropertyDefinition:
    """Look up the definition of a property.

    Raises:
        UnknownPropertyError: If the key is not part of the catalog.
    """
    try:
        return _BY_KEY[key]
    except KeyError:
        raise UnknownPropertyError(key) from None


def all_definitions() -> tuple[PropertyDefinition, ...]:
    """Return every definition in declaration order."""
    return tuple(member.definition for member in PropertyDef)


def default_values() -> dict[str, Optional[str]]:
    """Return a fresh key -> default mapping covering the whole catalog."""
    return {definition.key: definition.default_value for definition in all_definitions()}
