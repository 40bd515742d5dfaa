"""Global configuration shared by the stand-alone and server components.

Configuration is resolved once, in layers of increasing priority:

1. catalog defaults, plus the key store path derived from the home directory
2. values read from ``<home>/oxalis-global.properties`` or a byte stream
3. the transmission builder override policy

and then verified. Afterwards the object is read-only, apart from the
test-only ``set_transmission_builder_override``.
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Mapping, Optional, Type, TypeVar

from ..errors import InvalidNumberFormatError, UnknownEnumValueError
from ..interfaces import OperationalMode, PkiVersion
from .home import HomeDirectoryLocator
from .policy import EnvironmentLookup, OverridePolicy
from .properties import PropertyDef, all_definitions, default_values
from .source import ConfigurationSource
from .validator import Validator

logger = logging.getLogger(__name__)

OXALIS_GLOBAL_PROPERTIES_FILE_NAME = "oxalis-global.properties"
KEYSTORE_FILE_NAME = "oxalis-keystore.jks"

E = TypeVar("E", bound=Enum)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def default_properties(home_directory: Path) -> dict[str, Optional[str]]:
    """Catalog defaults with the home-relative key store path filled in."""
    properties = default_values()
    properties[PropertyDef.KEYSTORE_PATH.key] = str(Path(home_directory) / KEYSTORE_FILE_NAME)
    return properties


class GlobalConfiguration:
    """Typed, validated view over the resolved properties.

    Usage:
        config = GlobalConfiguration.from_home()
        config.jdbc_dialect
        config.connect_timeout

    Reads are safe from any number of threads once construction returns.
    """

    def __init__(
        self,
        home_directory: Path,
        properties: Mapping[str, Optional[str]],
        environment_lookup: Optional[EnvironmentLookup] = None,
    ):
        self._home_directory = Path(home_directory)
        self._properties = dict(properties)
        self._validator = Validator()

        OverridePolicy(environment_lookup).apply(self._properties, self.mode_of_operation)
        self._validator.verify(self._properties)
        self._log_properties()

    @classmethod
    def from_home(
        cls,
        locator: Optional[HomeDirectoryLocator] = None,
        environment_lookup: Optional[EnvironmentLookup] = None,
    ) -> "GlobalConfiguration":
        """Load from the properties file in the located home directory.

        Raises:
            ConfigNotFoundError: If the properties file cannot be opened.
        """
        home_directory = (locator or HomeDirectoryLocator()).locate()
        properties_file = home_directory / OXALIS_GLOBAL_PROPERTIES_FILE_NAME
        properties = ConfigurationSource().load(default_properties(home_directory), properties_file)
        return cls(home_directory, properties, environment_lookup)

    @classmethod
    def from_stream(
        cls,
        home_directory: Path,
        stream: BinaryIO,
        environment_lookup: Optional[EnvironmentLookup] = None,
    ) -> "GlobalConfiguration":
        """Load from configuration bytes the caller already holds."""
        properties = ConfigurationSource().load(default_properties(home_directory), stream)
        return cls(home_directory, properties, environment_lookup)

    @classmethod
    def from_dict(
        cls,
        home_directory: Path,
        values: Mapping[str, Optional[str]],
        environment_lookup: Optional[EnvironmentLookup] = None,
    ) -> "GlobalConfiguration":
        """Layer plain values over the defaults; handy for embedding and tests."""
        properties = default_properties(home_directory)
        properties.update(values)
        return cls(home_directory, properties, environment_lookup)

    @property
    def validator(self) -> Validator:
        return self._validator

    def verify(self) -> None:
        """Re-run required property verification (no-op once passed)."""
        self._validator.verify(self._properties)

    def _log_properties(self) -> None:
        for definition in all_definitions():
            if not definition.hidden:
                logger.info(f"{definition.key} = {self._properties.get(definition.key)}")

    def _value(self, member: PropertyDef) -> Optional[str]:
        return self._properties.get(member.key)

    def _int(self, member: PropertyDef) -> int:
        value = self._value(member)
        if value is None or not _INTEGER.fullmatch(value):
            raise InvalidNumberFormatError(member.key, value)
        return int(value)

    def _enum(self, member: PropertyDef, enum_type: Type[E]) -> E:
        value = self._value(member)
        try:
            return enum_type[value]
        except KeyError:
            raise UnknownEnumValueError(member.key, value, enum_type.__members__) from None

    def get_property(self, key: str) -> Optional[str]:
        """Raw value of any key, including keys outside the catalog."""
        return self._properties.get(key)

    def as_dict(self, include_hidden: bool = False) -> dict[str, Optional[str]]:
        """Catalog properties in catalog order, hidden ones left out by default."""
        return {
            definition.key: self._properties.get(definition.key)
            for definition in all_definitions()
            if include_hidden or not definition.hidden
        }

    @property
    def home_directory(self) -> Path:
        return self._home_directory

    @property
    def jdbc_driver_class_name(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_DRIVER_CLASS)

    @property
    def jdbc_connection_uri(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_URI)

    @property
    def jdbc_username(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_USER)

    @property
    def jdbc_password(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_PASSWORD)

    @property
    def data_source_jndi_name(self) -> Optional[str]:
        return self._value(PropertyDef.JNDI_DATA_SOURCE)

    @property
    def jdbc_driver_class_path(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_DRIVER_CLASS_PATH)

    @property
    def jdbc_dialect(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_DIALECT)

    @property
    def validation_query(self) -> Optional[str]:
        return self._value(PropertyDef.JDBC_VALIDATION_QUERY)

    @property
    def statistics_private_key_path(self) -> Optional[str]:
        """Location of the private key matching the public statistics key."""
        return self._value(PropertyDef.STATISTICS_PRIVATE_KEY_PATH)

    @property
    def key_store_file_name(self) -> Optional[str]:
        return self._value(PropertyDef.KEYSTORE_PATH)

    @property
    def key_store_password(self) -> Optional[str]:
        return self._value(PropertyDef.KEYSTORE_PASSWORD)

    @property
    def trust_store_password(self) -> Optional[str]:
        return self._value(PropertyDef.TRUSTSTORE_PASSWORD)

    @property
    def inbound_message_store(self) -> Optional[str]:
        return self._value(PropertyDef.INBOUND_MESSAGE_STORE)

    @property
    def persistence_class_path(self) -> Optional[str]:
        return self._value(PropertyDef.PERSISTENCE_CLASS_PATH)

    @property
    def inbound_logging_configuration(self) -> Optional[str]:
        return self._value(PropertyDef.INBOUND_LOGGING_CONFIG)

    @property
    def pki_version(self) -> PkiVersion:
        return self._enum(PropertyDef.PKI_VERSION, PkiVersion)

    @property
    def mode_of_operation(self) -> OperationalMode:
        return self._enum(PropertyDef.OPERATION_MODE, OperationalMode)

    @property
    def connect_timeout(self) -> int:
        return self._int(PropertyDef.CONNECTION_TIMEOUT)

    @property
    def read_timeout(self) -> int:
        return self._int(PropertyDef.READ_TIMEOUT)

    @property
    def sml_hostname(self) -> Optional[str]:
        return self._value(PropertyDef.SML_HOSTNAME)

    @property
    def transmission_builder_override(self) -> bool:
        value = self._value(PropertyDef.TRANSMISSION_BUILDER_OVERRIDE)
        return value is not None and value.lower() == "true"

    def set_transmission_builder_override(self, enabled: bool) -> None:
        """Flip the transmission builder override at runtime.

        For unit tests only; never call this in production. Not safe for
        concurrent use, callers must serialize access themselves.
        """
        self._properties[PropertyDef.TRANSMISSION_BUILDER_OVERRIDE.key] = "true" if enabled else "false"
