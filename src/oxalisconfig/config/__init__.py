"""Configuration resolution for the access point.

Resolves properties from:
- The closed property catalog (defaults)
- oxalis-global.properties in the Oxalis home directory, or a byte stream
- The transmission builder override policy

All required properties are verified once at load time.
"""

from .global_config import GlobalConfiguration, OXALIS_GLOBAL_PROPERTIES_FILE_NAME
from .home import HomeDirectoryLocator
from .policy import OverridePolicy
from .properties import PropertyDef, PropertyDefinition, all_definitions, default_values, definition_for
from .source import ConfigurationSource, parse_properties
from .validator import Validator

__all__ = [
    "GlobalConfiguration",
    "OXALIS_GLOBAL_PROPERTIES_FILE_NAME",
    "HomeDirectoryLocator",
    "OverridePolicy",
    "PropertyDef",
    "PropertyDefinition",
    "all_definitions",
    "default_values",
    "definition_for",
    "ConfigurationSource",
    "parse_properties",
    "Validator",
]
