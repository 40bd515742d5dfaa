"""Post-load override applied before validation."""

import logging
import os
from typing import Callable, MutableMapping, Optional

from ..interfaces import OperationalMode
from .properties import PropertyDef

logger = logging.getLogger(__name__)

TRANSMISSION_BUILDER_OVERRIDE_VAR_NAME = "oxalis.transmissionbuilder.override"

EnvironmentLookup = Callable[[str], Optional[str]]


class OverridePolicy:
    """Force-enables the transmission builder override when it is allowed.

    The flag is switched on when running in TEST mode, or when the
    environment variable ``oxalis.transmissionbuilder.override`` is set to
    "true" in any letter case. Nothing else is ever modified.
    """

    def __init__(self, environment_lookup: Optional[EnvironmentLookup] = None):
        self._lookup = environment_lookup or os.environ.get

    def apply(
        self,
        properties: MutableMapping[str, Optional[str]],
        mode: OperationalMode,
    ) -> bool:
        """Apply the override in place.

        Returns:
            True if the flag was forced on.
        """
        from_env = self._lookup(TRANSMISSION_BUILDER_OVERRIDE_VAR_NAME)
        env_enabled = from_env is not None and from_env.lower() == "true"

        if mode is not OperationalMode.TEST and not env_enabled:
            return False

        logger.warning(
            f"Running with transmissionBuilderOverride enabled since environment variable "
            f"{TRANSMISSION_BUILDER_OVERRIDE_VAR_NAME}=TRUE or mode=TEST. "
            f"This is unsafe in production."
        )
        properties[PropertyDef.TRANSMISSION_BUILDER_OVERRIDE.key] = "true"
        return True
