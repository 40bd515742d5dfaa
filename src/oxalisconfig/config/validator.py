"""One-shot check that every required property has a value."""

import logging
import threading
from typing import Mapping, Optional

from ..errors import MissingRequiredPropertyError
from .properties import all_definitions

logger = logging.getLogger(__name__)


class Validator:
    """Verifies required properties exactly once.

    The first failing property in catalog order is reported; the
    remaining ones are not checked. Once a verification has passed,
    later calls return immediately, even if the mapping was changed in
    the meantime.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._verified = False
        self.scan_count = 0

    @property
    def verified(self) -> bool:
        return self._verified

    def verify(self, properties: Mapping[str, Optional[str]]) -> None:
        """Raise MissingRequiredPropertyError on the first missing required key."""
        if self._verified:
            return

        with self._lock:
            if self._verified:
                return

            logger.info("Verifying properties ....")
            self.scan_count += 1
            for definition in all_definitions():
                if definition.required and properties.get(definition.key) is None:
                    raise MissingRequiredPropertyError(definition.key)
            self._verified = True
