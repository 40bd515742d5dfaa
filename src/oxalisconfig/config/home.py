"""Locates the Oxalis home directory."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

OXALIS_HOME_VAR_NAME = "OXALIS_HOME"
OXALIS_HOME_DIR_NAME = ".oxalis"


class HomeDirectoryLocator:
    """Works out which directory holds the global properties file.

    Resolution order, first hit wins:
        1. An explicit override passed to the constructor
        2. The OXALIS_HOME environment variable
        3. ~/.oxalis for the current user
        4. <tempdir>/oxalis as a process-wide fallback

    Relative paths are made absolute against the current directory at
    lookup time. The directory is only reported, never created or checked.
    A missing directory surfaces later when the properties file is opened.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        override: Optional[str | Path] = None,
    ):
        self._environ = os.environ if environ is None else environ
        self._override = override

    def locate(self) -> Path:
        if self._override is not None:
            return self._chosen(Path(self._override).expanduser().absolute(), "explicit override")

        from_env = (self._environ.get(OXALIS_HOME_VAR_NAME) or "").strip()
        if from_env:
            return self._chosen(Path(from_env).expanduser().absolute(), f"${OXALIS_HOME_VAR_NAME}")

        try:
            user_home = Path.home()
        except (RuntimeError, KeyError):
            # No HOME and no passwd entry
            user_home = None
        if user_home is not None and str(user_home) != "~":
            return self._chosen(user_home / OXALIS_HOME_DIR_NAME, "user home")

        return self._chosen(Path(tempfile.gettempdir()) / "oxalis", "process fallback")

    def _chosen(self, path: Path, rule: str) -> Path:
        logger.info(f"Oxalis home directory: {path} (from {rule})")
        return path
