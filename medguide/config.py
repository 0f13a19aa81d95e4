"""
MedGuide Configuration

Settings come from environment variables, optionally from a .env file in
the working directory. Everything has a working default.

    MEDGUIDE_STORAGE_PATH   storage file (default ~/.medguide/storage.json)
    MEDGUIDE_FDA_BASE_URL   OpenFDA drug event endpoint
    MEDGUIDE_FDA_TIMEOUT    request timeout in seconds (default 10)
    MEDGUIDE_LOG_LEVEL      logging level name (default INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from medguide.lookup.fda_client import OpenFDAClient
from medguide.memory.storage import JsonFileStorage

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    storage_path: Path = JsonFileStorage.DEFAULT_STORAGE_DIR / JsonFileStorage.DEFAULT_STORAGE_FILE
    fda_base_url: str = OpenFDAClient.DEFAULT_BASE_URL
    fda_timeout: float = OpenFDAClient.DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from environment variables.

        Invalid numeric values fall back to the default with a warning.
        """
        if environ is None:
            environ = os.environ

        settings = cls()

        if environ.get("MEDGUIDE_STORAGE_PATH"):
            settings.storage_path = Path(environ["MEDGUIDE_STORAGE_PATH"]).expanduser()

        if environ.get("MEDGUIDE_FDA_BASE_URL"):
            settings.fda_base_url = environ["MEDGUIDE_FDA_BASE_URL"]

        if environ.get("MEDGUIDE_FDA_TIMEOUT"):
            try:
                settings.fda_timeout = float(environ["MEDGUIDE_FDA_TIMEOUT"])
            except ValueError:
                logger.warning(
                    f"Ignoring invalid MEDGUIDE_FDA_TIMEOUT={environ['MEDGUIDE_FDA_TIMEOUT']!r}"
                )

        if environ.get("MEDGUIDE_LOG_LEVEL"):
            settings.log_level = environ["MEDGUIDE_LOG_LEVEL"].upper()

        return settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load .env (if present) into the environment, then read settings"""
    if env_file is None:
        env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug(f"Loaded environment from {env_file}")
    return Settings.from_env()
