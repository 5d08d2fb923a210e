"""Runtime configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .constants import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL, ENV_STRICT_FLAGS

# Load environment variables from .env file
load_dotenv()

TRUTHY_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Filtering settings.

    Attributes:
        strict_flags: Reject unknown symbolic flag names instead of ignoring them
        log_level: Logging level name used by the server entry point
    """

    strict_flags: bool = False
    log_level: str = DEFAULT_LOG_LEVEL


def get_settings() -> Settings:
    """Read settings from the current environment.

    The environment is read on every call so tests can patch it.
    """
    strict = os.getenv(ENV_STRICT_FLAGS, "").strip().lower() in TRUTHY_VALUES
    log_level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    return Settings(strict_flags=strict, log_level=log_level)
