"""
Environment loading for hostwatch.

Reads .env files with python-dotenv before any configuration is resolved, so
WA_SENDER / WA_DESTINATION / IB_API_KEY and the HOSTWATCH_* overrides can
live in a file instead of the shell. Variables already set in the process
environment are never overridden.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def get_env_file_locations() -> list[Path]:
    """Candidate .env files, highest priority first."""
    return [
        Path.cwd() / ".env",
        Path.home() / ".hostwatch" / ".env",
    ]


def load_env(override: bool = False) -> list[Path]:
    """
    Load every existing .env file from get_env_file_locations().

    Earlier files win because load_dotenv does not override values that are
    already set, unless override is True.

    Returns:
        The files that were loaded
    """
    loaded = []
    for env_file in get_env_file_locations():
        if env_file.is_file():
            load_dotenv(env_file, override=override)
            loaded.append(env_file)
            logger.debug(f"Loaded environment from {env_file}")
    return loaded
