"""Environment variable loading from .env files with precedence support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Recognised variables (all optional; settings fall back to pngstrip.toml, then defaults)
ENVIRONMENT_VARIABLES = {
    "PNGSTRIP_CONFIG": "Custom configuration file path (defaults to pngstrip.toml)",
    "PNGSTRIP_WORKERS": "Number of parallel workers",
    "PNGSTRIP_QUEUE_CAPACITY": "Capacity of the bounded work queue",
    "PNGSTRIP_VERIFY_CHECKSUMS": "Re-verify retained chunk checksums before writing (true/false)",
    "PNGSTRIP_STRICT_SIGNATURE": "Reject a signature with either the marker or the PNG name wrong (true/false)",
    "PNGSTRIP_ENCODER": "Path or name of the lossless encoder executable",
}


def load_environment_variables(dotenv_path: Path | str | None = None) -> None:
    """
    Load environment variables from .env file with automatic detection.

    Environment variables from system environment take precedence over .env file values.
    This function uses python-dotenv's load_dotenv() which respects existing environment
    variables by default (override=False).

    Args:
        dotenv_path: Optional path to .env file. If None, searches for .env file in:
                     - Current working directory
                     - Parent directories (up to 3 levels)
    """
    if dotenv_path is None:
        current = Path.cwd()
        search_paths = [
            current / ".env",
            current.parent / ".env",
            current.parent.parent / ".env",
            current.parent.parent.parent / ".env",
        ]

        for path in search_paths:
            if path.exists():
                dotenv_path = path
                logger.debug(f"Loading .env file from: {path}")
                break

        if dotenv_path is None:
            load_dotenv(override=False)
            return

    dotenv_path = Path(dotenv_path)
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)
        logger.debug(f"Loaded .env file from: {dotenv_path}")
    else:
        logger.debug(f".env file not found at: {dotenv_path}")


def get_env(key: str, default: str | None = None) -> str | None:
    """
    Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Get boolean environment variable.

    Accepts: 'true', '1', 'yes', 'on' (case-insensitive) → True
            'false', '0', 'no', 'off' (case-insensitive) → False
    Unset or empty variables and unrecognised values yield ``default``.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        Boolean value
    """
    value = os.getenv(key, "").lower().strip()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def get_env_int(key: str) -> int | None:
    """
    Get integer environment variable.

    Returns:
        Parsed value, or None when the variable is unset or empty

    Raises:
        ValueError: If the variable is set to something that is not an integer
    """
    value = os.getenv(key, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got '{value}'") from None


def get_environment_overrides() -> dict[str, dict[str, Any]]:
    """
    Collect settings overrides from PNGSTRIP_* variables.

    Returns:
        Nested dict shaped like pngstrip.toml sections, containing only
        the keys whose variables are set
    """
    overrides: dict[str, dict[str, Any]] = {}

    workers = get_env_int("PNGSTRIP_WORKERS")
    if workers is not None:
        overrides.setdefault("pipeline", {})["workers"] = workers

    capacity = get_env_int("PNGSTRIP_QUEUE_CAPACITY")
    if capacity is not None:
        overrides.setdefault("pipeline", {})["queue_capacity"] = capacity

    if get_env("PNGSTRIP_VERIFY_CHECKSUMS"):
        overrides.setdefault("strip", {})["verify_checksums"] = get_env_bool("PNGSTRIP_VERIFY_CHECKSUMS")

    if get_env("PNGSTRIP_STRICT_SIGNATURE"):
        overrides.setdefault("strip", {})["strict_signature"] = get_env_bool("PNGSTRIP_STRICT_SIGNATURE")

    encoder = get_env("PNGSTRIP_ENCODER")
    if encoder:
        overrides.setdefault("encoder", {})["executable"] = encoder

    return overrides
