"""
Configuration loader — reads installer.yml into UpdaterSettings.

Reads YAML, validates against the Pydantic schema, and returns a typed
settings object. A missing file is only an error when it was asked for
explicitly; otherwise the defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from installer_updater.core.errors import ConfigurationError
from installer_updater.core.models.settings import UpdaterSettings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "installer.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for installer.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to installer.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> UpdaterSettings:
    """Load and validate updater configuration.

    Args:
        path: Explicit path to installer.yml. If None, searches upward and
            falls back to defaults when nothing is found.
        overrides: Values that win over the file (CLI options). ``None``
            values are ignored.

    Returns:
        Validated UpdaterSettings.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    data: dict[str, Any] = {}

    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
    elif not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    if path is not None:
        data = _read_yaml(path)

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        settings = UpdaterSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid installer configuration: {e}") from e

    logger.info(
        "Loaded settings for '%s' (install dir %s)",
        settings.package_name, settings.install_dir,
    )
    return settings


def _read_yaml(path: Path) -> dict[str, Any]:
    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )

    # The YAML may wrap everything under an "installer" key or be flat
    if isinstance(data.get("installer"), dict):
        return dict(data["installer"])
    return data
