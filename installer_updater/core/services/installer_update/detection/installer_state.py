"""
L3 Detection — Installer presence, version and health.

Read-only probes against the installation directory.  Nothing here
raises for a broken or half-written installation: an unreadable version
file means "version unknown" and missing files end up in the report.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from installer_updater.core.models.installer import HealthReport, InstalledInfo

logger = logging.getLogger(__name__)

# Lookup order inside the version file
_VERSION_KEYS: tuple[tuple[str, ...], ...] = (("info", "version"), ("version",))


def query_installed_info(
    install_dir: Path,
    installer_exe: str = "vs_installer.exe",
    version_file: str = "vs_installer.version.json",
) -> InstalledInfo | None:
    """Return the current installation, or None when the executable is absent."""
    exe_path = install_dir / installer_exe
    if not exe_path.is_file():
        logger.debug("Installer executable not found at %s", exe_path)
        return None

    version = read_installer_version(install_dir / version_file)
    logger.debug("Found installer at %s (version %s)", exe_path, version or "unknown")
    return InstalledInfo(path=exe_path, version=version)


def read_installer_version(version_path: Path) -> str | None:
    """Read the installer version from its JSON version file.

    Returns:
        The version string, or None if the file is missing, not JSON,
        or holds no recognisable version key.
    """
    if not version_path.is_file():
        return None

    try:
        data = json.loads(version_path.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError):
        logger.debug("Unable to parse installer version file %s", version_path, exc_info=True)
        return None

    for keys in _VERSION_KEYS:
        node = data
        for key in keys:
            node = node.get(key) if isinstance(node, dict) else None
        if isinstance(node, (str, int, float)) and str(node).strip():
            return str(node).strip()

    return None


def query_health(info: InstalledInfo, expected_files: list[str]) -> HealthReport:
    """Check that every expected file exists under the installation directory.

    Missing files are reported in the order they were configured.
    """
    root = info.directory
    missing = [rel for rel in expected_files if not (root / rel).exists()]
    if missing:
        logger.debug("Installer at %s is missing %d file(s)", root, len(missing))
    return HealthReport.from_missing(missing)
