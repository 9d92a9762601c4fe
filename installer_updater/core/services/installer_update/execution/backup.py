"""
L4 Execution — Moving a broken installation aside.

The repair attempt renames the installation directory to a timestamped
sibling (``Installer.backup-20261019143000``) before reinstalling.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from installer_updater.core.errors import RepairError

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def backup_name(directory: Path, now: time.struct_time | None = None) -> str:
    """Return ``<dir-name>.backup-<yyyyMMddHHmmss>`` for ``directory``."""
    ts = time.strftime(BACKUP_TIMESTAMP_FORMAT, now or time.localtime())
    return f"{directory.name}.backup-{ts}"


def rename_directory(path: Path, new_name: str) -> Path:
    """Rename ``path`` to a sibling called ``new_name``.

    Returns:
        The new path.

    Raises:
        RepairError: If the target exists or the rename fails.
    """
    target = path.with_name(new_name)
    if target.exists():
        raise RepairError(f"Cannot move {path} aside: {target} already exists")

    try:
        path.rename(target)
    except OSError as e:
        raise RepairError(f"Cannot rename {path} to {new_name}: {e}") from e

    logger.info("Moved %s → %s", path, target)
    return target
