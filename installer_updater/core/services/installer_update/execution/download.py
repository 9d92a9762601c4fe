"""
L4 Execution — Bootstrapper download and checksum verification.
"""

from __future__ import annotations

import hashlib
import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path

from installer_updater.core.errors import InstallPrimitiveError

logger = logging.getLogger(__name__)

_USER_AGENT = "installer-updater/1.0"
_CHUNK = 64 * 1024


def download_file(url: str, dest: Path, *, timeout: int = 300) -> Path:
    """Download ``url`` to ``dest``, replacing any previous file.

    The body is streamed into ``<dest>.part`` and renamed on completion so
    an interrupted download never leaves a truncated bootstrapper behind.

    Raises:
        InstallPrimitiveError: On any network or filesystem failure.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    partial = dest.with_name(dest.name + ".part")

    logger.info("Downloading %s", url)
    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp, open(partial, "wb") as out:
            shutil.copyfileobj(resp, out, _CHUNK)
        partial.replace(dest)
    except (urllib.error.URLError, OSError, ValueError) as e:
        partial.unlink(missing_ok=True)
        raise InstallPrimitiveError(f"Failed to download {url}: {e}") from e

    logger.debug("Saved %s (%d bytes)", dest, dest.stat().st_size)
    return dest


def file_digest(path: Path, algorithm: str) -> str:
    """Return the hex digest of ``path`` using ``algorithm`` (sha256, sha1, md5, ...)."""
    try:
        h = hashlib.new(algorithm)
    except ValueError as e:
        raise InstallPrimitiveError(f"Unsupported checksum type '{algorithm}'") from e
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_checksum(path: Path, checksum: str, checksum_type: str = "sha256") -> None:
    """Verify ``path`` against ``checksum``.

    An empty checksum skips verification with a warning.

    Raises:
        InstallPrimitiveError: On mismatch or unknown algorithm.
    """
    if not checksum:
        logger.warning("No checksum configured for %s, skipping verification", path.name)
        return

    actual = file_digest(path, checksum_type.lower())
    if actual.lower() != checksum.strip().lower():
        raise InstallPrimitiveError(
            f"Checksum mismatch for {path.name}: expected {checksum_type} "
            f"{checksum.strip().lower()}, got {actual}"
        )
    logger.debug("%s checksum OK for %s", checksum_type, path.name)
