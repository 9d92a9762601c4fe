"""
L4 Execution — The install primitive.

Gets the bootstrapper (explicit local file, or download + checksum) and
runs it silently.  Every failure surfaces as ``InstallPrimitiveError``.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path

from installer_updater.core.errors import InstallPrimitiveError
from installer_updater.core.models.installer import InstallParameters
from installer_updater.core.models.settings import DEFAULT_VALID_EXIT_CODES
from installer_updater.core.services.installer_update.execution.download import (
    download_file,
    verify_checksum,
)
from installer_updater.core.services.installer_update.execution.subprocess_runner import (
    _run_subprocess,
)

logger = logging.getLogger(__name__)

REBOOT_EXIT_CODES = frozenset({1641, 3010})


def resolve_bootstrapper(
    params: InstallParameters,
    download_dir: Path | None = None,
    *,
    timeout: int = 300,
) -> Path:
    """Return a verified local bootstrapper for ``params``.

    An explicit ``installer_file_path`` is used as-is (no checksum, the
    user vouches for it); otherwise ``params.url`` is downloaded into
    ``download_dir`` and checked against ``params.checksum``.
    """
    if params.installer_file_path is not None:
        path = Path(params.installer_file_path)
        if not path.is_file():
            raise InstallPrimitiveError(f"Bootstrapper not found: {path}")
        logger.info("Using local bootstrapper %s", path)
        return path

    if not params.url:
        raise InstallPrimitiveError(
            f"No bootstrapper URL configured for {params.package_name}"
        )

    base = download_dir or Path(tempfile.gettempdir()) / params.package_name
    dest = base / f"{params.package_name}_bootstrapper.exe"
    download_file(params.url, dest, timeout=timeout)
    verify_checksum(dest, params.checksum, params.checksum_type)
    return dest


def run_install_primitive(
    params: InstallParameters,
    *,
    download_dir: Path | None = None,
    timeout: int = 1800,
    valid_exit_codes: list[int] | None = None,
) -> int:
    """Fetch and run the bootstrapper with ``params.silent_args``.

    Returns:
        The bootstrapper's exit code (always one of ``valid_exit_codes``).

    Raises:
        InstallPrimitiveError: Download, checksum, start-up, timeout or
            an exit code outside ``valid_exit_codes``.
    """
    valid = set(valid_exit_codes if valid_exit_codes is not None else DEFAULT_VALID_EXIT_CODES)
    exe = resolve_bootstrapper(params, download_dir)

    logger.info("Running %s bootstrapper", params.package_name)
    result = _run_subprocess(_bootstrapper_command(exe, params.silent_args), timeout=timeout)
    if not result["ok"]:
        raise InstallPrimitiveError(
            f"{params.package_name} bootstrapper failed: {result['error']}"
        )

    if params.log_file_path is not None:
        _append_log(Path(params.log_file_path), result)

    code = result["returncode"]
    if code not in valid:
        detail = (result.get("stderr") or result.get("stdout") or "").strip()
        message = f"{params.package_name} bootstrapper exited with code {code}"
        if detail:
            message += f": {detail.splitlines()[-1]}"
        raise InstallPrimitiveError(message)

    if code in REBOOT_EXIT_CODES and params.is_2017_installer:
        logger.warning(
            "%s bootstrapper finished with exit code %d: a reboot is required",
            params.package_name, code,
        )
    else:
        logger.info("%s bootstrapper finished (exit code %d)", params.package_name, code)
    return code


def _bootstrapper_command(exe: Path, silent_args: str) -> list[str] | str:
    # Windows bootstrappers parse their own command line, pass it through untouched
    if os.name == "nt":
        return f"{subprocess.list2cmdline([str(exe)])} {silent_args}"
    return [str(exe), *shlex.split(silent_args)]


def _append_log(log_path: Path, result: dict) -> None:
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "a", encoding="utf-8") as fh:
            fh.write(result.get("stdout", ""))
            fh.write(result.get("stderr", ""))
    except OSError as e:
        raise InstallPrimitiveError(f"Could not write bootstrapper log to {log_path}: {e}") from e
