"""
L5 Orchestration — Update the installer if needed, then verify it.

Sequence::

    query → decide → build parameters → install → re-query → health
                                           ↑                    │
                                           └─ rename, once ─────┘ (unhealthy)

The host is injected so the loop can run against the real filesystem
(``LocalInstallerHost``) or an in-memory fake.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from installer_updater.core.errors import (
    InstallerStillMissingError,
    InstallerUnrepairableError,
)
from installer_updater.core.models.installer import (
    FixedInputs,
    HealthReport,
    InstalledInfo,
    InstallParameters,
)
from installer_updater.core.services.installer_update.domain.package_parameters import (
    build_install_parameters,
    parse_package_parameters,
)
from installer_updater.core.services.installer_update.domain.version_decision import (
    compare_versions,
    decide_update,
)
from installer_updater.core.services.installer_update.execution.backup import backup_name

logger = logging.getLogger(__name__)

# One normal attempt plus one repair attempt
MAX_ATTEMPTS = 2


class InstallerHost(Protocol):
    """Host operations the updater depends on."""

    def query_installed_info(self) -> InstalledInfo | None: ...

    def query_health(self, info: InstalledInfo) -> HealthReport: ...

    def run_install_primitive(self, params: InstallParameters) -> None: ...

    def rename_directory(self, path: Path, new_name: str) -> Path: ...


def install_and_verify(
    params: InstallParameters,
    required_version: str | None,
    host: InstallerHost,
    *,
    debug: bool = False,
) -> InstalledInfo:
    """Run the install primitive and confirm a healthy installation.

    An unhealthy result on the first attempt moves the installation
    directory aside and reinstalls once; an unhealthy result on the
    second attempt is fatal.

    Returns:
        The verified installation.

    Raises:
        InstallerStillMissingError: Nothing installed after the primitive ran.
        InstallerUnrepairableError: Still unhealthy after the repair attempt.
        InstallPrimitiveError: Propagated from the host unchanged.
        RepairError: The broken directory could not be moved aside.
    """
    trace = logger.info if debug else logger.debug

    for attempt in range(1, MAX_ATTEMPTS + 1):
        final = attempt == MAX_ATTEMPTS
        trace("Install attempt %d/%d for %s", attempt, MAX_ATTEMPTS, params.package_name)
        trace("Silent args: %s", params.silent_args)

        host.run_install_primitive(params)

        info = host.query_installed_info()
        if info is None:
            raise InstallerStillMissingError(
                f"{params.package_name}: installer not present after "
                "supposedly successful update"
            )

        _report_version(info, required_version)

        health = host.query_health(info)
        if health.is_healthy:
            trace("Installer at %s passed the health check", info.directory)
            return info

        missing = ", ".join(health.missing_files)
        if final:
            raise InstallerUnrepairableError(
                f"{params.package_name}: installer is still broken even after "
                f"repair attempt (missing: {missing})",
                missing_files=health.missing_files,
            )

        logger.warning(
            "Installer at %s is broken (missing: %s), moving it aside and reinstalling",
            info.directory, missing,
        )
        moved_to = host.rename_directory(info.directory, backup_name(info.directory))
        trace("Broken installation kept at %s", moved_to)

    # MAX_ATTEMPTS >= 1 guarantees a return or raise inside the loop
    raise AssertionError("unreachable")


def update_if_needed(
    package_name: str,
    url: str,
    checksum: str,
    checksum_type: str,
    required_version: str | None,
    force: bool,
    raw_overrides: Mapping[str, str] | str | None,
    host: InstallerHost,
    *,
    debug: bool = False,
) -> InstalledInfo | None:
    """Install or update the installer when the version policy says so.

    ``raw_overrides`` is either an already-parsed mapping or the raw
    package parameter string.

    Returns:
        The verified installation, or None when no update was needed.

    Raises:
        ConfigurationError: Malformed package parameters.
        InstallerUpdateError: Any fatal install failure (see
            :func:`install_and_verify`).
    """
    if raw_overrides is None or isinstance(raw_overrides, str):
        overrides = parse_package_parameters(raw_overrides)
    else:
        overrides = dict(raw_overrides)

    existing = host.query_installed_info()
    should_update = decide_update(existing, required_version, force)

    if not should_update and existing is None:
        logger.warning("Update decision was negative but no installer is present, installing")
        should_update = True

    if not should_update:
        return None

    params = build_install_parameters(
        overrides,
        FixedInputs(
            package_name=package_name,
            url=url,
            checksum=checksum,
            checksum_type=checksum_type,
        ),
    )
    return install_and_verify(params, required_version, host, debug=debug)


def _report_version(info: InstalledInfo, required_version: str | None) -> None:
    if not info.version:
        logger.warning("Unable to determine installer version after update")
        return

    if required_version and compare_versions(info.version, required_version) < 0:
        logger.warning(
            "Installer version %s after update is still below required %s",
            info.version, required_version,
        )
    else:
        logger.info("Installer version after update: %s", info.version)
