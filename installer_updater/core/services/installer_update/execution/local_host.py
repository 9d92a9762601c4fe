"""
L4 Execution — Filesystem-backed installer host.

Binds detection and execution to one configured installation so the
orchestrator only sees the four host operations.
"""

from __future__ import annotations

from pathlib import Path

from installer_updater.core.models.installer import (
    HealthReport,
    InstalledInfo,
    InstallParameters,
)
from installer_updater.core.models.settings import UpdaterSettings
from installer_updater.core.services.installer_update.detection.installer_state import (
    query_health,
    query_installed_info,
)
from installer_updater.core.services.installer_update.execution.backup import rename_directory
from installer_updater.core.services.installer_update.execution.install_primitive import (
    run_install_primitive,
)


class LocalInstallerHost:
    """The real host: local directories, downloads and processes."""

    def __init__(self, settings: UpdaterSettings):
        self.settings = settings

    def query_installed_info(self) -> InstalledInfo | None:
        return query_installed_info(
            self.settings.install_dir,
            installer_exe=self.settings.installer_exe,
            version_file=self.settings.version_file,
        )

    def query_health(self, info: InstalledInfo) -> HealthReport:
        return query_health(info, self.settings.expected_files)

    def run_install_primitive(self, params: InstallParameters) -> None:
        run_install_primitive(
            params,
            download_dir=self.settings.download_dir,
            timeout=self.settings.timeout,
            valid_exit_codes=self.settings.valid_exit_codes,
        )

    def rename_directory(self, path: Path, new_name: str) -> Path:
        return rename_directory(path, new_name)
