"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from installer_updater.core.models import HealthReport, InstalledInfo, InstallParameters
from installer_updater.core.models.settings import UpdaterSettings


class FakeInstallerHost:
    """In-memory installer host that records every call.

    ``installed`` is what queries return before the first install;
    ``after_install`` is consumed one entry per primitive run, and
    ``health`` one report per health check.
    """

    def __init__(
        self,
        installed: InstalledInfo | None = None,
        after_install: list[InstalledInfo | None] | None = None,
        health: list[HealthReport] | None = None,
    ):
        self.installed = installed
        self._after_install = list(after_install or [])
        self._health = list(health or [])
        self.primitive_calls: list[InstallParameters] = []
        self.health_calls: list[InstalledInfo] = []
        self.renames: list[tuple[Path, str]] = []

    def query_installed_info(self) -> InstalledInfo | None:
        return self.installed

    def query_health(self, info: InstalledInfo) -> HealthReport:
        self.health_calls.append(info)
        return self._health.pop(0) if self._health else HealthReport()

    def run_install_primitive(self, params: InstallParameters) -> None:
        self.primitive_calls.append(params)
        if self._after_install:
            self.installed = self._after_install.pop(0)

    def rename_directory(self, path: Path, new_name: str) -> Path:
        self.renames.append((path, new_name))
        return path.with_name(new_name)


@pytest.fixture
def fake_host_factory():
    """Build FakeInstallerHost instances."""
    return FakeInstallerHost


@pytest.fixture
def installer_info() -> InstalledInfo:
    return InstalledInfo(
        path=Path("/opt/Microsoft Visual Studio/Installer/vs_installer.exe"),
        version="3.8.2000",
    )


@pytest.fixture
def make_installation(tmp_path: Path):
    """Create an installer directory under tmp_path.

    Call with the files to create and the version to record; pass
    ``version=None`` to skip the version file.
    """

    def _make(
        files: list[str] | None = None,
        version: str | None = "3.8.2000",
        name: str = "Installer",
    ) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel in files if files is not None else ["vs_installer.exe"]:
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("stub")
        if version is not None:
            (root / "vs_installer.version.json").write_text(
                json.dumps({"info": {"version": version}})
            )
        return root

    return _make


@pytest.fixture
def settings(tmp_path: Path) -> UpdaterSettings:
    """Settings pointing at tmp_path/Installer with a small expected-file list."""
    return UpdaterSettings(
        package_name="test-installer",
        url="https://example.invalid/vs_bootstrapper.exe",
        install_dir=tmp_path / "Installer",
        expected_files=["vs_installer.exe", "vs_installershell.exe"],
        download_dir=tmp_path / "downloads",
        timeout=30,
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI runs reconfigure the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
