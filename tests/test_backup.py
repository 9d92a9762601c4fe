"""
Tests for moving a broken installation aside.
"""

import time
from pathlib import Path

import pytest

from installer_updater.core.errors import RepairError
from installer_updater.core.services.installer_update.execution.backup import (
    backup_name,
    rename_directory,
)


class TestBackupName:
    def test_format(self):
        now = time.strptime("2026-10-19 14:30:05", "%Y-%m-%d %H:%M:%S")
        assert backup_name(Path("/vs/Installer"), now) == "Installer.backup-20261019143005"

    def test_uses_current_time(self):
        name = backup_name(Path("/vs/Installer"))
        prefix, _, stamp = name.partition(".backup-")
        assert prefix == "Installer"
        assert len(stamp) == 14 and stamp.isdigit()


class TestRenameDirectory:
    def test_renames_to_sibling(self, tmp_path: Path):
        src = tmp_path / "Installer"
        src.mkdir()
        (src / "vs_installer.exe").write_text("x")

        moved = rename_directory(src, "Installer.backup-1")

        assert moved == tmp_path / "Installer.backup-1"
        assert not src.exists()
        assert (moved / "vs_installer.exe").read_text() == "x"

    def test_existing_target_raises(self, tmp_path: Path):
        (tmp_path / "Installer").mkdir()
        (tmp_path / "Installer.backup-1").mkdir()
        with pytest.raises(RepairError, match="already exists"):
            rename_directory(tmp_path / "Installer", "Installer.backup-1")

    def test_missing_source_raises(self, tmp_path: Path):
        with pytest.raises(RepairError, match="Cannot rename"):
            rename_directory(tmp_path / "Installer", "Installer.backup-1")
