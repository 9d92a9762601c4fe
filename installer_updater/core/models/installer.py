"""
Installer models — the values exchanged between decider, builder and loop.

None of these are persisted: installation state is queried fresh from the
host on every call and discarded afterwards.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class InstalledInfo(BaseModel):
    """An existing installation of the installer component.

    ``path`` points at the installer executable; the installation
    directory is its parent.
    """

    path: Path
    version: str | None = None   # None when the version file is unreadable

    @property
    def directory(self) -> Path:
        """The directory that holds the installation."""
        return self.path.parent


class HealthReport(BaseModel):
    """Result of checking an installation for its expected files."""

    is_healthy: bool = True
    missing_files: list[str] = Field(default_factory=list)

    @classmethod
    def from_missing(cls, missing_files: list[str]) -> HealthReport:
        return cls(is_healthy=not missing_files, missing_files=list(missing_files))


class UpdateRequest(BaseModel):
    """Inputs to the update decision."""

    required_version: str | None = None
    force: bool = False
    existing: InstalledInfo | None = None


class FixedInputs(BaseModel):
    """The package-level inputs that do not come from user overrides."""

    package_name: str
    url: str
    checksum: str = ""
    checksum_type: str = "sha256"


class InstallParameters(BaseModel):
    """Resolved arguments for the install primitive."""

    package_name: str
    silent_args: str
    url: str
    checksum: str = ""
    checksum_type: str = "sha256"
    log_file_path: Path | None = None
    is_2017_installer: bool = True
    installer_file_path: Path | None = None   # local bootstrapper, skips download
