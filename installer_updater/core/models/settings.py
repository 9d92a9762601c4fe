"""
UpdaterSettings — the validated contents of installer.yml.

Every field has a default matching the Visual Studio Installer layout, so
an empty config file is valid; the CLI overrides individual values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_INSTALL_DIR = "C:/Program Files (x86)/Microsoft Visual Studio/Installer"

DEFAULT_EXPECTED_FILES = [
    "vs_installer.exe",
    "vs_installershell.exe",
    "vs_installer.version.json",
    "resources/app/package.json",
]

# Chocolatey's default set: success, already installed, reboot initiated / required.
DEFAULT_VALID_EXIT_CODES = [0, 1605, 1614, 1641, 3010]


class UpdaterSettings(BaseModel):
    """Configuration for one installer component."""

    # ── Package ──────────────────────────────────────────────────
    package_name: str = "visualstudio-installer"
    url: str = ""
    checksum: str = ""
    checksum_type: str = "sha256"
    required_version: str | None = None

    # ── Host layout ──────────────────────────────────────────────
    install_dir: Path = Path(DEFAULT_INSTALL_DIR)
    installer_exe: str = "vs_installer.exe"
    version_file: str = "vs_installer.version.json"
    expected_files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXPECTED_FILES)
    )

    # ── Execution ────────────────────────────────────────────────
    download_dir: Path | None = None   # None = system temp dir
    timeout: int = 1800
    valid_exit_codes: list[int] = Field(
        default_factory=lambda: list(DEFAULT_VALID_EXIT_CODES)
    )

    @field_validator("checksum_type")
    @classmethod
    def _lower_checksum_type(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("required_version", mode="before")
    @classmethod
    def _stringify_version(cls, value: object) -> object:
        # YAML reads "17.0" as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value
