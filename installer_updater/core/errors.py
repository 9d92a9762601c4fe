"""
Error taxonomy for the installer updater.

Fatal conditions are exceptions; non-fatal conditions (version still
below requirement, unknown version) are only logged as warnings.
"""

from __future__ import annotations


class InstallerUpdateError(Exception):
    """Base class for every error raised by the updater."""


class ConfigurationError(InstallerUpdateError):
    """Raised when package parameters or the config file are malformed."""


class InstallPrimitiveError(InstallerUpdateError):
    """Raised when downloading, verifying or running the bootstrapper fails."""


class InstallerStillMissingError(InstallerUpdateError):
    """Raised when no installer is found after a supposedly successful update."""


class InstallerUnrepairableError(InstallerUpdateError):
    """Raised when the installer is still broken after the repair attempt."""

    def __init__(self, message: str, missing_files: list[str] | None = None):
        super().__init__(message)
        self.missing_files = list(missing_files or [])


class RepairError(InstallerUpdateError):
    """Raised when the broken installation directory cannot be moved aside."""
