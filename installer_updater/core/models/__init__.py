"""
Domain models — Pydantic types for the installer updater.

All models are re-exported here for convenient access:

    from installer_updater.core.models import InstalledInfo, InstallParameters
"""

from installer_updater.core.models.installer import (
    FixedInputs,
    HealthReport,
    InstalledInfo,
    InstallParameters,
    UpdateRequest,
)
from installer_updater.core.models.settings import UpdaterSettings

__all__ = [
    # installer.py
    "FixedInputs",
    "HealthReport",
    "InstallParameters",
    "InstalledInfo",
    "UpdateRequest",
    # settings.py
    "UpdaterSettings",
]
