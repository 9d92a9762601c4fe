"""
L1 Domain — Update decision (pure).

Decides whether the bootstrapper must run, from the installed version,
the required version and the force flag.  No I/O, no subprocess.
"""

from __future__ import annotations

import logging

from packaging.version import InvalidVersion, Version

from installer_updater.core.models.installer import InstalledInfo, UpdateRequest

logger = logging.getLogger(__name__)


def compare_versions(installed: str, required: str) -> int:
    """Compare two version strings.

    Returns ``-1`` when ``installed`` is older than ``required``, ``0``
    when they are equivalent and ``1`` when it is newer.  Strings that
    ``packaging`` cannot parse (e.g. ``"3.8.2091.34612-preview"``) are
    compared token by token instead.
    """
    try:
        left, right = Version(installed), Version(required)
    except InvalidVersion:
        return _compare_tokens(installed, required)

    if left == right:
        return 0
    return -1 if left < right else 1


def decide_update(
    existing: InstalledInfo | None,
    required_version: str | None,
    force: bool,
) -> bool:
    """Return True when the install/update action should run.

    Decision table:

    ==========================  ====================  ===========
    existing                    versions              result
    ==========================  ====================  ===========
    absent                      —                     ``True``
    present                     installed < required  ``True``
    present                     installed == required ``force``
    present                     installed > required  ``False``
    present                     either one unknown    ``force``
    ==========================  ====================  ===========
    """
    if existing is None:
        logger.info("Installer is not present, installing")
        return True

    if existing.version and required_version:
        order = compare_versions(existing.version, required_version)
        if order < 0:
            logger.info(
                "Installer version %s is older than required %s, updating",
                existing.version, required_version,
            )
            return True
        if order == 0:
            if force:
                logger.info(
                    "Installer version %s is already at required version, "
                    "updating anyway (force)",
                    existing.version,
                )
            else:
                logger.info(
                    "Installer version %s is already at required version, "
                    "no update needed",
                    existing.version,
                )
            return force
        logger.info(
            "Installer version %s is newer than required %s, not updating",
            existing.version, required_version,
        )
        return False

    if force:
        logger.info("Installer present, updating because force was requested")
    elif not existing.version:
        logger.info("Installer present but its version is unknown, not updating")
    else:
        logger.info("Installer present and no version requirement, not updating")
    return force


def decide(request: UpdateRequest) -> bool:
    """Convenience wrapper over :func:`decide_update`."""
    return decide_update(request.existing, request.required_version, request.force)


def _compare_tokens(installed: str, required: str) -> int:
    def tokenize(version: str) -> list[tuple[int, int | str]]:
        tokens: list[tuple[int, int | str]] = []
        for raw in version.lstrip("vV").replace("-", ".").replace("+", ".").split("."):
            if not raw:
                continue
            tokens.append((0, int(raw)) if raw.isdigit() else (1, raw.lower()))
        return tokens

    left, right = tokenize(installed), tokenize(required)
    for index in range(max(len(left), len(right))):
        a = left[index] if index < len(left) else (0, 0)
        b = right[index] if index < len(right) else (0, 0)
        if a != b:
            return -1 if a < b else 1
    return 0
