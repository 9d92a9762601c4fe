"""
Installer update service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (domain → detection → execution → orchestration)::

    from installer_updater.core.services.installer_update import update_if_needed
"""

# ── L1: Domain ──
from installer_updater.core.services.installer_update.domain.package_parameters import (  # noqa: F401
    build_install_parameters,
    parse_package_parameters,
)
from installer_updater.core.services.installer_update.domain.version_decision import (  # noqa: F401
    compare_versions,
    decide,
    decide_update,
)

# ── L3: Detection ──
from installer_updater.core.services.installer_update.detection.installer_state import (  # noqa: F401
    query_health,
    query_installed_info,
    read_installer_version,
)

# ── L4: Execution ──
from installer_updater.core.services.installer_update.execution.install_primitive import (  # noqa: F401
    run_install_primitive,
)
from installer_updater.core.services.installer_update.execution.local_host import (  # noqa: F401
    LocalInstallerHost,
)

# ── L5: Orchestration ──
from installer_updater.core.services.installer_update.orchestration.updater import (  # noqa: F401
    InstallerHost,
    install_and_verify,
    update_if_needed,
)
