"""
L4 Execution — Core subprocess runner.

The single place where ``subprocess.run`` is called for bootstrapper
runs.  Timeouts and OS errors are folded into the result dict; the
caller decides what counts as failure.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

_OUTPUT_TAIL = 2000


def _run_subprocess(
    cmd: list[str] | str,
    *,
    timeout: int = 1800,
    cwd: str | None = None,
) -> dict[str, Any]:
    """Run a command and capture its output.

    Args:
        cmd: Command list, or a raw command line on Windows.
        timeout: Seconds before the process is abandoned.
        cwd: Working directory for the command.

    Returns:
        ``{"ok": True, "returncode": N, "stdout": "...", "stderr": "...",
        "elapsed_ms": N}`` when the process ran to completion (whatever
        its exit code), ``{"ok": False, "error": "..."}`` when it could
        not be started or timed out.
    """
    logger.debug("Running: %s", cmd)
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.debug("Could not start %s", cmd, exc_info=True)
        program = cmd[0] if isinstance(cmd, list) else cmd
        return {"ok": False, "error": f"Could not start {program}: {e}"}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("Exit code %d after %dms", result.returncode, elapsed_ms)
    return {
        "ok": True,
        "returncode": result.returncode,
        "stdout": result.stdout[-_OUTPUT_TAIL:] if result.stdout else "",
        "stderr": result.stderr[-_OUTPUT_TAIL:] if result.stderr else "",
        "elapsed_ms": elapsed_ms,
    }
