"""Safe subprocess runner for external tools (ffmpeg, ffprobe)."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from avsplit.core.errors import MediaToolError

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: float | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external command with logging and error handling.

    Missing executables, timeouts and (with ``check``) non-zero exits are all
    raised as ``MediaToolError``.
    """
    cmd_str = " ".join(cmd)
    logger.info(f"Running: {cmd_str}")

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise MediaToolError(f"executable not found: {cmd[0]}", cmd=cmd) from exc
    except subprocess.TimeoutExpired as exc:
        raise MediaToolError(f"timed out after {timeout}s: {cmd_str}", cmd=cmd) from exc

    if result.stdout:
        logger.debug(f"stdout: {result.stdout[-500:]}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr[-500:]}")

    if check and result.returncode != 0:
        raise MediaToolError(
            f"command failed: {cmd_str}",
            cmd=cmd,
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    return result
