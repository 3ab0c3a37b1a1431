"""
Subprocess runner — the single place where child processes are spawned.

Streams are inherited rather than captured: npm's progress output and
curl's progress bar go straight to the user's terminal. No timeout is
applied; a hung registry or download blocks until the parent is killed.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from monox_installer.adapters.base import ProcessResult, ProcessRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(ProcessRunner):
    """Run commands with ``subprocess.run`` and inherited stdio."""

    @property
    def name(self) -> str:
        return "subprocess"

    def run(self, command: str, args: list[str], cwd: Path | None = None) -> ProcessResult:
        cmd = [command, *args]
        logger.info("Running: %s (cwd=%s)", " ".join(cmd), cwd or ".")
        start = time.monotonic()

        try:
            completed = subprocess.run(cmd, cwd=cwd, check=False)
        except FileNotFoundError:
            return ProcessResult(
                command=command,
                args=args,
                cwd=str(cwd) if cwd else None,
                return_code=127,
                error=f"Command not found: {command}",
            )
        except OSError as e:
            logger.exception("Cannot start %s", command)
            return ProcessResult(
                command=command,
                args=args,
                cwd=str(cwd) if cwd else None,
                return_code=126,
                error=f"Cannot start {command}: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if completed.returncode != 0:
            logger.info("%s exited with code %d", command, completed.returncode)

        return ProcessResult(
            command=command,
            args=args,
            cwd=str(cwd) if cwd else None,
            return_code=completed.returncode,
            duration_ms=elapsed_ms,
        )
