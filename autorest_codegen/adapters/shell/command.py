"""
Shell launcher — start the generator command through the shell.

The child inherits stdin/stdout/stderr, so AutoRest output goes straight
to the terminal. By default the process is started and left running;
with ``wait`` the adapter blocks and records the exit status.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from autorest_codegen.adapters.base import Adapter, LaunchContext
from autorest_codegen.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Launch shell commands with inherited stdio."""

    def __init__(self) -> None:
        self._processes: list[subprocess.Popen] = []

    @property
    def name(self) -> str:
        return "shell"

    @property
    def processes(self) -> list[subprocess.Popen]:
        """Processes started by this adapter, in launch order."""
        return self._processes

    def is_available(self) -> bool:
        # Shell is always available on Unix systems
        return shutil.which("sh") is not None

    def validate(self, context: LaunchContext) -> tuple[bool, str]:
        if not context.command.strip():
            return False, "Empty command"
        if not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"
        return True, ""

    def execute(self, context: LaunchContext) -> Receipt:
        is_valid, error = self.validate(context)
        if not is_valid:
            return Receipt.failure(
                project=context.project,
                launcher=self.name,
                error=error,
                command=context.command,
            )

        logger.debug("Launching: %s (cwd=%s)", context.command, context.cwd)
        start = time.monotonic()

        try:
            process = subprocess.Popen(context.command, shell=True, cwd=context.cwd)
        except OSError as e:
            logger.error("Failed to launch generator for %s: %s", context.project, e)
            return Receipt.failure(
                project=context.project,
                launcher=self.name,
                error=f"Launch error: {e}",
                command=context.command,
            )

        self._processes.append(process)

        if not context.wait:
            return Receipt.success(
                project=context.project,
                launcher=self.name,
                command=context.command,
                pid=process.pid,
            )

        return_code = process.wait()
        elapsed_ms = int((time.monotonic() - start) * 1000)

        if return_code == 0:
            return Receipt.success(
                project=context.project,
                launcher=self.name,
                command=context.command,
                pid=process.pid,
                return_code=return_code,
                duration_ms=elapsed_ms,
            )
        return Receipt.failure(
            project=context.project,
            launcher=self.name,
            error=f"Generator exited with code {return_code}",
            command=context.command,
            pid=process.pid,
            return_code=return_code,
            duration_ms=elapsed_ms,
        )
