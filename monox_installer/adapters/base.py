"""
Process runner protocol — the seam between installer logic and child processes.

Everything that spawns a process (the registry client for fallback
installs, curl/wget for release downloads) goes through a
``ProcessRunner``. Tests substitute ``MockProcessRunner`` so no real
package manager or network is involved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, Field


class ProcessResult(BaseModel):
    """Outcome of one child process.

    Runners NEVER raise — a command that cannot be started is reported
    with a non-zero ``return_code`` and an ``error`` message.
    """

    command: str
    args: list[str] = Field(default_factory=list)
    cwd: str | None = None
    return_code: int = 0
    error: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.return_code == 0 and self.error is None

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.args])

    def describe_failure(self) -> str:
        """Human-readable reason for a failed run."""
        if self.error:
            return self.error
        return f"`{self.command_line}` exited with code {self.return_code}"


class ProcessRunner(ABC):
    """Abstract runner: (command, args, working directory) → exit status."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g. 'subprocess', 'mock')."""

    @abstractmethod
    def run(self, command: str, args: list[str], cwd: Path | None = None) -> ProcessResult:
        """Run ``command`` with ``args`` and block until it exits.

        MUST never raise. Standard output and error are inherited, so
        the user sees the child's native output.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
