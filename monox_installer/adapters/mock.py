"""
Mock process runner — test double for every child process.

Used in tests to simulate the registry client or a downloader
without touching the network. Configurable exit codes per command,
plus an optional side effect that runs in place of the real process
(e.g. writing the file curl would have downloaded).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from monox_installer.adapters.base import ProcessResult, ProcessRunner

SideEffect = Callable[[str, list[str], Path | None], None]


class MockProcessRunner(ProcessRunner):
    """Universal mock runner.

    By default every command exits 0. ``set_exit_code`` makes a
    command (or a sequence of calls to it) fail, and ``on_run``
    registers a callback that simulates the command's effect.
    """

    def __init__(self, default_exit_code: int = 0):
        self._default_exit_code = default_exit_code
        self._exit_codes: dict[str, list[int]] = {}
        self._side_effects: dict[str, SideEffect] = {}
        self._call_log: list[ProcessResult] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[ProcessResult]:
        """Every invocation this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_exit_code(self, command: str, *codes: int) -> None:
        """Exit codes for successive calls to ``command``; the last one repeats."""
        self._exit_codes[command] = list(codes)

    def on_run(self, command: str, effect: SideEffect) -> None:
        """Run ``effect(command, args, cwd)`` whenever ``command`` is invoked."""
        self._side_effects[command] = effect

    def run(self, command: str, args: list[str], cwd: Path | None = None) -> ProcessResult:
        codes = self._exit_codes.get(command)
        if codes:
            code = codes.pop(0) if len(codes) > 1 else codes[0]
        else:
            code = self._default_exit_code

        effect = self._side_effects.get(command)
        if effect is not None:
            effect(command, list(args), cwd)

        result = ProcessResult(
            command=command,
            args=list(args),
            cwd=str(cwd) if cwd else None,
            return_code=code,
        )
        self._call_log.append(result)
        return result

    def reset(self) -> None:
        """Clear call log, exit codes and side effects."""
        self._call_log.clear()
        self._exit_codes.clear()
        self._side_effects.clear()
