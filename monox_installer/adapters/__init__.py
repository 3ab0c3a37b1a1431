"""
Adapters — child-process runners.

    from monox_installer.adapters import SubprocessRunner, MockProcessRunner
"""

from monox_installer.adapters.base import ProcessResult, ProcessRunner
from monox_installer.adapters.mock import MockProcessRunner
from monox_installer.adapters.shell.command import SubprocessRunner

__all__ = [
    "MockProcessRunner",
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
]
