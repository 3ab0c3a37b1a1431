"""
Resolution and install-outcome models — the results callers branch on.

Locating a binary yields ``Found`` or ``NotFound``; a fallback install
yields an ``InstallOutcome``. Neither path raises: a missing binary is
an expected outcome (optional dependencies are often skipped) and must
not crash the wrapping package's install.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal, Union

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class Found:
    """The platform binary resolved to an existing file."""

    package: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {"found": True, "package": self.package, "path": self.path}


@dataclass(frozen=True)
class NotFound:
    """The platform package (or its binary) is not installed."""

    package: str

    def to_dict(self) -> dict[str, Any]:
        return {"found": False, "package": self.package, "path": None}


ResolutionResult = Union[Found, NotFound]


class InstallOutcome(BaseModel):
    """Result of a single fallback install attempt.

    Created once per attempt and discarded after reporting. There is
    no retry: a failed outcome is surfaced once and control returns
    to the caller.
    """

    package: str
    version: str = "latest"
    status: Literal["ok", "failed"] = "ok"

    path: str | None = None          # resolved binary (on success)
    reason: str | None = None        # why the attempt failed
    return_code: int | None = None   # registry client exit status
    spawned: bool = False            # False when already installed

    finished_at: str = Field(default_factory=_now_iso)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, package: str, path: str, **kwargs: Any) -> InstallOutcome:
        """Create a success outcome."""
        return cls(package=package, status="ok", path=path, **kwargs)

    @classmethod
    def failure(cls, package: str, reason: str, **kwargs: Any) -> InstallOutcome:
        """Create a failure outcome."""
        return cls(package=package, status="failed", reason=reason, **kwargs)
