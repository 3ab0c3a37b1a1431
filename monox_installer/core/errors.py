"""
Installer errors — the fatal conditions, each with remediation text.

Only genuinely unrecoverable conditions are exceptions. "Binary not
found" and "fallback install failed" are ordinary results (see
``core.models.resolution``) and are never raised.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base exception carrying a user-facing remediation hint."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def format(self) -> str:
        if self.hint:
            return f"{self.message} {self.hint}"
        return self.message


class UnsupportedPlatformError(InstallerError):
    """The host OS/arch combination has no entry in a platform table."""

    def __init__(self, platform_key: str, supported: list[str] | None = None) -> None:
        hint = "monox has no prebuilt binary for this host."
        if supported:
            hint += f" Supported platforms: {', '.join(supported)}."
        super().__init__(f"Unsupported platform: {platform_key}", hint)
        self.platform_key = platform_key


class VersionDiscoveryError(InstallerError):
    """The latest release tag could not be determined."""


class MissingDownloadToolError(InstallerError):
    """Neither curl nor wget is available on the host."""


class DownloadIncompleteError(InstallerError):
    """No transfer succeeded, or the target file does not exist afterwards."""

    def __init__(self, target: str, url: str) -> None:
        super().__init__(
            f"Download failed: {target} is missing or incomplete",
            f"Download it manually from {url}",
        )
        self.target = target
        self.url = url


class ManifestRewriteError(InstallerError):
    """A single distribution manifest could not be parsed or written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot update {path}: {reason}")
        self.path = path
        self.reason = reason
