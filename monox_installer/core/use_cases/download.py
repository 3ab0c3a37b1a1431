"""
Download use case — install monox from the release host, no registry.

Always downloads into the target directory as ``<binary>``. Every
failure here is fatal and carries a remediation hint.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from monox_installer.adapters.base import ProcessRunner
from monox_installer.adapters.shell.command import SubprocessRunner
from monox_installer.core.errors import InstallerError
from monox_installer.core.models.config import InstallerConfig
from monox_installer.core.models.platform import PlatformKey, ReleaseAsset
from monox_installer.core.services.binary_install.detection.platform import (
    lookup_release_triplet,
    resolve_platform,
)
from monox_installer.core.services.binary_install.execution.release_download import (
    build_release_asset,
    discover_latest_tag,
    fetch_asset,
    follow_redirects,
    make_executable,
)

logger = logging.getLogger(__name__)


@dataclass
class DownloadResult:
    """Result of a release download."""

    platform: PlatformKey | None = None
    asset: ReleaseAsset | None = None
    path: Path | None = None
    error: str | None = None
    hint: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None

    @property
    def path_hint(self) -> str | None:
        """Shell line that puts the install directory on PATH."""
        if self.path is None:
            return None
        return f'export PATH="{self.path.parent}:$PATH"'

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "platform": str(self.platform) if self.platform else None,
            "asset": self.asset.to_dict() if self.asset else None,
            "path": str(self.path) if self.path else None,
            "path_hint": self.path_hint,
            "error": self.error,
            "hint": self.hint,
        }


def download_release(
    target_dir: Path | None = None,
    config: InstallerConfig | None = None,
    *,
    runner: ProcessRunner | None = None,
    platform_key: PlatformKey | None = None,
    resolve_url: Callable[[str], str] = follow_redirects,
    which: Callable[[str], str | None] = shutil.which,
) -> DownloadResult:
    """Download the latest release binary into ``target_dir`` (default: cwd)."""
    config = config or InstallerConfig()
    target_dir = (target_dir or Path.cwd()).resolve()
    release = config.release

    result = DownloadResult(platform=platform_key or resolve_platform())
    try:
        tag = discover_latest_tag(release.latest_url, release.repo_url, resolve_url=resolve_url)
        logger.info("Latest release: %s", tag)

        triplet = lookup_release_triplet(result.platform)
        result.asset = build_release_asset(
            tag, triplet, binary=config.binary_name, repo_url=release.repo_url,
        )

        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / config.binary_name
        logger.info("Downloading %s %s (%s)", config.binary_name, tag, triplet)
        fetch_asset(result.asset, target, runner=runner or SubprocessRunner(), which=which)

        make_executable(target)
        result.path = target
    except InstallerError as e:
        result.error = e.message
        result.hint = e.hint
    except OSError as e:
        result.error = f"Cannot write to {target_dir}: {e}"

    return result
