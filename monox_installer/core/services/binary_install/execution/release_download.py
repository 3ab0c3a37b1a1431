"""
L4 Execution — Download a release binary straight from the release host.

The registry-free install path:

    1. follow the "latest release" redirect to learn the tag
    2. map the host to a target triplet (independent of the npm table)
    3. build the asset filename and URL
    4. download with curl (resumable, then plain) or wget
    5. check the file exists, 6. mark it executable

Downloaded assets are NOT checksum-verified: releases publish no
digests to check against.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import urllib.error
import urllib.request
from collections.abc import Callable
from pathlib import Path
from urllib.parse import urlparse

from monox_installer.adapters.base import ProcessResult, ProcessRunner
from monox_installer.core.errors import (
    DownloadIncompleteError,
    MissingDownloadToolError,
    VersionDiscoveryError,
)
from monox_installer.core.models.platform import ReleaseAsset
from monox_installer.core.services.binary_install.data.platforms import (
    ASSET_FILENAME_TEMPLATE,
    ASSET_URL_TEMPLATE,
)

logger = logging.getLogger(__name__)

USER_AGENT = "monox-installer"

# Path segments GitHub redirects to when a repo has no releases.
_NOT_A_TAG = frozenset({"", "releases", "latest"})


# ── Version discovery ────────────────────────────────────────────


def follow_redirects(url: str) -> str:
    """Return the final URL after redirects, or ``""`` on any failure.

    Only the first hop is a HEAD request. urllib re-issues redirected
    requests as GET, but the response body is never read.
    """
    req = urllib.request.Request(url, method="HEAD", headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req) as resp:  # noqa: S310
            return resp.geturl() or ""
    except urllib.error.HTTPError as e:
        logger.debug("HEAD %s → HTTP %s at %s", url, e.code, e.url)
        return ""
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.debug("HEAD %s failed: %s", url, e)
        return ""


def extract_tag(final_url: str) -> str:
    """Pull the release tag out of a ``.../releases/tag/<tag>`` URL.

    Falls back to the last path segment. Returns ``""`` when the URL
    does not name a tag.
    """
    if not final_url:
        return ""
    segments = [s for s in urlparse(final_url).path.split("/") if s]
    if "tag" in segments:
        idx = segments.index("tag")
        tag = segments[idx + 1] if idx + 1 < len(segments) else ""
    else:
        tag = segments[-1] if segments else ""
    return "" if tag in _NOT_A_TAG else tag


def discover_latest_tag(
    latest_url: str,
    repo_url: str,
    *,
    resolve_url: Callable[[str], str] = follow_redirects,
) -> str:
    """Resolve the newest release tag.

    Raises:
        VersionDiscoveryError: the redirect yielded no tag. Fatal, no retry.
    """
    final_url = resolve_url(latest_url)
    logger.debug("Latest release redirect: %s → %s", latest_url, final_url or "(none)")
    tag = extract_tag(final_url)
    if not tag:
        raise VersionDiscoveryError(
            "Cannot determine the latest release version",
            f"Check that the release repository exists: {repo_url}",
        )
    return tag


# ── Asset construction ───────────────────────────────────────────


def build_release_asset(tag: str, triplet: str, *, binary: str, repo_url: str) -> ReleaseAsset:
    """Substitute tag and triplet into the fixed asset templates."""
    filename = ASSET_FILENAME_TEMPLATE.format(binary=binary, triplet=triplet)
    url = ASSET_URL_TEMPLATE.format(repo_url=repo_url.rstrip("/"), tag=tag, filename=filename)
    return ReleaseAsset(tag=tag, filename=filename, download_url=url)


# ── Download ─────────────────────────────────────────────────────


def download_commands(
    tool: str, url: str, target: Path,
) -> tuple[list[str], list[str]]:
    """(resumable args, plain args) for ``tool``."""
    if tool == "curl":
        return (
            ["-fL", "-C", "-", "-o", str(target), url],
            ["-fL", "-o", str(target), url],
        )
    return (
        ["-c", "-O", str(target), url],
        ["-O", str(target), url],
    )


def pick_download_tool(which: Callable[[str], str | None] = shutil.which) -> str:
    """curl if available, else wget.

    Raises:
        MissingDownloadToolError: neither is on PATH.
    """
    for tool in ("curl", "wget"):
        if which(tool):
            return tool
    raise MissingDownloadToolError(
        "curl or wget is required to download monox",
        "Install one of them with your system package manager and retry.",
    )


def fetch_asset(
    asset: ReleaseAsset,
    target: Path,
    *,
    runner: ProcessRunner,
    which: Callable[[str], str | None] = shutil.which,
) -> ProcessResult:
    """Download ``asset`` to ``target``, resuming a partial file if present.

    A failed resumable transfer (e.g. the server rejects the range, or
    the partial file is already complete) is followed by exactly one
    full re-download.

    A file left behind by two failed transfers is never accepted:
    ``wget -O`` creates its output before the request is answered.

    Raises:
        MissingDownloadToolError: no downloader on PATH.
        DownloadIncompleteError: both transfers failed, or ``target``
            does not exist after a successful one.
    """
    tool = pick_download_tool(which)
    resumable, plain = download_commands(tool, asset.download_url, target)

    result = runner.run(tool, resumable)
    if not result.ok:
        logger.warning("Resumable download failed (%s), retrying from scratch",
                       result.describe_failure())
        result = runner.run(tool, plain)

    if not result.ok:
        logger.error("Download failed: %s", result.describe_failure())
        raise DownloadIncompleteError(str(target), asset.download_url)
    if not target.is_file():
        raise DownloadIncompleteError(str(target), asset.download_url)
    return result


def make_executable(path: Path) -> None:
    """chmod +x: add execute permission for user, group and others."""
    if os.name == "nt":
        return
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
