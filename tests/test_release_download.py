"""
Tests for the release downloader — tag discovery, asset naming, download fallbacks.
"""

import os
import stat
from pathlib import Path

import pytest

from monox_installer.adapters.mock import MockProcessRunner
from monox_installer.core.errors import (
    DownloadIncompleteError,
    MissingDownloadToolError,
    VersionDiscoveryError,
)
from monox_installer.core.models.platform import ReleaseAsset
from monox_installer.core.services.binary_install.execution import release_download
from monox_installer.core.services.binary_install.execution.release_download import (
    build_release_asset,
    discover_latest_tag,
    download_commands,
    extract_tag,
    fetch_asset,
    make_executable,
    pick_download_tool,
)

REPO_URL = "https://github.com/monoxon/monox"
LATEST_URL = f"{REPO_URL}/releases/latest"
ASSET = ReleaseAsset(
    tag="v2.3.1",
    filename="monox-x86_64-unknown-linux-gnu",
    download_url=f"{REPO_URL}/releases/download/v2.3.1/monox-x86_64-unknown-linux-gnu",
)


def _which(*available: str):
    return lambda tool: f"/usr/bin/{tool}" if tool in available else None


def _writes_target(command, args, cwd):
    """Side effect: the downloader wrote its ``-o``/``-O`` target."""
    flag = "-o" if command == "curl" else "-O"
    Path(args[args.index(flag) + 1]).write_bytes(b"binary")


# ── Version discovery ────────────────────────────────────────────


class TestExtractTag:
    def test_tag_url(self):
        assert extract_tag(f"{REPO_URL}/releases/tag/v2.3.1") == "v2.3.1"

    def test_tag_without_v(self):
        assert extract_tag(f"{REPO_URL}/releases/tag/0.9.0") == "0.9.0"

    def test_trailing_slash(self):
        assert extract_tag(f"{REPO_URL}/releases/tag/v2.3.1/") == "v2.3.1"

    def test_last_segment_fallback(self):
        assert extract_tag("https://example.com/monox/v1.0.0") == "v1.0.0"

    def test_empty(self):
        assert extract_tag("") == ""

    def test_no_releases_redirect(self):
        # A repo without releases redirects back to the releases list
        assert extract_tag(f"{REPO_URL}/releases") == ""

    def test_unredirected_latest(self):
        assert extract_tag(LATEST_URL) == ""


class TestDiscoverLatestTag:
    def test_follows_redirect(self):
        seen = []

        def resolve(url):
            seen.append(url)
            return f"{REPO_URL}/releases/tag/v2.3.1"

        assert discover_latest_tag(LATEST_URL, REPO_URL, resolve_url=resolve) == "v2.3.1"
        assert seen == [LATEST_URL]

    def test_empty_redirect_fails(self):
        with pytest.raises(VersionDiscoveryError) as exc:
            discover_latest_tag(LATEST_URL, REPO_URL, resolve_url=lambda url: "")
        assert REPO_URL in exc.value.hint

    def test_follow_redirects_network_error(self, monkeypatch):
        import urllib.error

        def boom(req):
            raise urllib.error.URLError("no route to host")

        monkeypatch.setattr(release_download.urllib.request, "urlopen", boom)
        assert release_download.follow_redirects(LATEST_URL) == ""

    def test_follow_redirects_returns_final_url(self, monkeypatch):
        class FakeResponse:
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def geturl(self):
                return f"{REPO_URL}/releases/tag/v2.3.1"

        captured = {}

        def fake_urlopen(req):
            captured["method"] = req.get_method()
            return FakeResponse()

        monkeypatch.setattr(release_download.urllib.request, "urlopen", fake_urlopen)
        assert release_download.follow_redirects(LATEST_URL).endswith("/tag/v2.3.1")
        assert captured["method"] == "HEAD"


# ── Asset construction ───────────────────────────────────────────


class TestBuildReleaseAsset:
    def test_linux_x64(self):
        asset = build_release_asset("v2.3.1", "x86_64-unknown-linux-gnu",
                                    binary="monox", repo_url=REPO_URL)
        assert asset == ASSET
        assert asset.version == "2.3.1"

    def test_darwin_arm64(self):
        asset = build_release_asset("v2.3.1", "aarch64-apple-darwin",
                                    binary="monox", repo_url=REPO_URL + "/")
        assert asset.filename == "monox-aarch64-apple-darwin"
        assert asset.download_url == (
            f"{REPO_URL}/releases/download/v2.3.1/monox-aarch64-apple-darwin"
        )


# ── Download ─────────────────────────────────────────────────────


class TestPickDownloadTool:
    def test_prefers_curl(self):
        assert pick_download_tool(_which("curl", "wget")) == "curl"

    def test_wget_fallback(self):
        assert pick_download_tool(_which("wget")) == "wget"

    def test_none_available(self):
        with pytest.raises(MissingDownloadToolError) as exc:
            pick_download_tool(_which())
        assert "curl or wget" in exc.value.message


class TestDownloadCommands:
    def test_curl_resumes(self, tmp_path: Path):
        resumable, plain = download_commands("curl", ASSET.download_url, tmp_path / "monox")
        assert resumable[:3] == ["-fL", "-C", "-"]
        assert "-C" not in plain
        assert plain[-1] == ASSET.download_url

    def test_wget_resumes(self, tmp_path: Path):
        resumable, plain = download_commands("wget", ASSET.download_url, tmp_path / "monox")
        assert resumable[0] == "-c"
        assert "-c" not in plain


class TestFetchAsset:
    def test_resumable_success(self, tmp_path: Path):
        target = tmp_path / "monox"
        runner = MockProcessRunner()
        runner.on_run("curl", _writes_target)
        result = fetch_asset(ASSET, target, runner=runner, which=_which("curl"))
        assert result.ok
        assert target.read_bytes() == b"binary"
        assert runner.call_count == 1
        assert "-C" in runner.call_log[0].args

    def test_falls_back_to_plain_download_once(self, tmp_path: Path):
        target = tmp_path / "monox"
        runner = MockProcessRunner()
        runner.set_exit_code("curl", 33, 0)  # 33: range request rejected
        runner.on_run("curl", _writes_target)
        fetch_asset(ASSET, target, runner=runner, which=_which("curl"))
        assert runner.call_count == 2
        assert "-C" in runner.call_log[0].args
        assert "-C" not in runner.call_log[1].args

    def test_wget_only(self, tmp_path: Path):
        target = tmp_path / "monox"
        runner = MockProcessRunner()
        runner.on_run("wget", _writes_target)
        fetch_asset(ASSET, target, runner=runner, which=_which("wget"))
        assert runner.call_log[0].command == "wget"
        assert runner.call_log[0].args[:3] == ["-c", "-O", str(target)]

    def test_missing_tool(self, tmp_path: Path):
        runner = MockProcessRunner()
        with pytest.raises(MissingDownloadToolError):
            fetch_asset(ASSET, tmp_path / "monox", runner=runner, which=_which())
        assert runner.call_count == 0

    def test_incomplete_download(self, tmp_path: Path):
        runner = MockProcessRunner(default_exit_code=22)
        with pytest.raises(DownloadIncompleteError) as exc:
            fetch_asset(ASSET, tmp_path / "monox", runner=runner, which=_which("curl"))
        assert exc.value.url == ASSET.download_url
        assert ASSET.download_url in exc.value.hint
        assert runner.call_count == 2  # resumable + one plain retry, nothing more

    def test_leftover_file_after_failed_transfers(self, tmp_path: Path):
        # wget -O creates its output before a 404 comes back
        target = tmp_path / "monox"
        runner = MockProcessRunner()
        runner.set_exit_code("wget", 8)
        runner.on_run("wget", lambda command, args, cwd: target.touch())
        with pytest.raises(DownloadIncompleteError) as exc:
            fetch_asset(ASSET, target, runner=runner, which=_which("wget"))
        assert exc.value.target == str(target)
        assert runner.call_count == 2

    def test_stale_partial_file_not_accepted(self, tmp_path: Path):
        target = tmp_path / "monox"
        target.write_bytes(b"\x7fELF trunc")
        runner = MockProcessRunner(default_exit_code=22)
        with pytest.raises(DownloadIncompleteError):
            fetch_asset(ASSET, target, runner=runner, which=_which("curl"))

    def test_success_without_file(self, tmp_path: Path):
        runner = MockProcessRunner()
        with pytest.raises(DownloadIncompleteError):
            fetch_asset(ASSET, tmp_path / "monox", runner=runner, which=_which("curl"))


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
class TestMakeExecutable:
    def test_sets_exec_bits(self, tmp_path: Path):
        path = tmp_path / "monox"
        path.write_bytes(b"binary")
        path.chmod(0o644)
        make_executable(path)
        mode = path.stat().st_mode
        assert mode & stat.S_IXUSR
        assert mode & stat.S_IXGRP
        assert mode & stat.S_IXOTH
        assert mode & stat.S_IRUSR
