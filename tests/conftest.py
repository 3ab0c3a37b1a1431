"""
Shared test fixtures and configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from monox_installer.adapters.mock import MockProcessRunner
from monox_installer.core.models.platform import PlatformPackageEntry

LINUX_X64_ENTRY = PlatformPackageEntry("@monox/linux-x64", "monox")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip variables a surrounding npm/shell session would leak into tests."""
    for var in (
        "npm_config_user_agent",
        "npm_execpath",
        "NODE_PATH",
        "MONOX_LOG_LEVEL",
        "MONOX_LOG_FILE",
        "MONOX_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A user project that depends on monox."""
    project = tmp_path / "app"
    (project / "node_modules").mkdir(parents=True)
    (project / "package.json").write_text(
        json.dumps({"name": "app", "dependencies": {"monox": "^1.4.0"}}, indent=2) + "\n"
    )
    return project


def _make_wrapper(project: Path, optional_deps: dict[str, str] | None = None) -> Path:
    """Create node_modules/monox (the wrapper package) inside ``project``."""
    wrapper = project / "node_modules" / "monox"
    wrapper.mkdir(parents=True, exist_ok=True)
    manifest = {"name": "monox", "version": "1.4.0"}
    if optional_deps is not None:
        manifest["optionalDependencies"] = optional_deps
    (wrapper / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    return wrapper


def _install_binary(modules_dir: Path, entry: PlatformPackageEntry = LINUX_X64_ENTRY) -> Path:
    """Simulate an installed platform package under ``modules_dir``."""
    binary = modules_dir / entry.package / entry.subpath
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(b"\x7fELF fake monox")
    return binary


@pytest.fixture
def wrapper_dir(project_dir: Path) -> Path:
    """The wrapper package with the usual optionalDependencies pins."""
    return _make_wrapper(project_dir, {
        "@monox/darwin-arm64": "1.4.0",
        "@monox/darwin-x64": "1.4.0",
        "@monox/linux-arm64": "1.4.0",
        "@monox/linux-x64": "1.4.0",
    })


@pytest.fixture
def runner() -> MockProcessRunner:
    return MockProcessRunner()


@pytest.fixture
def make_wrapper():
    """Factory: ``make_wrapper(project, optional_deps)`` → wrapper package dir."""
    return _make_wrapper


@pytest.fixture
def install_binary():
    """Factory: ``install_binary(modules_dir, entry)`` → fake binary path."""
    return _install_binary


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo ``setup_logging`` calls made by the CLI or logging tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
