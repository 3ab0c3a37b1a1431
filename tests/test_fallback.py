"""
Tests for the fallback installer — one registry install, then re-resolve.
"""

from pathlib import Path

from monox_installer.adapters.mock import MockProcessRunner
from monox_installer.core.models.platform import PlatformPackageEntry
from monox_installer.core.services.binary_install.execution.fallback import (
    ensure_installed,
    install_command,
    remediation_steps,
    target_version,
)

ENTRY = PlatformPackageEntry("@monox/linux-x64", "monox")


def _npm_installs_into(modules_dir: Path, install_binary):
    """Side effect: behave like a successful ``npm install``."""
    def effect(command, args, cwd):
        install_binary(modules_dir, ENTRY)
    return effect


class TestTargetVersion:
    def test_declared_pin(self, wrapper_dir: Path):
        assert target_version("@monox/linux-x64", wrapper_dir) == "1.4.0"

    def test_latest_without_pin(self, project_dir: Path, make_wrapper):
        wrapper = make_wrapper(project_dir, {})
        assert target_version("@monox/linux-x64", wrapper) == "latest"

    def test_latest_without_manifest(self, tmp_path: Path):
        assert target_version("@monox/linux-x64", tmp_path) == "latest"

    def test_latest_without_root(self):
        assert target_version("@monox/linux-x64", None) == "latest"


class TestInstallCommand:
    def test_npm(self):
        assert install_command("npm", "@monox/linux-x64", "1.4.0") == (
            "npm", ["install", "@monox/linux-x64@1.4.0"],
        )


class TestEnsureInstalled:
    def test_already_installed_is_noop(self, project_dir, wrapper_dir, runner, install_binary):
        binary = install_binary(project_dir / "node_modules", ENTRY)
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir,
                                   cwd=wrapper_dir)
        assert outcome.ok
        assert outcome.path == str(binary.resolve())
        assert not outcome.spawned
        assert runner.call_count == 0

    def test_installs_pinned_version(self, wrapper_dir, runner, install_binary):
        runner.on_run("npm", _npm_installs_into(wrapper_dir / "node_modules", install_binary))
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir,
                                   cwd=wrapper_dir)
        assert outcome.ok
        assert outcome.version == "1.4.0"
        assert outcome.spawned
        call = runner.call_log[0]
        assert call.command == "npm"
        assert call.args == ["install", "@monox/linux-x64@1.4.0"]
        assert call.cwd == str(wrapper_dir)

    def test_installs_latest_without_pin(self, project_dir, make_wrapper, runner,
                                         install_binary):
        wrapper = make_wrapper(project_dir, None)
        runner.on_run("npm", _npm_installs_into(wrapper / "node_modules", install_binary))
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper, cwd=wrapper)
        assert outcome.ok
        assert runner.call_log[0].args == ["install", "@monox/linux-x64@latest"]

    def test_custom_registry_client(self, wrapper_dir, runner, install_binary):
        runner.on_run("pnpm", _npm_installs_into(wrapper_dir / "node_modules", install_binary))
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir,
                                   cwd=wrapper_dir, registry_client="pnpm")
        assert outcome.ok
        assert runner.call_log[0].command == "pnpm"

    def test_child_failure_is_reported_not_raised(self, wrapper_dir, runner):
        runner.set_exit_code("npm", 1)
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir,
                                   cwd=wrapper_dir)
        assert outcome.failed
        assert outcome.return_code == 1
        assert "exited with code 1" in outcome.reason
        assert "npm install @monox/linux-x64@1.4.0" in outcome.reason
        assert runner.call_count == 1  # no retry

    def test_success_exit_but_still_missing(self, wrapper_dir, runner):
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir,
                                   cwd=wrapper_dir)
        assert outcome.failed
        assert "still missing" in outcome.reason
        assert outcome.return_code == 0

    def test_nonzero_exit_but_resolved(self, wrapper_dir, runner, install_binary):
        runner.set_exit_code("npm", 1)
        runner.on_run("npm", _npm_installs_into(wrapper_dir / "node_modules", install_binary))
        outcome = ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir,
                                   cwd=wrapper_dir)
        assert outcome.ok
        assert outcome.return_code == 1

    def test_missing_client_binary(self, wrapper_dir):
        from monox_installer.adapters.shell.command import SubprocessRunner

        outcome = ensure_installed(
            ENTRY,
            runner=SubprocessRunner(),
            package_root=wrapper_dir,
            cwd=wrapper_dir,
            registry_client="definitely-not-a-package-manager",
        )
        assert outcome.failed
        assert "Command not found" in outcome.reason

    def test_logs_invoking_manager(self, wrapper_dir, caplog, monkeypatch):
        monkeypatch.setenv("npm_config_user_agent", "pnpm/8.15.1 npm/? node/v20.11.0")
        runner = MockProcessRunner(default_exit_code=1)
        with caplog.at_level("INFO"):
            ensure_installed(ENTRY, runner=runner, package_root=wrapper_dir, cwd=wrapper_dir)
        assert "invoked by pnpm 8.15.1" in caplog.text
        # Detection is informational: the install command is unchanged
        assert runner.call_log[0].command == "npm"


class TestRemediationSteps:
    def test_steps(self):
        steps = remediation_steps(ENTRY)
        assert steps[0] == "Install the platform package directly: npm install @monox/linux-x64"
        assert any("supported" in s for s in steps)
        assert any("--no-optional" in s for s in steps)
