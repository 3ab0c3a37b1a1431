"""
monox-install — CLI entrypoint.

Usage:
    monox-install --help
    monox-install postinstall        # npm "postinstall" hook
    monox-install verify             # read-only installation check
    monox-install download           # fetch the release binary into cwd
    monox-install release sync-versions 1.2.3
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from monox_installer import __version__
from monox_installer.core.models.config import InstallerConfig
from monox_installer.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


def _load_config(ctx: click.Context) -> InstallerConfig:
    """Load the installer config, exiting 1 with a message if it is invalid."""
    from monox_installer.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def _fail(error: str, hint: str | None) -> None:
    click.secho(f"❌ {error}", fg="red", err=True)
    if hint:
        click.echo(f"   {hint}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="monox-install")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to monox-install.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """monox-install — find or fetch the monox binary for this host."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def postinstall(ctx: click.Context, as_json: bool) -> None:
    """Locate the platform binary, installing its package if missing.

    Never fails the surrounding install, except on unsupported platforms.
    """
    from monox_installer.core.use_cases.postinstall import run_postinstall

    config = _load_config(ctx)
    result = run_postinstall(config)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error, result.hint)

    quiet = ctx.obj.get("quiet", False)
    if result.installed:
        if not quiet:
            click.secho(f"✅ {config.binary_name} binary: {result.binary_path}", fg="green")
        return

    outcome = result.outcome
    click.secho(f"⚠️  Could not install {result.package}", fg="yellow", err=True)
    if outcome and outcome.reason:
        click.echo(f"   Reason: {outcome.reason}", err=True)
    click.echo("   To fix this manually:", err=True)
    for i, step in enumerate(result.remediation, 1):
        click.echo(f"   {i}. {step}", err=True)
    click.echo("   monox will attempt to find the binary at runtime.", err=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def verify(as_json: bool) -> None:
    """Check that the platform binary is installed (read-only)."""
    from monox_installer.core.use_cases.verify import verify_installation

    result = verify_installation()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error, result.hint)

    if result.verified:
        click.secho(f"✅ Installation verified: {result.package}", fg="green")
        return

    click.secho(f"⚠️  Warning: {result.warnings[0]}", fg="yellow", err=True)
    click.echo("   This may be due to:", err=True)
    click.echo(f"   1. {result.warnings[1]}", err=True)
    click.echo(f"   2. {result.warnings[2]}", err=True)
    click.echo(f"   {result.warnings[3]}", err=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def download(ctx: click.Context, as_json: bool) -> None:
    """Download the latest release binary into the current directory."""
    from monox_installer.core.use_cases.download import download_release

    config = _load_config(ctx)
    if not as_json:
        click.echo(f"🔍 Looking up the latest {config.binary_name} release...")
    result = download_release(config=config)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        _fail(result.error or "Download failed", result.hint)

    assert result.asset is not None and result.path is not None
    click.echo()
    click.secho(
        f"✅ {config.binary_name} {result.asset.tag} installed to: {result.path}",
        fg="green",
        bold=True,
    )
    click.echo("   Add its directory to your PATH:")
    click.echo(f"     {result.path_hint}")
    click.echo("   Or run it directly:")
    click.echo(f"     {result.path} --help")


def _parse_platform_key(ctx: click.Context, param: click.Parameter, value: str | None):
    if value is None:
        return None
    from monox_installer.core.models.platform import PlatformKey

    try:
        return PlatformKey.parse(value)
    except ValueError as e:
        raise click.BadParameter(f"{e} (expected e.g. 'linux-x64')") from e


@cli.command("platform")
@click.option(
    "--target",
    "platform_key",
    metavar="OS-ARCH",
    callback=_parse_platform_key,
    default=None,
    help="Show the mappings for another platform, e.g. darwin-arm64.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def platform_cmd(ctx: click.Context, platform_key, as_json: bool) -> None:
    """Show the detected platform and what it maps to."""
    from monox_installer.core.use_cases.platform_info import get_platform_info

    config = _load_config(ctx)
    info = get_platform_info(config, platform_key=platform_key)

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
        sys.exit(0 if info.is_supported else 1)

    click.secho(f"\n🖥️  Platform: {info.platform}", fg="cyan", bold=True)
    if info.is_supported:
        click.echo(f"   Package:       {info.package}")
    else:
        click.secho("   Package:       (unsupported)", fg="red")
    click.echo(f"   Release asset: {info.release_asset or '(unsupported)'}")
    click.echo(f"   Invoked by:    {info.package_manager.label()}")
    if not info.is_supported:
        click.echo(f"   Supported:     {', '.join(info.supported)}")
        click.echo()
        sys.exit(1)
    click.echo()


# ── Register sub-command groups from monox_installer/ui/cli/ ──────

from monox_installer.ui.cli.release import release  # noqa: E402

cli.add_command(release)


if __name__ == "__main__":
    cli()
