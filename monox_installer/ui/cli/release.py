"""
CLI commands for release preparation.

Thin wrappers over ``monox_installer.core.use_cases.sync_versions``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


def _config_dir(ctx: click.Context) -> Path:
    """Directory relative paths in the config are resolved from."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        from monox_installer.core.config.loader import find_config_file

        config_path = find_config_file()
    return config_path.parent.resolve() if config_path else Path.cwd()


@click.group()
def release() -> None:
    """Release — keep the npm distribution in sync."""


@release.command("sync-versions")
@click.argument("version", required=False)
@click.option(
    "--from-cargo",
    "cargo_toml",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Read the version from this Cargo.toml instead.",
)
@click.option(
    "--root",
    type=click.Path(exists=False, file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the generated package.json files (default: npm/).",
)
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def sync_versions(
    ctx: click.Context,
    version: str | None,
    cargo_toml: Path | None,
    root: Path | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Set VERSION on every npm manifest and its sibling-package pins."""
    from monox_installer.core.config.loader import ConfigError, load_config
    from monox_installer.core.use_cases.sync_versions import run_sync_versions

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    result = run_sync_versions(
        version,
        config=config,
        root=root,
        cargo_toml=cargo_toml,
        base_dir=_config_dir(ctx),
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        if result.hint:
            click.echo(f"   {result.hint}", err=True)
        sys.exit(1)

    report = result.report
    assert report is not None

    mode_label = "[dry-run] " if dry_run else ""
    click.secho(
        f"\n📦 {mode_label}Version {report.version} → {report.root}",
        fg="cyan",
        bold=True,
    )
    if result.version_source != "argument":
        click.echo(f"   (from {result.version_source})")
    click.echo(f"   Found {report.total} package.json files")
    click.echo()

    for path in report.updated:
        click.secho(f"   ✓ {path}", fg="green")
    for path in report.unchanged:
        click.echo(f"   · {path} (no changes)")
    for err in report.failed:
        click.secho(f"   ✗ {err.path}: {err.reason}", fg="red")

    click.echo()
    if report.failed:
        click.secho(
            f"   {len(report.failed)} of {report.total} files could not be updated",
            fg="red",
            bold=True,
        )
        click.echo()
        sys.exit(1)

    verb = "Would update" if dry_run else "Updated"
    click.secho(f"   {verb} {len(report.updated)}/{report.total} files", fg="green", bold=True)
    click.echo()
