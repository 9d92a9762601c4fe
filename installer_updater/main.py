"""
Installer Updater — CLI entrypoint.

Usage:
    installer-updater --help
    installer-updater status
    installer-updater update --required-version 3.8.2000
    installer-updater config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from installer_updater import __version__
from installer_updater.core.errors import ConfigurationError, InstallerUpdateError
from installer_updater.core.models.settings import UpdaterSettings
from installer_updater.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


def _build_host(settings: UpdaterSettings):
    """Create the host the commands run against."""
    from installer_updater.core.services.installer_update import LocalInstallerHost

    return LocalInstallerHost(settings)


def _load(ctx: click.Context, **overrides) -> UpdaterSettings:
    from installer_updater.core.config.loader import load_settings

    return load_settings(ctx.obj.get("config_path"), overrides=overrides)


@click.group()
@click.version_option(version=__version__, prog_name="installer-updater")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option(
    "--debug",
    is_flag=True,
    envvar="IU_DEBUG",
    help="Enable debug tracing (very verbose). Also read from IU_DEBUG.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to installer.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Installer Updater — install, update and repair a bootstrapper-managed installer."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


@cli.command()
@click.option("--package-name", default=None, help="Package name (default: from config).")
@click.option("--url", default=None, help="Bootstrapper download URL.")
@click.option("--checksum", default=None, help="Expected bootstrapper checksum.")
@click.option("--checksum-type", default=None, help="Checksum algorithm (sha256, sha1, md5).")
@click.option("--required-version", default=None, help="Minimum installer version.")
@click.option("--install-dir", type=click.Path(path_type=Path), default=None,
              help="Installer directory (default: from config).")
@click.option("--force", is_flag=True, help="Run the bootstrapper even when up to date.")
@click.option(
    "--params",
    "package_parameters",
    envvar="IU_PACKAGE_PARAMETERS",
    default=None,
    help="Package parameters, e.g. '--bootstrapperPath C:\\vs.exe --locale en-US'.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def update(
    ctx: click.Context,
    package_name: str | None,
    url: str | None,
    checksum: str | None,
    checksum_type: str | None,
    required_version: str | None,
    install_dir: Path | None,
    force: bool,
    package_parameters: str | None,
    as_json: bool,
) -> None:
    """Install or update the installer, repairing it once if broken."""
    from installer_updater.core.services.installer_update import update_if_needed

    try:
        settings = _load(
            ctx,
            package_name=package_name,
            url=url,
            checksum=checksum,
            checksum_type=checksum_type,
            required_version=required_version,
            install_dir=install_dir,
        )
        info = update_if_needed(
            settings.package_name,
            settings.url,
            settings.checksum,
            settings.checksum_type,
            settings.required_version,
            force,
            package_parameters,
            _build_host(settings),
            debug=ctx.obj.get("debug", False),
        )
    except InstallerUpdateError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e), "kind": type(e).__name__}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        payload: dict = {"ok": True, "updated": info is not None}
        if info is not None:
            payload["path"] = str(info.path)
            payload["version"] = info.version
        click.echo(json.dumps(payload, indent=2))
        return

    if info is None:
        click.secho(f"✅ {settings.package_name} is up to date", fg="green")
        return

    version_label = f" {info.version}" if info.version else ""
    click.secho(f"✅ {settings.package_name} installed{version_label}", fg="green", bold=True)
    if not ctx.obj.get("quiet"):
        click.echo(f"   → {info.path}")


@cli.command()
@click.option("--install-dir", type=click.Path(path_type=Path), default=None,
              help="Installer directory (default: from config).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, install_dir: Path | None, as_json: bool) -> None:
    """Show the installed version and health of the installer."""
    try:
        settings = _load(ctx, install_dir=install_dir)
    except ConfigurationError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    host = _build_host(settings)
    info = host.query_installed_info()
    health = host.query_health(info) if info is not None else None

    if as_json:
        payload: dict = {
            "package_name": settings.package_name,
            "installed": info is not None,
        }
        if info is not None and health is not None:
            payload.update({
                "path": str(info.path),
                "version": info.version,
                "healthy": health.is_healthy,
                "missing_files": health.missing_files,
            })
        click.echo(json.dumps(payload, indent=2))
        return

    click.secho(f"\n📦 {settings.package_name}", fg="cyan", bold=True)
    if info is None or health is None:
        click.secho(f"   ✗ not installed  → {settings.install_dir}", fg="yellow")
        click.echo()
        return

    click.echo(f"   Path:    {info.path}")
    click.echo(f"   Version: {info.version or 'unknown'}")
    if health.is_healthy:
        click.secho("   Health:  ✓ healthy", fg="green")
    else:
        click.secho("   Health:  ✗ broken", fg="red")
        for rel in health.missing_files:
            click.echo(f"     • missing {rel}")
    click.echo()


@cli.group()
def config() -> None:
    """Installer configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate installer.yml."""
    try:
        settings = _load(ctx)
    except ConfigurationError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho("❌ Configuration errors:", fg="red", bold=True)
            click.echo(f"   • {e}")
        sys.exit(1)

    warnings = []
    if not settings.url:
        warnings.append("No bootstrapper url configured; only bootstrapperPath installs will work")
    if settings.url and not settings.checksum:
        warnings.append("No checksum configured; downloads will not be verified")

    if as_json:
        click.echo(json.dumps({
            "valid": True,
            "settings": settings.model_dump(mode="json"),
            "warnings": warnings,
        }, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   Package:     {settings.package_name}")
    click.echo(f"   Install dir: {settings.install_dir}")
    click.echo(f"   Required:    {settings.required_version or '(any)'}")
    if warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in warnings:
            click.echo(f"   • {warn}")
    click.echo()


if __name__ == "__main__":
    cli()
