"""Command line interface for hostgrants."""

from __future__ import annotations

import asyncio
import json
import sys
from enum import IntEnum
from pathlib import Path

import click

from ..config.settings import ConfigError, load_settings
from ..core.config import load_profile_options
from ..core.host import HostPermissionQueryFailed, InMemoryPermissionHost, PermissionStore
from ..core.policy import get_missing_permissions_for_options, has_required_permissions_for_options
from ..core.requirements import get_required_permissions_for_field_value
from ..observability import configure_loguru, get_logger
from ..permissions import describe

__all__ = ["ExitCode", "cli", "main"]

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

log = get_logger("cli")


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0
    INSUFFICIENT = 1  # Held permissions do not cover the options
    HOST_ERROR = 5  # Host failed to report its permissions
    CONFIG_ERROR = 6


@click.group(context_settings=CONTEXT_SETTINGS, help="Check optional host permissions against profile options")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override HOSTGRANTS_LOG_LEVEL",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Root command."""
    try:
        settings = load_settings()
        if log_level:
            settings.log_level = log_level.upper()
    except ConfigError as exc:
        click.echo(f"❌ {exc}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    configure_loguru(log_dir=settings.log_dir, level=settings.log_level)
    ctx.obj = settings


@cli.command("check")
@click.argument("options_file", required=False, type=click.Path(path_type=Path))
@click.option("--grant", "-g", "grants", multiple=True, help="Permission held by the host (repeatable)")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON")
@click.pass_obj
def check_command(settings, options_file: Path | None, grants: tuple[str, ...], json_output: bool) -> None:
    """Check whether granted permissions cover OPTIONS_FILE.

    Examples:
        hostgrants check profile.yaml --grant clipboardRead
    """
    options_path = options_file or settings.options_path

    try:
        options = load_profile_options(options_path)
    except ConfigError as exc:
        click.echo(f"❌ {exc}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    store = PermissionStore(InMemoryPermissionHost(grants or settings.granted))

    try:
        permissions = asyncio.run(store.get_all_permissions())
    except HostPermissionQueryFailed as exc:
        click.echo(f"❌ {exc}", err=True)
        sys.exit(ExitCode.HOST_ERROR)

    sufficient = has_required_permissions_for_options(permissions, options)
    missing = get_missing_permissions_for_options(permissions, options)
    log.info(f"Permission check for {options_path or 'defaults'}: sufficient={sufficient}")

    if json_output:
        payload = {
            "sufficient": sufficient,
            "granted": sorted(permissions.permissions),
            "missing": [
                {"permission": violation.permission, "reason": violation.reason, **violation.context}
                for violation in missing
            ],
        }
        click.echo(json.dumps(payload, indent=2))
    elif sufficient:
        click.echo("✅ Granted permissions cover every enabled feature")
    else:
        click.echo("❌ Missing permissions:")
        for violation in missing:
            click.echo(f"  - {violation.permission}: {violation.reason}")

    sys.exit(ExitCode.SUCCESS if sufficient else ExitCode.INSUFFICIENT)


@cli.command("requirements")
@click.argument("template")
def requirements_command(template: str) -> None:
    """Print the permissions needed to evaluate a field TEMPLATE."""
    required = get_required_permissions_for_field_value(template)

    if not required:
        click.echo("No permissions required")
        return

    for permission in required:
        click.echo(f"{permission}: {describe(permission)}")


def main(argv: list[str] | None = None) -> int:
    try:
        cli.main(args=argv, prog_name="hostgrants", standalone_mode=False)
    except SystemExit as exc:
        return int(exc.code or 0)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
