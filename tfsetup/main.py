"""
tfsetup — CLI entrypoint.

Usage:
    tfsetup              Interactive mode (prompts before install)
    tfsetup --check      Check status only (no installs)
    tfsetup --auto       Non-interactive mode (auto-install, for CI/CD)
    python -m tfsetup.main --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from tfsetup import __version__
from tfsetup.core.config.loader import ConfigError, load_settings
from tfsetup.core.models.tool import ToolStatus
from tfsetup.core.observability.logging_config import configure_from_cli
from tfsetup.core.services.tool_install.data.tools import TOOL_SPECS
from tfsetup.core.services.tool_install.detection.platform import (
    UnsupportedPlatformError,
    detect_platform,
)
from tfsetup.core.services.tool_install.orchestration.orchestrator import (
    RunMode,
    run_setup,
)
from tfsetup.ui.cli import output


def _epilog() -> str:
    tools = []
    for spec in TOOL_SPECS.values():
        line = f"  {spec.name:<12}>= {spec.min_version}"
        if spec.recommended_version:
            line += f" (recommended >= {spec.recommended_version})"
        tools.append(line)
    return "\n".join([
        "\b",
        "Tools managed:",
        *tools,
        "",
        "\b",
        "Environment:",
        "  NO_COLOR          Set to disable colored output",
        "  TFSETUP_CONFIG    YAML settings file",
        "  TFSETUP_LOG_LEVEL Log level (default: WARNING)",
        "  TFSETUP_LOG_FILE  Also log to this file",
    ])


def _confirm(pending: list[ToolStatus]) -> bool:
    """Interactive yes/no before installing; EOF or Ctrl-C means no."""
    output.print_pending(pending)
    try:
        return click.confirm(click.style("Proceed with installation?", bold=True), default=True)
    except click.Abort:
        click.echo()
        return False


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_epilog(),
)
@click.version_option(version=__version__, prog_name="tfsetup")
@click.option("--check", "check_only", is_flag=True, help="Check tool status only (no installations).")
@click.option("--auto", is_flag=True, help="Non-interactive mode (auto-install, for CI/CD).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the run report as JSON.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML settings file (default: $TFSETUP_CONFIG).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(
    ctx: click.Context,
    check_only: bool,
    auto: bool,
    as_json: bool,
    config_path: Path | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Detect and install the Terraform toolchain (terraform, terragrunt)."""
    # https://no-color.org/
    if os.environ.get("NO_COLOR"):
        ctx.color = False

    if check_only and auto:
        raise click.UsageError("--check and --auto are mutually exclusive.")
    if as_json and not (check_only or auto):
        raise click.UsageError("--json needs --check or --auto (no prompts in JSON mode).")

    configure_from_cli(debug=debug, verbose=verbose, quiet=quiet)

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        output.error(str(e))
        sys.exit(1)

    if check_only:
        mode = RunMode.CHECK
    elif auto:
        mode = RunMode.AUTO
    else:
        mode = RunMode.INTERACTIVE

    chatty = not (as_json or quiet)
    if chatty:
        click.secho(f"Terraform & Terragrunt toolchain setup v{__version__}", bold=True)

    try:
        platform = detect_platform()
    except UnsupportedPlatformError as e:
        output.error(str(e))
        sys.exit(1)

    if chatty:
        output.info(f"Platform: {platform}")
        output.step("Checking installed tools")

    report = run_setup(
        settings,
        mode=mode,
        platform=platform,
        confirm=_confirm if mode is RunMode.INTERACTIVE else None,
        on_step=output.info if chatty else None,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif report.cancelled:
        output.info("Installation cancelled.")
    else:
        output.print_summary(report)

    if report.exit_code:
        sys.exit(report.exit_code)


if __name__ == "__main__":
    cli()
