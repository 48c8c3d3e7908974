"""
Terminal rendering for the setup command.

All colour goes through ``click.style`` so ``ctx.color`` (NO_COLOR,
non-TTY output) decides whether escape codes are emitted.
"""

from __future__ import annotations

import click

from tfsetup.core.models.tool import ToolSpec, ToolState, ToolStatus
from tfsetup.core.services.tool_install.orchestration.orchestrator import SetupReport


def step(message: str) -> None:
    """Section heading: ``==> message``."""
    click.echo()
    click.secho(f"==> {message}", fg="cyan", bold=True)


def info(message: str) -> None:
    click.echo(f"{click.style('[INFO]', fg='blue')} {message}")


def warn(message: str) -> None:
    click.echo(f"{click.style('[WARN]', fg='yellow')} {message}")


def error(message: str) -> None:
    click.echo(f"{click.style('[ERR]', fg='red')}  {message}", err=True)


def success(message: str) -> None:
    click.echo(f"{click.style('[OK]', fg='green')}   {message}")


def status_line(spec: ToolSpec, status: ToolStatus) -> str:
    """One row of the status table."""
    name = f"{spec.name:<14}"
    state = status.state

    if state is ToolState.OK:
        return f"  {click.style('✓', fg='green')} {name} {status.version}"
    if state is ToolState.BELOW_RECOMMENDED:
        hint = click.style(f"(recommend >= {spec.recommended_version})", dim=True)
        return f"  {click.style('~', fg='yellow')} {name} {status.version} {hint}"
    if state is ToolState.OUTDATED:
        hint = click.style(f"(need >= {spec.min_version})", fg="red")
        return f"  {click.style('✗', fg='red')} {name} {status.version} {hint}"
    if state is ToolState.MISSING:
        return f"  {click.style('✗', fg='red')} {name} {click.style('not installed', fg='red')}"
    return (
        f"  {click.style('?', fg='yellow')} {name} "
        f"{click.style('installed (version unknown)', fg='yellow')}"
    )


def print_pending(statuses: list[ToolStatus]) -> None:
    """List the tools about to be installed or upgraded."""
    click.echo()
    info("The following tools need to be installed or updated:")
    for status in statuses:
        if status.state is ToolState.MISSING:
            detail = "(not installed)"
        else:
            detail = f"(current: {status.version})"
        click.echo(f"  {click.style('•', fg='yellow')} {status.tool} {click.style(detail, dim=True)}")
    click.echo()


def print_summary(report: SetupReport) -> None:
    """Final status table, install problems and verdict."""
    step("Summary")
    for name, status in report.final.items():
        click.echo(status_line(report.specs[name], status))
    click.echo()

    if report.failures:
        warn("Some installations had issues:")
        for outcome in report.failures:
            label = click.style("•", fg="red")
            click.echo(f"  {label} {outcome.tool} ({outcome.failure}): {outcome.message}")
        click.echo()

    for outcome in report.outcomes:
        if outcome.install_dir and not outcome.on_path:
            warn(f"{outcome.tool} installed to {outcome.install_dir}")
            warn(f"Make sure {outcome.install_dir} is in your PATH:")
            warn(f'  export PATH="{outcome.install_dir}:$PATH"')

    if report.all_satisfied:
        success("All required tools are installed and meet minimum version requirements.")
    else:
        warn("Some tools need attention. Run 'tfsetup' to install missing tools.")
