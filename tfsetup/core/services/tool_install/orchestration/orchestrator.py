"""
L5 Orchestration — The setup run.

States::

    Start → Checking → (AllOk | NeedsInstall) → [Confirming]
          → Installing → Rechecking → Summarizing → End

``check`` mode and "nothing to do" jump straight to Summarizing.
Confirming only happens in ``interactive`` mode. Installs run in
catalogue order and one failure never stops the next tool.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from tfsetup.core.models.settings import SetupSettings
from tfsetup.core.models.tool import (
    FailureKind,
    InstallOutcome,
    PlatformInfo,
    ToolSpec,
    ToolState,
    ToolStatus,
)
from tfsetup.core.services.tool_install.data.tools import TOOL_SPECS
from tfsetup.core.services.tool_install.detection.platform import detect_platform
from tfsetup.core.services.tool_install.detection.remote_version import (
    resolve_install_version,
)
from tfsetup.core.services.tool_install.detection.tool_version import check_all_tools
from tfsetup.core.services.tool_install.domain.overrides import apply_overrides
from tfsetup.core.services.tool_install.execution.installer import install_tool

logger = logging.getLogger(__name__)


class RunMode(StrEnum):
    """How the run treats pending installs."""

    INTERACTIVE = "interactive"  # ask before installing
    AUTO = "auto"  # install without asking
    CHECK = "check"  # never install


ConfirmFn = Callable[[list[ToolStatus]], bool]
StepFn = Callable[[str], None]


@dataclass
class SetupReport:
    """Everything a setup run found and did."""

    mode: RunMode
    platform: PlatformInfo
    specs: dict[str, ToolSpec] = field(default_factory=dict)
    initial: dict[str, ToolStatus] = field(default_factory=dict)
    pending: list[str] = field(default_factory=list)
    outcomes: list[InstallOutcome] = field(default_factory=list)
    final: dict[str, ToolStatus] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def failures(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def all_satisfied(self) -> bool:
        """True when no tool is missing or below its minimum."""
        return not any(s.needs_install for s in self.final.values())

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""

        def _statuses(statuses: dict[str, ToolStatus]) -> dict[str, dict]:
            return {name: s.model_dump(mode="json") for name, s in statuses.items()}

        return {
            "mode": str(self.mode),
            "platform": self.platform.model_dump(),
            "tools": {
                name: {
                    "min_version": spec.min_version,
                    "recommended_version": spec.recommended_version,
                }
                for name, spec in self.specs.items()
            },
            "initial": _statuses(self.initial),
            "pending": list(self.pending),
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
            "final": _statuses(self.final),
            "cancelled": self.cancelled,
            "all_satisfied": self.all_satisfied,
            "exit_code": self.exit_code,
        }


def managed_tools(settings: SetupSettings) -> dict[str, ToolSpec]:
    """The tool catalogue with any configured version pins applied."""
    return apply_overrides(TOOL_SPECS, settings.tools)


def _verify(outcome: InstallOutcome, status: ToolStatus, spec: ToolSpec) -> InstallOutcome:
    """Downgrade a reported success that the recheck doesn't confirm."""
    if not outcome.ok or not status.needs_install:
        return outcome

    if status.state is ToolState.MISSING:
        where = outcome.install_dir or "the install directory"
        message = f"{spec.label} was installed to {where} but is not on PATH"
    else:
        message = (
            f"{spec.label} still reports {status.version} after install "
            f"(need >= {spec.min_version})"
        )
    return outcome.model_copy(
        update={"ok": False, "failure": FailureKind.VERIFY, "message": message},
    )


def run_setup(
    settings: SetupSettings | None = None,
    *,
    mode: RunMode = RunMode.INTERACTIVE,
    platform: PlatformInfo | None = None,
    confirm: ConfirmFn | None = None,
    on_step: StepFn | None = None,
) -> SetupReport:
    """Check, install and re-check every managed tool.

    Args:
        settings: Run settings; defaults when omitted.
        mode: Interactive, auto or check-only.
        platform: Pre-resolved platform; detected when omitted.
        confirm: Called with the pending statuses in interactive mode;
            returning False cancels the run.
        on_step: Receives short progress messages for display.

    Returns:
        The ``SetupReport`` for the run.

    Raises:
        UnsupportedPlatformError: Host OS/arch is not supported.
        ValueError: Interactive mode without a ``confirm`` callback, or
            invalid version pins in ``settings``.
    """
    settings = settings or SetupSettings()
    step = on_step or (lambda _msg: None)

    if mode is RunMode.INTERACTIVE and confirm is None:
        raise ValueError("interactive mode needs a confirm callback")

    platform = platform or detect_platform()
    specs = managed_tools(settings)

    # ── Checking ────────────────────────────────────────────────
    initial = check_all_tools(specs, timeout=settings.probe_timeout)
    report = SetupReport(
        mode=mode,
        platform=platform,
        specs=specs,
        initial=initial,
        final=initial,
    )

    if mode is RunMode.CHECK:
        return report

    report.pending = [name for name, status in initial.items() if status.needs_install]
    if not report.pending:
        return report

    # ── Confirming ──────────────────────────────────────────────
    if mode is RunMode.INTERACTIVE:
        assert confirm is not None  # guaranteed by the check above
        if not confirm([initial[name] for name in report.pending]):
            logger.info("Installation cancelled by user")
            report.cancelled = True
            return report

    # ── Installing ──────────────────────────────────────────────
    for name in report.pending:
        spec = specs[name]
        step(f"Installing {spec.label}")
        version, source = resolve_install_version(spec, timeout=settings.metadata_timeout)
        if source == "fallback":
            step(f"Could not fetch latest version, using fallback: {version}")
        else:
            step(f"Latest stable version: {version}")

        outcome = install_tool(spec, platform, version, settings=settings)
        if not outcome.ok:
            logger.warning("%s install failed (%s): %s", name, outcome.failure, outcome.message)
        report.outcomes.append(outcome)

    # ── Rechecking ──────────────────────────────────────────────
    report.final = check_all_tools(specs, timeout=settings.probe_timeout)
    report.outcomes = [
        _verify(o, report.final[o.tool], specs[o.tool]) for o in report.outcomes
    ]
    return report
