"""
Tool Install — the setup run (check → confirm → install → recheck).

Detection and installation are patched at the orchestrator's import
sites; every test drives ``run_setup`` through one full path.
"""

from __future__ import annotations

import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from tfsetup.core.models import (
    FailureKind,
    InstallOutcome,
    PlatformInfo,
    SetupSettings,
    ToolOverrides,
    ToolState,
    ToolStatus,
)
from tfsetup.core.services.tool_install.orchestration.orchestrator import (
    RunMode,
    managed_tools,
    run_setup,
)

_ORCH = "tfsetup.core.services.tool_install.orchestration.orchestrator"
_URLOPEN = "tfsetup.core.services.tool_install.detection.remote_version.urllib.request.urlopen"

LINUX = PlatformInfo(os="linux", arch="amd64")


def _statuses(terraform: tuple[ToolState, str], terragrunt: tuple[ToolState, str]):
    return {
        "terraform": ToolStatus(tool="terraform", state=terraform[0], version=terraform[1]),
        "terragrunt": ToolStatus(tool="terragrunt", state=terragrunt[0], version=terragrunt[1]),
    }


ALL_OK = _statuses((ToolState.OK, "1.11.4"), (ToolState.OK, "0.77.20"))
ALL_MISSING = _statuses((ToolState.MISSING, ""), (ToolState.MISSING, ""))
TG_OUTDATED = _statuses((ToolState.OK, "1.11.4"), (ToolState.OUTDATED, "0.30.0"))


def _ok(spec, platform, version, *, settings=None):
    return InstallOutcome(
        tool=spec.name, ok=True, version=version, method="binary",
        install_dir=settings.system_bin_dir if settings else None,
    )


def _run(initial, final=None, *, mode=RunMode.AUTO, confirm=None, install=_ok,
         version=("9.9.9", "latest"), settings=None, on_step=None):
    checks = [initial] if final is None else [initial, final]
    with patch(f"{_ORCH}.check_all_tools", side_effect=checks) as mock_check, \
         patch(f"{_ORCH}.install_tool", side_effect=install) as mock_install, \
         patch(f"{_ORCH}.resolve_install_version", return_value=version):
        report = run_setup(
            settings or SetupSettings(),
            mode=mode,
            platform=LINUX,
            confirm=confirm,
            on_step=on_step,
        )
    return report, mock_check, mock_install


class TestCheckMode:
    def test_reports_without_installing(self):
        report, mock_check, mock_install = _run(ALL_MISSING, mode=RunMode.CHECK)
        assert report.exit_code == 0
        assert not report.all_satisfied
        assert report.outcomes == []
        assert report.final == ALL_MISSING
        mock_check.assert_called_once()
        mock_install.assert_not_called()

    def test_all_ok(self):
        report, _, _ = _run(ALL_OK, mode=RunMode.CHECK)
        assert report.all_satisfied
        assert report.exit_code == 0


class TestNothingToDo:
    def test_all_ok_skips_confirm_and_install(self):
        confirm = MagicMock()
        report, mock_check, mock_install = _run(ALL_OK, mode=RunMode.INTERACTIVE, confirm=confirm)
        assert report.pending == []
        assert report.exit_code == 0
        confirm.assert_not_called()
        mock_install.assert_not_called()
        mock_check.assert_called_once()

    def test_below_recommended_is_not_pending(self):
        initial = _statuses((ToolState.BELOW_RECOMMENDED, "1.5.7"), (ToolState.UNKNOWN, ""))
        report, _, mock_install = _run(initial)
        assert report.pending == []
        assert report.all_satisfied
        mock_install.assert_not_called()


class TestAutoMode:
    def test_installs_only_pending_tool(self):
        report, mock_check, mock_install = _run(TG_OUTDATED, ALL_OK)
        assert report.pending == ["terragrunt"]
        assert mock_install.call_count == 1
        assert mock_install.call_args[0][0].name == "terragrunt"
        assert mock_install.call_args[0][2] == "9.9.9"
        assert mock_check.call_count == 2
        assert report.exit_code == 0
        assert report.all_satisfied

    def test_install_order_is_fixed(self):
        report, _, mock_install = _run(ALL_MISSING, ALL_OK)
        assert [c[0][0].name for c in mock_install.call_args_list] == ["terraform", "terragrunt"]
        assert [o.tool for o in report.outcomes] == ["terraform", "terragrunt"]

    def test_one_failure_does_not_block_the_next(self):
        def _install(spec, platform, version, *, settings=None):
            if spec.name == "terraform":
                return InstallOutcome.failed(spec.name, FailureKind.DOWNLOAD, "HTTP 404")
            return _ok(spec, platform, version, settings=settings)

        final = _statuses((ToolState.MISSING, ""), (ToolState.OK, "9.9.9"))
        report, _, mock_install = _run(ALL_MISSING, final, install=_install)

        assert mock_install.call_count == 2
        assert report.exit_code == 1
        assert [o.tool for o in report.failures] == ["terraform"]
        assert report.failures[0].failure is FailureKind.DOWNLOAD

    def test_step_messages(self):
        steps: list[str] = []
        _run(TG_OUTDATED, ALL_OK, on_step=steps.append)
        assert steps == ["Installing Terragrunt", "Latest stable version: 9.9.9"]

    def test_fallback_step_message(self):
        steps: list[str] = []
        _run(TG_OUTDATED, ALL_OK, on_step=steps.append, version=("0.77.20", "fallback"))
        assert steps[-1] == "Could not fetch latest version, using fallback: 0.77.20"


class TestRecheck:
    def test_still_outdated_is_verify_failure(self):
        report, _, _ = _run(TG_OUTDATED, TG_OUTDATED)
        assert report.exit_code == 1
        failure = report.failures[0]
        assert failure.failure is FailureKind.VERIFY
        assert "still reports 0.30.0" in failure.message

    def test_missing_after_install_is_not_on_path(self, settings):
        final = _statuses((ToolState.OK, "1.11.4"), (ToolState.MISSING, ""))
        report, _, _ = _run(TG_OUTDATED, final, settings=settings)
        failure = report.failures[0]
        assert failure.failure is FailureKind.VERIFY
        assert "not on PATH" in failure.message
        assert str(settings.system_bin_dir) in failure.message

    def test_unknown_after_install_is_accepted(self):
        final = _statuses((ToolState.OK, "1.11.4"), (ToolState.UNKNOWN, ""))
        report, _, _ = _run(TG_OUTDATED, final)
        assert report.exit_code == 0


class TestInteractive:
    def test_confirm_receives_pending_statuses(self):
        confirm = MagicMock(return_value=True)
        _run(ALL_MISSING, ALL_OK, mode=RunMode.INTERACTIVE, confirm=confirm)
        (pending,), _ = confirm.call_args
        assert [s.tool for s in pending] == ["terraform", "terragrunt"]

    def test_declined(self):
        report, mock_check, mock_install = _run(
            ALL_MISSING, mode=RunMode.INTERACTIVE, confirm=lambda _p: False,
        )
        assert report.cancelled
        assert report.exit_code == 0
        assert report.outcomes == []
        mock_install.assert_not_called()
        mock_check.assert_called_once()

    def test_accepted(self):
        report, _, mock_install = _run(
            ALL_MISSING, ALL_OK, mode=RunMode.INTERACTIVE, confirm=lambda _p: True,
        )
        assert not report.cancelled
        assert mock_install.call_count == 2

    def test_requires_confirm_callback(self):
        with pytest.raises(ValueError, match="confirm"):
            run_setup(SetupSettings(), mode=RunMode.INTERACTIVE, platform=LINUX)


class TestVersionResolution:
    def test_uses_fallback_when_feeds_unreachable(self):
        with patch(f"{_ORCH}.check_all_tools", side_effect=[TG_OUTDATED, ALL_OK]), \
             patch(f"{_ORCH}.install_tool", side_effect=_ok) as mock_install, \
             patch(_URLOPEN, side_effect=urllib.error.URLError("timed out")):
            report = run_setup(SetupSettings(), mode=RunMode.AUTO, platform=LINUX)

        assert mock_install.call_args[0][2] == "0.77.20"
        assert report.outcomes[0].version == "0.77.20"

    def test_configured_fallback_pin(self):
        settings = SetupSettings(tools={"terragrunt": ToolOverrides(fallback_version="0.80.0")})
        with patch(f"{_ORCH}.check_all_tools", side_effect=[TG_OUTDATED, ALL_OK]), \
             patch(f"{_ORCH}.install_tool", side_effect=_ok) as mock_install, \
             patch(_URLOPEN, side_effect=urllib.error.URLError("timed out")):
            run_setup(settings, mode=RunMode.AUTO, platform=LINUX)
        assert mock_install.call_args[0][2] == "0.80.0"


class TestManagedTools:
    def test_defaults(self):
        specs = managed_tools(SetupSettings())
        assert list(specs) == ["terraform", "terragrunt"]
        assert specs["terraform"].min_version == "0.13.0"

    def test_overrides_applied(self):
        specs = managed_tools(SetupSettings(tools={"terraform": ToolOverrides(min_version="1.5.0")}))
        assert specs["terraform"].min_version == "1.5.0"
        assert specs["terragrunt"].min_version == "0.38.0"

    def test_unknown_tool_rejected(self):
        with pytest.raises(ValueError):
            managed_tools(SetupSettings(tools={"tofu": ToolOverrides(min_version="1.0")}))


class TestReport:
    def test_to_dict_is_json(self):
        def _install(spec, platform, version, *, settings=None):
            return InstallOutcome.failed(spec.name, FailureKind.PERMISSION, "denied")

        report, _, _ = _run(TG_OUTDATED, TG_OUTDATED, install=_install)
        data = json.loads(json.dumps(report.to_dict()))

        assert data["mode"] == "auto"
        assert data["platform"] == {"os": "linux", "arch": "amd64"}
        assert data["pending"] == ["terragrunt"]
        assert data["outcomes"][0]["failure"] == "permission"
        assert data["final"]["terragrunt"]["state"] == "outdated"
        assert data["exit_code"] == 1
        assert data["tools"]["terraform"]["recommended_version"] == "1.6.0"
