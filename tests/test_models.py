"""
Tests for Pydantic models — validation, immutability and the tool catalogue.
"""

import pytest
from pydantic import ValidationError

from tfsetup.core.models import (
    ArtifactKind,
    FailureKind,
    InstallOutcome,
    PlatformInfo,
    SetupSettings,
    ToolSpec,
    ToolState,
    ToolStatus,
)
from tfsetup.core.services.tool_install.data.tools import TOOL_SPECS
from tfsetup.core.services.tool_install.domain.version_compare import version_gte


def _spec(**kwargs) -> ToolSpec:
    fields = {
        "name": "faketool",
        "min_version": "1.0.0",
        "fallback_version": "1.2.0",
        "download_url": "https://example.invalid/{version}/faketool_{os}_{arch}",
    }
    fields.update(kwargs)
    return ToolSpec(**fields)


class TestToolSpec:
    def test_minimal(self):
        spec = _spec()
        assert spec.recommended_version is None
        assert spec.artifact is ArtifactKind.BINARY
        assert spec.label == "faketool"

    def test_display_name(self):
        assert _spec(display_name="Fake Tool").label == "Fake Tool"

    @pytest.mark.parametrize("field", ["min_version", "fallback_version", "recommended_version"])
    @pytest.mark.parametrize("bad", ["latest", "v1.0.0", "1.0.0-rc1", "1..0"])
    def test_rejects_non_numeric_versions(self, field, bad):
        with pytest.raises(ValidationError):
            _spec(**{field: bad})

    def test_fallback_required(self):
        with pytest.raises(ValidationError):
            _spec(fallback_version="")

    def test_frozen(self):
        spec = _spec()
        with pytest.raises(ValidationError):
            spec.min_version = "2.0.0"


class TestToolState:
    @pytest.mark.parametrize(
        "state, expected",
        [
            (ToolState.OK, False),
            (ToolState.BELOW_RECOMMENDED, False),
            (ToolState.OUTDATED, True),
            (ToolState.MISSING, True),
            (ToolState.UNKNOWN, False),
        ],
    )
    def test_needs_install(self, state, expected):
        assert state.needs_install is expected
        assert ToolStatus(tool="x", state=state).needs_install is expected


class TestPlatformInfo:
    def test_str(self):
        assert str(PlatformInfo(os="linux", arch="arm64")) == "linux/arm64"

    def test_download_os(self):
        assert PlatformInfo(os="macos", arch="arm64").download_os == "darwin"
        assert PlatformInfo(os="linux", arch="amd64").download_os == "linux"


class TestInstallOutcome:
    def test_failed(self):
        outcome = InstallOutcome.failed("terraform", FailureKind.EXTRACT, "bad zip", version="1.0.0")
        assert not outcome.ok
        assert outcome.failure is FailureKind.EXTRACT
        assert outcome.version == "1.0.0"
        assert outcome.model_dump(mode="json")["failure"] == "extract"


class TestSetupSettings:
    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            SetupSettings(download_timout=5)

    def test_rejects_zero_timeout(self):
        with pytest.raises(ValidationError):
            SetupSettings(metadata_timeout=0)


class TestCatalogue:
    def test_order(self):
        assert list(TOOL_SPECS) == ["terraform", "terragrunt"]

    @pytest.mark.parametrize("name", ["terraform", "terragrunt"])
    def test_consistent(self, name):
        spec = TOOL_SPECS[name]
        assert spec.name == name
        assert version_gte(spec.fallback_version, spec.min_version)
        if spec.recommended_version:
            assert version_gte(spec.recommended_version, spec.min_version)
        assert spec.version_probes
        assert spec.release_feeds
        for token in ("{version}", "{os}", "{arch}"):
            assert token in spec.download_url

    def test_minimums(self):
        assert TOOL_SPECS["terraform"].min_version == "0.13.0"
        assert TOOL_SPECS["terraform"].recommended_version == "1.6.0"
        assert TOOL_SPECS["terragrunt"].min_version == "0.38.0"
        assert TOOL_SPECS["terraform"].artifact is ArtifactKind.ZIP
