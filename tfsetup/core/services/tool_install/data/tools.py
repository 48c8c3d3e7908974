"""
L0 Data — Managed tool catalogue.

One ``ToolSpec`` per tool. Dict order is the install order.

Minimum versions come from the plugin manifest. Fallback versions are
used when the release feeds can't be reached (rate limits, offline);
they go stale and must be bumped by hand.
"""

from __future__ import annotations

from tfsetup.core.models.tool import (
    ArtifactKind,
    ReleaseFeed,
    ToolSpec,
    VersionProbe,
)
from tfsetup.core.services.tool_install.data.constants import (
    GITHUB_LATEST_RELEASE,
    HASHICORP_CHECKPOINT,
)

TERRAFORM = ToolSpec(
    name="terraform",
    display_name="Terraform",
    min_version="0.13.0",
    recommended_version="1.6.0",
    fallback_version="1.11.4",
    version_probes=(
        VersionProbe(args=("version", "-json"), json_field="terraform_version"),
        VersionProbe(args=("version",)),
    ),
    release_feeds=(
        ReleaseFeed(
            url=HASHICORP_CHECKPOINT.format(product="terraform"),
            field="current_version",
        ),
        ReleaseFeed(
            url=GITHUB_LATEST_RELEASE.format(repo="hashicorp/terraform"),
            field="tag_name",
        ),
    ),
    download_url=(
        "https://releases.hashicorp.com/terraform/{version}/"
        "terraform_{version}_{os}_{arch}.zip"
    ),
    artifact=ArtifactKind.ZIP,
    brew_tap="hashicorp/tap",
    brew_formula="hashicorp/tap/terraform",
)

TERRAGRUNT = ToolSpec(
    name="terragrunt",
    display_name="Terragrunt",
    min_version="0.38.0",
    fallback_version="0.77.20",
    version_probes=(VersionProbe(args=("--version",)),),
    release_feeds=(
        ReleaseFeed(
            url=GITHUB_LATEST_RELEASE.format(repo="gruntwork-io/terragrunt"),
            field="tag_name",
        ),
    ),
    download_url=(
        "https://github.com/gruntwork-io/terragrunt/releases/download/"
        "v{version}/terragrunt_{os}_{arch}"
    ),
    artifact=ArtifactKind.BINARY,
    brew_formula="terragrunt",
)

TOOL_SPECS: dict[str, ToolSpec] = {
    TERRAFORM.name: TERRAFORM,
    TERRAGRUNT.name: TERRAGRUNT,
}
