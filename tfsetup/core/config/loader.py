"""
Configuration loader — reads an optional YAML file into SetupSettings.

Resolution order:
    --config PATH  >  $TFSETUP_CONFIG  >  built-in defaults

The YAML may wrap everything under a ``tfsetup`` key or be flat::

    download_timeout: 300
    user_bin_dir: ~/bin
    tools:
      terraform:
        min_version: "1.5.0"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from tfsetup.core.models.settings import SetupSettings
from tfsetup.core.services.tool_install.data.tools import TOOL_SPECS
from tfsetup.core.services.tool_install.domain.overrides import apply_overrides

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TFSETUP_CONFIG"


class ConfigError(Exception):
    """Raised when the config file is invalid or missing."""


def resolve_config_path(path: Path | None = None) -> Path | None:
    """Explicit path wins; otherwise ``$TFSETUP_CONFIG``; otherwise None."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(env_path).expanduser() if env_path else None


def load_settings(path: Path | None = None) -> SetupSettings:
    """Load and validate settings.

    Args:
        path: Explicit config path. If None, ``$TFSETUP_CONFIG`` is used,
            and with neither the defaults are returned.

    Returns:
        Validated SetupSettings.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    path = resolve_config_path(path)
    if path is None:
        return SetupSettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if "tfsetup" in data:
        data = data["tfsetup"] or {}

    try:
        settings = SetupSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}:\n{e}") from e

    try:
        apply_overrides(TOOL_SPECS, settings.tools)
    except ValueError as e:
        raise ConfigError(f"Invalid tool pins in {path}: {e}") from e

    # Paths from YAML may use ~
    return settings.model_copy(
        update={
            "user_bin_dir": settings.user_bin_dir.expanduser(),
            "system_bin_dir": settings.system_bin_dir.expanduser(),
            "work_dir": settings.work_dir.expanduser() if settings.work_dir else None,
        }
    )
