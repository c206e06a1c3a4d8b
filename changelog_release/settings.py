"""
Changelog Release Settings Management

This module handles loading and merging options from .changelog-release
settings files across different scopes (user, project, local).

Scope priority (highest to lowest):
1. Local (.changelog-release/settings.local.yaml)
2. Project (.changelog-release/settings.yaml)
3. User (~/.changelog-release/settings.yaml)

Files ending in ``.json`` are read as JSON, anything else as YAML.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from changelog_release.config import (
    DEFAULT_FILENAME,
    DEFAULT_HEAD,
    DEFAULT_VERSION_URL_FORMATS,
    VERSION_URL_FORMAT_KEYS,
)
from changelog_release.paths import (
    get_local_settings_path,
    get_project_settings_path,
    get_user_settings_path,
)

logger = logging.getLogger(__name__)

# Default settings template (file keys)
DEFAULT_SETTINGS: dict[str, Any] = {
    "filename": DEFAULT_FILENAME,
    "strictLatest": True,
    "addUnreleased": False,
    "keepUnreleased": False,
    "addVersionUrl": False,
    "head": DEFAULT_HEAD,
    "versionUrlFormats": dict(DEFAULT_VERSION_URL_FORMATS),
}


def load_settings(path: Path) -> dict[str, Any]:
    """
    Load settings from a YAML or JSON file.

    Args:
        path: Path to the settings file.

    Returns:
        Parsed settings dict, or empty dict if file doesn't exist or is invalid.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, OSError) as e:
        logger.warning(f"Failed to load settings from {path}: {e}")
        return {}

    if isinstance(data, dict):
        return dict(data)
    if data is not None:
        logger.warning(f"Ignoring settings in {path}: expected a mapping")
    return {}


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge two settings dicts, with override taking precedence.

    Dict values (versionUrlFormats) are merged key by key; any other
    value is replaced.

    Args:
        base: Base settings (lower priority).
        override: Override settings (higher priority).

    Returns:
        Merged settings dict.
    """
    result: dict[str, Any] = {}

    for key in set(base.keys()) | set(override.keys()):
        base_value = base.get(key)
        override_value = override.get(key)

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = {**base_value, **override_value}
        elif key in override:
            result[key] = override_value
        else:
            result[key] = base_value

    return result


def _typed_setting(data: dict[str, Any], key: str, expected: type, default: Any) -> Any:
    """Return ``data[key]`` if it has the expected type, else *default*.

    Missing and null values fall back silently; values of the wrong type
    (such as the string ``"false"`` for a boolean) log a warning first.
    """
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, expected):
        logger.warning(
            f"Ignoring setting '{key}': expected {expected.__name__}, "
            f"got {type(value).__name__}"
        )
        return default
    return value


@dataclass
class ChangelogOptions:
    """
    Changelog release options.

    Attributes mirror the settings file keys in snake_case.
    """

    filename: str = DEFAULT_FILENAME
    strict_latest: bool = True
    add_unreleased: bool = False
    keep_unreleased: bool = False
    add_version_url: bool = False
    head: str = DEFAULT_HEAD
    version_url_formats: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_VERSION_URL_FORMATS)
    )

    @classmethod
    def from_defaults(cls) -> "ChangelogOptions":
        """Create options with default values."""
        return cls.from_mapping(DEFAULT_SETTINGS)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "ChangelogOptions":
        """Build options from settings file keys, ignoring unknown ones."""
        for key in set(data) - set(DEFAULT_SETTINGS):
            logger.warning(f"Unknown setting '{key}' ignored")

        formats = _typed_setting(data, "versionUrlFormats", dict, {})
        for key in set(formats) - VERSION_URL_FORMAT_KEYS:
            logger.warning(f"Unknown URL format '{key}' ignored")
        known_formats = {}
        for key in VERSION_URL_FORMAT_KEYS & set(formats):
            if isinstance(formats[key], str):
                known_formats[key] = formats[key]
            else:
                logger.warning(f"URL format '{key}' must be a string, ignored")

        return cls(
            filename=(
                _typed_setting(data, "filename", str, DEFAULT_FILENAME) or DEFAULT_FILENAME
            ),
            strict_latest=_typed_setting(data, "strictLatest", bool, True),
            add_unreleased=_typed_setting(data, "addUnreleased", bool, False),
            keep_unreleased=_typed_setting(data, "keepUnreleased", bool, False),
            add_version_url=_typed_setting(data, "addVersionUrl", bool, False),
            head=_typed_setting(data, "head", str, DEFAULT_HEAD) or DEFAULT_HEAD,
            version_url_formats={**DEFAULT_VERSION_URL_FORMATS, **known_formats},
        )

    @classmethod
    def load(
        cls,
        user_path: Path | None = None,
        project_path: Path | None = None,
        local_path: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> "ChangelogOptions":
        """
        Load and merge options from all scopes.

        Priority (highest to lowest):
        1. Explicit overrides (e.g. command-line flags)
        2. Local settings
        3. Project settings
        4. User settings
        5. Default settings

        Args:
            user_path: Path to user settings (default: ~/.changelog-release/settings.yaml)
            project_path: Path to project settings (default: ./.changelog-release/settings.yaml)
            local_path: Path to local settings (default: ./.changelog-release/settings.local.yaml)
            overrides: Settings file keys that win over every file.

        Returns:
            Merged ChangelogOptions instance.
        """
        if user_path is None:
            user_path = get_user_settings_path()
        if project_path is None:
            project_path = get_project_settings_path()
        if local_path is None:
            local_path = get_local_settings_path()

        merged = dict(DEFAULT_SETTINGS)

        for scope, path in (
            ("user", user_path),
            ("project", project_path),
            ("local", local_path),
        ):
            scope_settings = load_settings(path)
            if scope_settings:
                merged = merge_settings(merged, scope_settings)
                logger.debug(f"Loaded {scope} settings from {path}")

        if overrides:
            merged = merge_settings(merged, overrides)

        return cls.from_mapping(merged)

    def has_custom_repository_url(self) -> bool:
        return (
            self.version_url_formats.get("repositoryUrl")
            != DEFAULT_VERSION_URL_FORMATS["repositoryUrl"]
        )
