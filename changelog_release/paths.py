"""
Centralized path management for changelog-release.

Provides functions to get the settings files of each scope and the
user configuration directory. The user directory can be overridden via
an environment variable.
"""

import os
from pathlib import Path

SETTINGS_DIR_NAME = ".changelog-release"


def _resolve_path(env_var: str, default: Path) -> str:
    """Resolve a path from an environment variable or fall back to a default.

    If the environment variable is set, its value is expanded
    (``~`` and ``$VAR`` substitution) and returned. Otherwise the
    *default* path is returned.

    Args:
        env_var: Name of the environment variable to check.
        default: Default path when the environment variable is unset.

    Returns:
        Resolved path string.
    """
    env_path = os.environ.get(env_var)
    if env_path:
        return str(Path(os.path.expanduser(os.path.expandvars(env_path))))
    return str(default)


def get_config_dir() -> str:
    """Get the user configuration directory.

    Override with CHANGELOG_RELEASE_CONFIG_DIR environment variable.
    """
    return _resolve_path(
        "CHANGELOG_RELEASE_CONFIG_DIR",
        Path.home() / SETTINGS_DIR_NAME,
    )


def get_user_settings_path() -> Path:
    """Get the user-scope settings file."""
    return Path(get_config_dir()) / "settings.yaml"


def get_project_settings_path(cwd: Path | None = None) -> Path:
    """Get the project-scope settings file (shared, checked in)."""
    return (cwd or Path.cwd()) / SETTINGS_DIR_NAME / "settings.yaml"


def get_local_settings_path(cwd: Path | None = None) -> Path:
    """Get the local-scope settings file (per checkout, not checked in)."""
    return (cwd or Path.cwd()) / SETTINGS_DIR_NAME / "settings.local.yaml"
