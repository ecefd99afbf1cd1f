"""XDG-compliant path management for ironbin.

This module provides standardized paths following the XDG Base Directory
Specification for the home trash and the configuration.

XDG defaults:
- Data: ~/.local/share/ (home trash in ~/.local/share/Trash/)
- Config: ~/.config/ironbin/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "ironbin"

# Name of the home trash under the data home
TRASH_DIR_NAME = "Trash"


def _get_xdg_home(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Relative values are ignored, as the XDG specification requires.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_DATA_HOME").
        default_subdir: Default subdirectory under home (e.g., ".local/share").

    Returns:
        Path to the base directory.
    """
    base = os.environ.get(env_var)
    if base and Path(base).is_absolute():
        return Path(base)
    return Path.home() / default_subdir


def get_data_home() -> Path:
    """Get the XDG data home.

    Returns:
        Path to ~/.local/share/ (or XDG_DATA_HOME).
    """
    return _get_xdg_home("XDG_DATA_HOME", ".local/share")


def get_default_trash_dir() -> Path:
    """Get the base directory of the home trash.

    Returns:
        Path to ~/.local/share/Trash/ (or XDG_DATA_HOME/Trash/).
    """
    return get_data_home() / TRASH_DIR_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/ironbin/ (or XDG_CONFIG_HOME/ironbin/).
    """
    return _get_xdg_home("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/ironbin/theme.toml.
    """
    return get_config_dir() / "theme.toml"
