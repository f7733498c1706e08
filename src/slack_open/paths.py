"""Path utilities for slack-open."""

import os
import tempfile
from pathlib import Path

CONFIG_ENV_VAR = "SLACK_OPEN_CONFIG"


def get_config_dir() -> Path:
    """Get the slack-open config directory.

    Uses $XDG_CONFIG_HOME/slack-open, falling back to ~/.config/slack-open.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / "slack-open"


def get_config_path() -> Path:
    """Get the default path to the channel directory file.

    $SLACK_OPEN_CONFIG wins over the XDG location when set.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"


def resolve_config_path(path: Path | str | None) -> Path:
    """Resolve an explicit path (e.g. from --config), using the default if None."""
    return get_config_path() if path is None else Path(path).expanduser()


def get_log_path() -> Path:
    """Get the path to the shared log file."""
    return Path(tempfile.gettempdir()) / "slack-open.log"
