"""Slack deep links.

See https://api.slack.com/reference/deep-linking#open_a_channel
"""

from __future__ import annotations

import subprocess
import sys

from ..exceptions import OpenError
from ..log import get_logger

_log = get_logger("links")


def channel_url(team_id: str, channel_id: str, browser: bool = False) -> str:
    """Build a URL that opens a channel in the Slack app or in a browser."""
    if browser:
        return f"https://app.slack.com/client/{team_id}/{channel_id}"
    # slack:// is handled by the Slack desktop app
    return f"slack://channel?team={team_id}&id={channel_id}"


def _opener_command() -> str:
    return "open" if sys.platform == "darwin" else "xdg-open"


def open_url(url: str) -> None:
    """Hand a URL to the OS default opener."""
    command = _opener_command()
    _log.info("opening %s with %s", url, command)
    try:
        subprocess.run([command, url], check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        raise OpenError(f"Could not open {url}: {e}") from e
