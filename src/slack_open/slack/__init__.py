"""Slack channel directory: resolution, fetching, and sync.

The directory maps channel names (and optional aliases) to Slack channel IDs
so a channel can be opened directly with a slack:// deep link.

It lives in ~/.config/slack-open/config.toml and is refreshed from the
Slack conversations.list API by `slack-open sync`.
"""

from .fetch import RemoteChannel, fetch_all, make_client
from .links import channel_url, open_url
from .resolve import resolve, resolve_or_raise
from .sync import DiffReport, reconcile, sync_directory

__all__ = [
    "DiffReport",
    "RemoteChannel",
    "channel_url",
    "fetch_all",
    "make_client",
    "open_url",
    "reconcile",
    "resolve",
    "resolve_or_raise",
    "sync_directory",
]
