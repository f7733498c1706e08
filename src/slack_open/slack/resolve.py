"""Resolve a typed label to a Slack channel ID.

Resolution is a plain two-step lookup against a Directory:

1. If the label is an alias and its target is a known channel, use that
   channel. An alias shadows a canonical channel of the same name.
2. Otherwise look the label up as a canonical channel name.

Aliases point at canonical names only. An alias whose target is another
alias does not resolve through it; there is exactly one level of
indirection. Matching is exact (no case folding, no '#' handling).
"""

from __future__ import annotations

from ..config import Directory
from ..exceptions import ChannelNotFoundError


def resolve(directory: Directory, label: str) -> str | None:
    """Return the channel ID for `label`, or None if it resolves to nothing."""
    channel_id = _resolve_alias(directory, label)
    if channel_id is not None:
        return channel_id
    return directory.channels.get(label)


def _resolve_alias(directory: Directory, label: str) -> str | None:
    if not directory.aliases:
        return None

    target = directory.aliases.get(label)
    if target is None:
        return None

    return directory.channels.get(target)


def resolve_or_raise(directory: Directory, label: str) -> str:
    """Like resolve(), but raise ChannelNotFoundError instead of returning None."""
    channel_id = resolve(directory, label)
    if channel_id is None:
        raise ChannelNotFoundError(label)
    return channel_id
