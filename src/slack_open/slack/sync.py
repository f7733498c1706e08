"""Reconcile the local channel directory with Slack.

reconcile() is pure: it filters and sorts the remote channel list, builds
the new `channels` table, and reports what was added and removed.
sync_directory() wires it up with fetching and saving.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from slack_sdk import WebClient

from ..config import Directory, save_directory
from ..log import get_logger
from .fetch import DEFAULT_MAX_PAGES, RemoteChannel, fetch_all

_log = get_logger("sync")


@dataclass(frozen=True)
class DiffReport:
    """Channel names added and removed by a sync, both sorted."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    before: int = 0
    after: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def _has_members(channel: RemoteChannel) -> bool:
    # unknown member count is not evidence of an empty channel
    return channel.member_count is None or channel.member_count > 0


def reconcile(current: Directory, remote: Iterable[RemoteChannel]) -> tuple[Directory, DiffReport]:
    """Build the synced Directory and a report of what changed.

    Channels with zero members are dropped. If Slack reports the same name
    twice, the later one in sorted order wins. team_id and aliases carry over
    from `current`; only `channels` is replaced.
    """
    kept = sorted((c for c in remote if _has_members(c)), key=lambda c: c.name)

    channels: dict[str, str] = {}
    for channel in kept:
        channels[channel.name] = channel.id

    report = DiffReport(
        added=sorted(name for name in channels if name not in current.channels),
        removed=sorted(name for name in current.channels if name not in channels),
        before=len(current.channels),
        after=len(channels),
    )
    return current.with_channels(channels), report


def sync_directory(
    current: Directory,
    client: WebClient,
    *,
    max_pages: int | None = DEFAULT_MAX_PAGES,
    dry_run: bool = False,
) -> tuple[Directory, DiffReport]:
    """Fetch channels from Slack, reconcile, and save over `current`'s file.

    A fetch failure raises before anything is written. With dry_run the new
    directory is computed but not saved.
    """
    remote = fetch_all(client, max_pages=max_pages)
    updated, report = reconcile(current, remote)

    _log.info(
        "sync: %d -> %d channels, +%d -%d",
        report.before,
        report.after,
        len(report.added),
        len(report.removed),
    )
    for name in report.added:
        _log.debug("added #%s", name)
    for name in report.removed:
        _log.debug("removed #%s", name)

    if not dry_run:
        save_directory(updated)
    return updated, report
