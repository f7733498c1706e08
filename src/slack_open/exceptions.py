"""slack-open exception hierarchy.

Everything raised here is caught once, in ``cli.main``, and reported as a
single ``Error: ...`` line on stderr.
"""

from __future__ import annotations

from pathlib import Path


class SlackOpenError(Exception):
    """Base exception for all slack-open errors."""


class ChannelNotFoundError(SlackOpenError):
    """Raised when a label matches neither an alias nor a channel."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Channel not found: {label}")
        self.label = label


class ConfigLoadError(SlackOpenError):
    """Raised when the directory file is missing, unparseable, or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not load {path}: {reason}")
        self.path = path
        self.reason = reason


class RemoteFetchError(SlackOpenError):
    """Raised when listing channels from Slack fails."""


class PersistError(SlackOpenError):
    """Raised when the directory file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
        self.reason = reason


class OpenError(SlackOpenError):
    """Raised when the OS opener fails to open a URL."""
