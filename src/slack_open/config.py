"""Channel directory file: load, validate, and atomically save.

The directory is a TOML document with exactly three top-level fields:

    team_id = "T0123456"

    [channels]
    general = "C0000001"
    random = "C0000002"

    [aliases]
    gen = "general"

`aliases` is optional. Its absence and an empty table behave the same at
lookup time, but the distinction survives a save.
"""

from __future__ import annotations

import os
import stat
import tempfile
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import tomli_w

from .exceptions import ConfigLoadError, PersistError
from .log import get_logger
from .paths import resolve_config_path

_log = get_logger("config")


@dataclass(frozen=True)
class Directory:
    """The channel directory for one Slack workspace.

    Never mutated in place; a sync produces a new Directory with only
    `channels` replaced.
    """

    team_id: str
    channels: dict[str, str] = field(default_factory=dict)
    aliases: dict[str, str] | None = None
    path: Path | None = field(default=None, compare=False)

    def channel_names(self) -> list[str]:
        """Canonical channel names, sorted."""
        return sorted(self.channels)

    def with_channels(self, channels: dict[str, str]) -> Directory:
        return replace(self, channels=channels)


def get_default_config(team_id: str) -> str:
    """Return the contents of a fresh directory file for `team_id`."""
    return f"""\
# slack-open channel directory
#
# Populate [channels] with `slack-open sync`. The file is rewritten on every
# sync, so comments here are not preserved.

{tomli_w.dumps({"team_id": team_id})}
[channels]

# Shortcuts: alias = "canonical-channel-name"
[aliases]
"""


def load_directory(path: Path | str | None = None) -> Directory:
    """Load and validate the directory file.

    Raises ConfigLoadError if the file is missing, not valid TOML, or does
    not have the expected shape.
    """
    resolved = resolve_config_path(path)

    try:
        with open(resolved, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigLoadError(resolved, "file not found (run 'slack-open config init')") from e
    except OSError as e:
        raise ConfigLoadError(resolved, e.strerror or str(e)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError(resolved, f"invalid TOML: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigLoadError(resolved, f"not valid UTF-8: {e}") from e

    directory = _parse_directory(data, resolved)
    _log.debug(
        "loaded %s: %d channels, %d aliases",
        resolved,
        len(directory.channels),
        len(directory.aliases or {}),
    )
    return directory


def _parse_directory(data: dict[str, Any], path: Path) -> Directory:
    """Parse a decoded TOML document into a Directory."""
    team_id = data.get("team_id")
    if not isinstance(team_id, str) or not team_id:
        raise ConfigLoadError(path, "'team_id' must be a non-empty string")

    if "channels" not in data:
        raise ConfigLoadError(path, "missing [channels] table")
    channels = _parse_table(data["channels"], "channels", path)

    aliases = None
    if "aliases" in data:
        aliases = _parse_table(data["aliases"], "aliases", path)

    extra = set(data) - {"team_id", "channels", "aliases"}
    if extra:
        _log.warning("ignoring unknown fields in %s: %s", path, sorted(extra))

    return Directory(team_id=team_id, channels=channels, aliases=aliases, path=path)


def _parse_table(value: Any, name: str, path: Path) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ConfigLoadError(path, f"'{name}' must be a table")

    table = {}
    for key, item in value.items():
        if not key:
            raise ConfigLoadError(path, f"empty name in [{name}]")
        if not isinstance(item, str) or not item:
            raise ConfigLoadError(path, f"[{name}] entry '{key}' must be a non-empty string")
        table[key] = item
    return table


def dump_directory(directory: Directory) -> str:
    """Serialize a Directory to TOML text. Channels are written sorted by name."""
    document: dict[str, Any] = {
        "team_id": directory.team_id,
        "channels": {name: directory.channels[name] for name in sorted(directory.channels)},
    }
    if directory.aliases is not None:
        document["aliases"] = dict(directory.aliases)
    return tomli_w.dumps(document)


def save_directory(directory: Directory, path: Path | str | None = None) -> Path:
    """Write the directory file, replacing it atomically.

    The new content is written to a temp file next to the target and renamed
    over it, so the previous file is either fully replaced or untouched.
    Defaults to the path the directory was loaded from. A symlinked target is
    followed: the file it points at is replaced and the link stays.
    """
    if path is not None:
        target = Path(path).expanduser()
    else:
        target = directory.path or resolve_config_path(None)

    content = dump_directory(directory)

    tmp_path = None
    replaced = False
    try:
        real = target.resolve()
        real.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{real.name}.", suffix=".tmp", dir=real.parent)
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # keep the permissions of the file being replaced (mkstemp uses 0600)
        if real.exists():
            os.chmod(tmp_path, stat.S_IMODE(real.stat().st_mode))
        os.replace(tmp_path, real)
        replaced = True
    except OSError as e:
        raise PersistError(target, e.strerror or str(e)) from e
    finally:
        if tmp_path is not None and not replaced:
            tmp_path.unlink(missing_ok=True)

    _log.info("saved %s (%d channels)", target, len(directory.channels))
    return target


def ensure_config_exists(team_id: str, path: Path | str | None = None) -> tuple[Path, bool]:
    """Create a fresh directory file unless one already exists.

    Returns (path, created).
    """
    config_path = resolve_config_path(path)

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(get_default_config(team_id))
    return config_path, True
