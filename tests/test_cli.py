"""Tests for the slack-open CLI commands."""

import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from slack_open import cli
from slack_open.picker import Selection

_CONFIG = """\
team_id = "T1"

[channels]
general = "C1"
random = "C2"

[aliases]
gen = "general"
stale = "deleted"
"""


def _run(argv, entry=cli.main):
    with patch.object(sys, "argv", argv):
        entry()


def _config(tmpdir: str, text: str = _CONFIG) -> str:
    path = Path(tmpdir) / "config.toml"
    path.write_text(text)
    return str(path)


def test_open_prints_app_url(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(["slack-open", "open", "gen", "-p", "-c", _config(tmpdir)])

    assert capsys.readouterr().out.strip() == "slack://channel?team=T1&id=C1"


def test_open_prints_browser_url(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(["slack-open", "open", "random", "-b", "-p", "-c", _config(tmpdir)])

    assert capsys.readouterr().out.strip() == "https://app.slack.com/client/T1/C2"


def test_open_calls_opener():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with patch("slack_open.slack.links.subprocess.run") as mock_run:
            _run(["slack-open", "open", "general", "-c", config])

    args = mock_run.call_args[0][0]
    assert args[-1] == "slack://channel?team=T1&id=C1"
    assert mock_run.call_args.kwargs["check"] is True


def test_so_entry_point(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(["so", "general", "-p", "-c", _config(tmpdir)], entry=cli.open_main)

    assert capsys.readouterr().out.strip() == "slack://channel?team=T1&id=C1"


def test_open_unknown_channel_exits_1(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with pytest.raises(SystemExit) as exc_info:
            _run(["slack-open", "open", "stale", "-p", "-c", config])

    assert exc_info.value.code == 1
    assert "Channel not found: stale" in capsys.readouterr().err


def test_open_missing_config_exits_1(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = str(Path(tmpdir) / "missing.toml")
        with pytest.raises(SystemExit) as exc_info:
            _run(["slack-open", "open", "general", "-c", missing])

    assert exc_info.value.code == 1
    assert missing in capsys.readouterr().err


def test_open_without_label_uses_picker(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with patch(
            "slack_open.picker.pick_channel", return_value=Selection.selected("random")
        ) as mock_pick:
            _run(["slack-open", "open", "-p", "-c", config])

    # only canonical names are offered, sorted
    mock_pick.assert_called_once_with(["general", "random"])
    assert capsys.readouterr().out.strip() == "slack://channel?team=T1&id=C2"


@pytest.mark.parametrize("selection", [Selection.aborted(), Selection.none()])
def test_open_picker_abort_or_nothing_is_silent(selection, capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with (
            patch("slack_open.picker.pick_channel", return_value=selection),
            patch("slack_open.slack.links.subprocess.run") as mock_run,
        ):
            _run(["slack-open", "open", "-c", config])

    mock_run.assert_not_called()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


class FakeClient:
    def __init__(self, channels):
        self.channels = channels

    def conversations_list(self, **kwargs):
        return {"ok": True, "channels": self.channels, "response_metadata": {"next_cursor": ""}}


def test_sync_prints_diff_and_writes(capsys):
    remote = [
        {"name": "general", "id": "C1", "num_members": 10},
        {"name": "new-stuff", "id": "C3", "num_members": 2},
        {"name": "ghost-town", "id": "C4", "num_members": 0},
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with patch("slack_open.slack.make_client", return_value=FakeClient(remote)) as mock_make:
            _run(["slack-open", "sync", "-t", "xoxb-test", "-c", config])
        text = Path(config).read_text()

    mock_make.assert_called_once_with("xoxb-test")
    out = capsys.readouterr().out
    assert "Number of channels: 2 → 2" in out
    assert "New channel(s):\n  #new-stuff\n" in out
    assert "Removed channel(s):\n  #random\n" in out
    assert f"Configuration file updated: {config}" in out
    assert "new-stuff" in text
    assert "ghost-town" not in text
    assert 'gen = "general"' in text


def test_sync_uses_token_from_env(monkeypatch):
    monkeypatch.setenv("SLACK_TOKEN", "xoxb-env")
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with patch("slack_open.slack.make_client", return_value=FakeClient([])) as mock_make:
            _run(["slack-open", "sync", "--dry-run", "-c", config])

    mock_make.assert_called_once_with("xoxb-env")


def test_sync_without_token_exits_1(monkeypatch, capsys):
    monkeypatch.delenv("SLACK_TOKEN", raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with pytest.raises(SystemExit) as exc_info:
            _run(["slack-open", "sync", "-c", config])

    assert exc_info.value.code == 1
    assert "SLACK_TOKEN" in capsys.readouterr().err


def test_sync_dry_run_leaves_file(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _config(tmpdir)
        with patch("slack_open.slack.make_client", return_value=FakeClient([])):
            _run(["slack-open", "sync", "-t", "x", "-n", "-c", config])

        assert Path(config).read_text() == _CONFIG

    out = capsys.readouterr().out
    assert "Removed channel(s):\n  #general\n  #random\n" in out
    assert "Dry run" in out


def test_list_with_aliases(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(["slack-open", "list", "--aliases", "-c", _config(tmpdir)])

    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == ["general", "random"]
    assert "gen -> general" in lines
    assert "stale -> deleted  (not in channels)" in lines


def test_config_init_and_path(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = str(Path(tmpdir) / "so" / "config.toml")
        _run(["slack-open", "config", "init", "--team-id", "T77", "-c", path])
        _run(["slack-open", "config", "init", "--team-id", "T88", "-c", path])
        _run(["slack-open", "config", "path", "-c", path])
        text = Path(path).read_text()

    out = capsys.readouterr().out
    assert "Created config file" in out
    assert "already exists" in out
    assert out.strip().endswith(path)
    assert 'team_id = "T77"' in text
