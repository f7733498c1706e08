"""CLI entry point for slack-open.

slack-open opens Slack channels by name, straight into the desktop app:
- open: resolve a channel name or alias and open it (picker if no name given)
- sync: refresh the channel directory from the Slack API
- list: show known channels and aliases
- config: locate, show, or create the channel directory file
"""

import argparse
import os
import sys

from .config import ensure_config_exists, load_directory
from .exceptions import SlackOpenError
from .log import get_logger
from .paths import resolve_config_path
from .slack.fetch import DEFAULT_MAX_PAGES

TOKEN_ENV_VAR = "SLACK_TOKEN"

_log = get_logger("cli")


def cmd_open(args: argparse.Namespace) -> None:
    """Open a channel by name, or pick one interactively."""
    from .picker import Outcome, pick_channel
    from .slack import channel_url, open_url, resolve_or_raise

    directory = load_directory(args.config)

    label = args.channel
    if label is None:
        selection = pick_channel(directory.channel_names())
        # abort and empty selection both mean "do nothing"
        if selection.outcome is not Outcome.SELECTED:
            return
        label = selection.name

    channel_id = resolve_or_raise(directory, label)
    url = channel_url(directory.team_id, channel_id, browser=args.browser)

    if args.print_url:
        print(url)
    else:
        open_url(url)


def cmd_sync(args: argparse.Namespace) -> None:
    """Refresh the channel directory from Slack."""
    from .slack import make_client, sync_directory

    directory = load_directory(args.config)

    token = args.token or os.environ.get(TOKEN_ENV_VAR)
    if not token:
        raise SlackOpenError(f"No Slack token: pass --token or set ${TOKEN_ENV_VAR}")

    updated, report = sync_directory(
        directory,
        make_client(token),
        max_pages=args.max_pages or None,
        dry_run=args.dry_run,
    )

    print(f"Number of channels: {report.before} → {report.after}")
    if report.added:
        print("New channel(s):")
        for name in report.added:
            print(f"  #{name}")
    if report.removed:
        print("Removed channel(s):")
        for name in report.removed:
            print(f"  #{name}")

    if args.dry_run:
        print("Dry run: configuration file not updated.")
    else:
        print(f"Configuration file updated: {updated.path}")


def cmd_list(args: argparse.Namespace) -> None:
    """List channel names (and optionally aliases)."""
    directory = load_directory(args.config)

    for name in directory.channel_names():
        print(name)

    if args.aliases and directory.aliases:
        print()
        for alias, target in sorted(directory.aliases.items()):
            missing = "" if target in directory.channels else "  (not in channels)"
            print(f"{alias} -> {target}{missing}")


def cmd_config_path(args: argparse.Namespace) -> None:
    """Print config file path."""
    print(resolve_config_path(args.config))


def cmd_config_show(args: argparse.Namespace) -> None:
    """Show the config file."""
    config_path = resolve_config_path(args.config)
    if config_path.exists():
        print(config_path.read_text())
    else:
        print(f"No config file at {config_path}")
        print("Run 'slack-open config init --team-id T...' to create one.")


def cmd_config_init(args: argparse.Namespace) -> None:
    """Create a new config file for a workspace."""
    config_path, created = ensure_config_exists(args.team_id, args.config)
    if created:
        print(f"Created config file at: {config_path}")
        print("Run 'slack-open sync' to fill in channels.")
    else:
        print(f"Config file already exists at: {config_path}")


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the config file (default: $XDG_CONFIG_HOME/slack-open/config.toml)",
    )


def _add_open_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("channel", nargs="?", help="Channel name or alias (omit to pick)")
    parser.add_argument(
        "-b",
        "--browser",
        action="store_true",
        help="Open in the browser instead of the Slack app",
    )
    parser.add_argument(
        "-p",
        "--print",
        dest="print_url",
        action="store_true",
        help="Print the URL instead of opening it",
    )
    _add_config_argument(parser)


def setup_open_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the open subcommand."""
    open_parser = subparsers.add_parser("open", help="Open a channel by name or alias")
    _add_open_arguments(open_parser)
    open_parser.set_defaults(func=cmd_open)


def setup_sync_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the sync subcommand."""
    sync_parser = subparsers.add_parser(
        "sync",
        help="Refresh the channel list from Slack",
        description="Replace [channels] with the workspace's current non-empty channels",
    )
    sync_parser.add_argument(
        "-t",
        "--token",
        help=f"Slack API token (default: ${TOKEN_ENV_VAR})",
    )
    sync_parser.add_argument(
        "--max-pages",
        type=int,
        default=DEFAULT_MAX_PAGES,
        help=f"Give up after this many API pages, 0 for no limit (default: {DEFAULT_MAX_PAGES})",
    )
    sync_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show what would change without writing the config file",
    )
    _add_config_argument(sync_parser)
    sync_parser.set_defaults(func=cmd_sync)


def setup_list_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the list subcommand."""
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List known channels")
    list_parser.add_argument("-a", "--aliases", action="store_true", help="Also list aliases")
    _add_config_argument(list_parser)
    list_parser.set_defaults(func=cmd_list)


def setup_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the config subcommand."""
    config_parser = subparsers.add_parser(
        "config",
        help="Manage the slack-open config file",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config init
    init_parser = config_subparsers.add_parser("init", help="Create a new config file")
    init_parser.add_argument("--team-id", required=True, help="Slack team (workspace) ID")
    _add_config_argument(init_parser)
    init_parser.set_defaults(func=cmd_config_init)

    # config path
    path_parser = config_subparsers.add_parser("path", help="Print config file path")
    _add_config_argument(path_parser)
    path_parser.set_defaults(func=cmd_config_path)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show current config")
    _add_config_argument(show_parser)
    show_parser.set_defaults(func=cmd_config_show)

    config_parser.set_defaults(func=cmd_config_show, config_command=None, config=None)


def _dispatch(args: argparse.Namespace) -> None:
    try:
        args.func(args)
    except SlackOpenError as e:
        _log.error("%s failed: %s", getattr(args, "command", None) or "open", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="slack-open",
        description="Open Slack channels by name",
    )
    subparsers = parser.add_subparsers(dest="command")

    setup_open_parser(subparsers)
    setup_sync_parser(subparsers)
    setup_list_parser(subparsers)
    setup_config_parser(subparsers)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
    elif hasattr(args, "func"):
        _dispatch(args)
    else:
        parser.print_help()


def open_main() -> None:
    """Direct entry point for the `so` alias - same as `slack-open open`."""
    parser = argparse.ArgumentParser(prog="so", description="Open a Slack channel by name")
    _add_open_arguments(parser)
    parser.set_defaults(func=cmd_open)

    _dispatch(parser.parse_args())


if __name__ == "__main__":
    main()
