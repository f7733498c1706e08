"""Shared logging for slack-open.

All components log to <tmpdir>/slack-open.log via Python's logging module.
Filter with grep: grep 'slack_open.sync' /tmp/slack-open.log
"""

import logging

from .paths import get_log_path

_handler = logging.FileHandler(get_log_path(), delay=True)
_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S"))

_root = logging.getLogger("slack_open")
_root.addHandler(_handler)
_root.setLevel(logging.DEBUG)
# don't propagate to root logger (avoids duplicate output if someone
# configures the root logger elsewhere)
_root.propagate = False


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)
