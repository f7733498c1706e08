"""Interactive channel picker.

A small inline Textual app: type to fuzzy-filter channel names, Enter to
open the highlighted one, Escape to abort. Only canonical channel names are
offered; aliases are for typing, not picking.

The caller gets back one of three outcomes and must tell them apart:
a selected name, an abort, or "nothing to select" (Enter on an empty list).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.fuzzy import Matcher
from textual.widgets import Input, OptionList


class Outcome(Enum):
    SELECTED = "selected"
    ABORTED = "aborted"
    NONE = "none"


@dataclass(frozen=True)
class Selection:
    """Result of running the picker."""

    outcome: Outcome
    name: str | None = None

    @classmethod
    def selected(cls, name: str) -> Selection:
        return cls(Outcome.SELECTED, name)

    @classmethod
    def aborted(cls) -> Selection:
        return cls(Outcome.ABORTED)

    @classmethod
    def none(cls) -> Selection:
        return cls(Outcome.NONE)


def rank_names(query: str, names: Iterable[str]) -> list[str]:
    """Filter `names` by fuzzy `query`, best match first.

    An empty query keeps every name in its original order. Equal scores keep
    their original relative order.
    """
    names = list(names)
    if not query:
        return names

    matcher = Matcher(query)
    scored = []
    for index, name in enumerate(names):
        score = matcher.match(name)
        if score > 0:
            scored.append((-score, index, name))

    return [name for _, _, name in sorted(scored)]


def _prompt(name: str) -> Text:
    return Text.assemble(("#", "dim"), (name, "bold"))


class ChannelPicker(App[Selection]):
    """Inline fuzzy picker over channel names."""

    CSS = """
    ChannelPicker {
        height: auto;
    }

    ChannelPicker Input {
        border: none;
        height: 1;
        padding: 0 1;
    }

    ChannelPicker OptionList {
        border: none;
        height: auto;
        max-height: 5;
    }
    """

    BINDINGS = [
        Binding("escape", "abort", "Abort", priority=True),
        Binding("ctrl+c", "abort", "Abort", show=False, priority=True),
        Binding("up", "cursor_up", show=False),
        Binding("down", "cursor_down", show=False),
    ]

    def __init__(self, names: Sequence[str]) -> None:
        super().__init__()
        self.names = list(names)
        self.matches = list(names)

    def compose(self) -> ComposeResult:
        yield Input(placeholder="Channel", id="query")
        yield OptionList(id="channels")

    def on_mount(self) -> None:
        self.query_one("#query", Input).focus()
        self._refresh_options("")

    def _refresh_options(self, query: str) -> None:
        self.matches = rank_names(query, self.names)
        options = self.query_one("#channels", OptionList)
        options.clear_options()
        options.add_options([_prompt(name) for name in self.matches])
        if self.matches:
            options.highlighted = 0

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_options(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        index = self.query_one("#channels", OptionList).highlighted
        if index is None or not self.matches:
            self.exit(Selection.none())
            return
        self.exit(Selection.selected(self.matches[index]))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(Selection.selected(self.matches[event.option_index]))

    def action_cursor_up(self) -> None:
        self.query_one("#channels", OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#channels", OptionList).action_cursor_down()

    def action_abort(self) -> None:
        self.exit(Selection.aborted())


def pick_channel(names: Sequence[str]) -> Selection:
    """Run the picker over `names` and return the user's choice."""
    if not names:
        return Selection.none()

    result = ChannelPicker(names).run(inline=True)
    # run() returns None if the app exits without a result (e.g. on error)
    return result if result is not None else Selection.aborted()
