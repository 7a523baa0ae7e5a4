"""Single-line search field shown while a query is being edited."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding
from textual.message import Message
from textual.widgets import Input

if TYPE_CHECKING:
    from textual import events
    from textual.binding import BindingType


class SearchInput(Input):
    """Input that reports when the user backs out of the search."""

    DEFAULT_CSS = """
    SearchInput {
        dock: bottom;
        height: 1;
        border: none;
        padding: 0 1;
        display: none;
    }

    SearchInput.-active {
        display: block;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("escape,ctrl+c", "cancel", "Cancel", show=False),
    ]

    class Dismissed(Message):
        """The search was left without submitting.

        `restore` is True when the previous query should come back.
        """

        def __init__(self, *, restore: bool) -> None:
            super().__init__()
            self.restore = restore

    def open(self) -> None:
        self.value = ""
        self.add_class("-active")
        self.focus()

    def close(self) -> None:
        self.remove_class("-active")

    def action_cancel(self) -> None:
        self.post_message(self.Dismissed(restore=True))

    def on_key(self, event: events.Key) -> None:
        """Leave the search when backspace is pressed on an empty query."""
        if event.key == "backspace" and not self.value:
            event.prevent_default()
            event.stop()
            self.post_message(self.Dismissed(restore=False))
