"""Help screen showing all keyboard shortcuts."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, override

from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

HELP_TEXT = """\
[bold]Navigation[/bold]
  Up/Down, k/j                          Scroll one line
  PgUp/PgDn                             Scroll a page
  Ctrl+U/Ctrl+D                         Scroll half a page
  Home, gg                              Jump to first line
  End, G                                Follow new lines (tail)
  Mouse wheel                           Scroll one line

[bold]Search[/bold]
  /                                     Filter lines by regular expression
  Enter                                 Keep the filter
  Escape                                Restore the previous filter
  Backspace on empty                    Leave search without a filter

[bold]Display[/bold]
  w                                     Toggle soft/hard wrap

[bold]General[/bold]
  ?, h                                  Show this help
  q, Escape                             Quit
"""


class HelpScreen(ModalScreen[None]):
    """Modal help screen with keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > VerticalScroll {
        width: 60%;
        height: 90%;
        max-height: 24;
        background: $surface;
        border: tall $accent;
        padding: 1 2;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        ("escape", "dismiss_help", "Close"),
        ("h", "dismiss_help", "Close"),
        ("q", "dismiss_help", "Close"),
        ("question_mark", "dismiss_help", "Close"),
    ]

    @override
    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(HELP_TEXT, markup=True)

    def action_dismiss_help(self) -> None:
        self.dismiss(None)
