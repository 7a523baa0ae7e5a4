"""Styles used when composing frames."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.ansi import AnsiDecoder
from rich.style import Style
from rich.text import Text

# Search match foreground, same yellow as the classic pager highlight.
HIGHLIGHT_COLOR = "#dddd44"


def search_match_style() -> Style:
    """Return the style applied to search match spans."""
    return Style(color=HIGHLIGHT_COLOR)


def line_text(line: str) -> Text:
    """Build the styled Text for a raw log line.

    ANSI colour codes become spans instead of visible characters, and a
    carriage return keeps only what follows it, as a terminal would show it.
    """
    if "\x1b" not in line and "\r" not in line:
        return Text(line, end="")
    text = AnsiDecoder().decode_line(line)
    text.end = ""
    return text


@dataclass(frozen=True)
class Styles:
    """Styles for the parts of a frame, owned by a viewer and passed explicitly."""

    log: Style = field(default_factory=Style)
    status: Style = field(default_factory=Style)
    highlight: Style = field(default_factory=search_match_style)
