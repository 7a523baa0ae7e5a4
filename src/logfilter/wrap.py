"""Turn one logical line into a bounded block of visual rows."""

from __future__ import annotations

from rich.cells import cell_len, get_character_cell_size
from rich.text import Text

from logfilter.colors import line_text
from logfilter.models import WrapDirection

TAB_WIDTH = 4


def _as_text(line: str | Text) -> Text:
    text = line_text(line) if isinstance(line, str) else line.copy()
    if "\t" in text.plain:
        text.expand_tabs(TAB_WIDTH)
    return text


def split_rows(line: str | Text, width: int) -> list[Text]:
    """Split a line greedily into rows of at most `width` cells."""
    text = _as_text(line)
    offsets: list[int] = []
    column = 0
    for index, char in enumerate(text.plain):
        size = get_character_cell_size(char)
        if column and column + size > width:
            offsets.append(index)
            column = 0
        column += size
    if not offsets:
        return [text]
    return list(text.divide(offsets))


def wrap_line(
    line: str | Text,
    width: int,
    max_lines: int,
    direction: WrapDirection,
    *,
    hard_wrap: bool = False,
) -> tuple[Text, int]:
    """Wrap or truncate a line, returning the visual block and its row count.

    Hard wrap keeps only the first `width` cells on a single row. Soft wrap
    reflows the line and, when it needs more than `max_lines` rows, keeps
    the bottom rows for FROM_TAIL and the top rows for FROM_HEAD.
    """
    if hard_wrap:
        text = _as_text(line)
        if cell_len(text.plain) > width:
            text.truncate(width, overflow="crop")
        return text, 1

    rows = split_rows(line, width)
    if len(rows) > max_lines:
        rows = rows[len(rows) - max_lines :] if direction == WrapDirection.FROM_TAIL else rows[:max_lines]
    return Text("\n", end="").join(rows), len(rows)
