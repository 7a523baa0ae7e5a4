"""Log viewer model: ingestion, filtering, scrolling, and frame composition."""

from __future__ import annotations

import logging

from rich.cells import cell_len
from rich.text import Text

from logfilter.colors import Styles
from logfilter.models import FocusArea, Frame, ViewerConfig, WrapDirection
from logfilter.scroll import Pinned, ScrollController, ScrollState, Tailing
from logfilter.search import SearchEngine
from logfilter.store import LineStore
from logfilter.wrap import wrap_line

logger = logging.getLogger(__name__)

# Rows kept on screen from the previous page when paging.
_PAGE_OVERLAP = 4


class Viewer:
    """Owns all viewer state; the host feeds it events and pulls frames."""

    def __init__(self, config: ViewerConfig | None = None, styles: Styles | None = None) -> None:
        config = config or ViewerConfig()
        self.styles = styles or Styles()
        self._store = LineStore()
        self._search = SearchEngine(self.styles.highlight, case_sensitive=config.case_sensitive)
        self._filtered: list[Text] = []
        self._scroll = ScrollController(start_at_head=config.start_at_head)
        self._hard_wrap = config.hard_wrap
        self._show_status_bar = config.show_status_bar
        self._focus = FocusArea.LOG
        self._query = ""
        self._prev_query = ""
        self._width = 0
        self._height = 0

    # --- Queries ---

    @property
    def lines(self) -> list[str]:
        return self._store.lines

    @property
    def filtered(self) -> list[Text]:
        return self._filtered

    @property
    def pending(self) -> str:
        return self._store.pending

    @property
    def query(self) -> str:
        """Query text as typed, which may not have compiled."""
        return self._query

    @property
    def hard_wrap(self) -> bool:
        return self._hard_wrap

    @property
    def focus(self) -> FocusArea:
        return self._focus

    @property
    def scroll_state(self) -> ScrollState:
        return self._scroll.state

    @property
    def first_displayed(self) -> int:
        return self._scroll.first_displayed

    @property
    def is_filtering(self) -> bool:
        return self._search.active

    @property
    def active_view(self) -> list[str] | list[Text]:
        """The filtered view while a query is active, otherwise all lines."""
        return self._filtered if self._search.active else self._store.lines

    @property
    def line_count(self) -> int:
        """Lines in the active view, counting the pending line."""
        return len(self.active_view) + (1 if self.pending else 0)

    def __str__(self) -> str:
        return "\n".join(self._store.content())

    # --- Ingestion ---

    def ingest(self, chunk: bytes) -> None:
        """Append a chunk of raw bytes from the log source."""
        self._append(self._store.ingest(chunk))

    def write(self, text: str) -> None:
        """Append already-decoded text."""
        self._append(self._store.write(text))

    def _append(self, new_lines: list[str]) -> None:
        if not self._search.active:
            return
        for line in new_lines:
            if (rendered := self._search.match_line(line)) is not None:
                self._filtered.append(rendered)

    # --- Search ---

    def set_query(self, query: str) -> bool:
        """Set the query text and refilter. Returns False if the pattern did not compile."""
        self._query = query
        if self._search.set_query(query):
            self._refilter()
            logger.debug("query set to %r (%d matches)", query, len(self._filtered))
        return self._search.pattern == (query or None)

    def _refilter(self) -> None:
        if self._search.active:
            self._filtered = self._search.recompute_all(self._store.lines)
        else:
            self._filtered = []

    def begin_search(self) -> None:
        """Start editing a new query, remembering the current one."""
        self._prev_query = self._query
        self.set_query("")
        self.set_focus(FocusArea.SEARCH)

    def cancel_search(self) -> None:
        """Abandon the edit and restore the query that was active before it."""
        self.set_query(self._prev_query)
        self._prev_query = ""
        self.set_focus(FocusArea.LOG)

    def commit_search(self) -> None:
        self.set_focus(FocusArea.LOG)

    def set_focus(self, focus: FocusArea) -> None:
        self._focus = focus

    # --- Navigation ---

    def scroll_by(self, delta: int) -> None:
        self._scroll.scroll_by(delta, len(self.active_view))

    def scroll_to(self, index: int) -> None:
        self._scroll.scroll_to(index, len(self.active_view))

    def page_up(self) -> None:
        self.scroll_by(-max(0, self._height - _PAGE_OVERLAP))

    def page_down(self) -> None:
        self.scroll_by(max(0, self._height - _PAGE_OVERLAP))

    def half_page_up(self) -> None:
        self.scroll_by(-(self._height // 2))

    def half_page_down(self) -> None:
        self.scroll_by(self._height // 2)

    def jump_to_start(self) -> None:
        self.scroll_to(0)

    def jump_to_end(self) -> None:
        self.scroll_to(-1)

    # --- Display options ---

    def set_dimensions(self, width: int, height: int) -> None:
        self._width, self._height = width, height

    def set_wrap_mode(self, *, hard_wrap: bool) -> None:
        self._hard_wrap = hard_wrap

    def toggle_wrap_mode(self) -> None:
        self._hard_wrap = not self._hard_wrap

    def show_status_bar(self, *, show: bool) -> None:
        self._show_status_bar = show

    # --- Rendering ---

    def view(self) -> Frame:
        """Render at the dimensions last given to set_dimensions."""
        return self.render(self._width, self._height)

    def render(self, width: int, height: int) -> Frame:
        """Compose a frame of at most `height` rows, each at most `width` cells."""
        if width <= 0 or height <= 0:
            return Frame()

        if height < 2 or not self._show_status_bar:  # noqa: PLR2004
            return Frame(pane=self._render_log(width, height))

        pane = self._render_log(width, height - 1)
        status = Text(self.status_text(), style=self.styles.status, end="")
        status.expand_tabs()
        if cell_len(status.plain) > width:
            status.truncate(width, overflow="crop")
        return Frame(pane=pane, status=status)

    def status_text(self) -> str:
        """Position on the left, query on the right, separated by a tab."""
        left = self._line_status()
        right = self._search_status()
        if left and right:
            return f"{left}\t{right}"
        return left or right

    def _line_status(self) -> str:
        match self._scroll.state:
            case Pinned(index) if self.line_count:
                return f"{index + 1} of {self.line_count}"
            case _:
                return ""

    def _search_status(self) -> str:
        if self._query or self._focus == FocusArea.SEARCH:
            return f"/{self._query}"
        return ""

    def _wrap(self, line: str | Text, max_lines: int, width: int, direction: WrapDirection) -> tuple[Text, int]:
        block, height = wrap_line(line, width, max_lines, direction, hard_wrap=self._hard_wrap)
        block.stylize_before(self.styles.log)
        return block, height

    def _render_log(self, width: int, height: int) -> list[Text]:
        view = self.active_view
        state = self._scroll.clamp(len(view))
        if isinstance(state, Tailing):
            return self._render_tail(view, width, height)
        return self._render_pinned(view, state.index, width, height)

    def _render_tail(self, view: list[str] | list[Text], width: int, height: int) -> list[Text]:
        """Fill from the newest content backwards, bottom-aligned."""
        blocks: list[Text] = []
        produced = 0

        if self.pending:
            block, rows = self._wrap(self.pending, height, width, WrapDirection.FROM_TAIL)
            blocks.append(block)
            produced += rows

        pointer = len(view) - 1
        while produced < height and pointer >= 0:
            block, rows = self._wrap(view[pointer], height - produced, width, WrapDirection.FROM_TAIL)
            blocks.append(block)
            produced += rows
            pointer -= 1
        self._scroll.first_displayed = pointer + 1

        rows_out = [Text("", end="") for _ in range(height - produced)]
        for block in reversed(blocks):
            rows_out.extend(block.split("\n", allow_blank=True))
        return rows_out

    def _render_pinned(self, view: list[str] | list[Text], index: int, width: int, height: int) -> list[Text]:
        """Fill from the pinned line forwards, leaving any remainder blank."""
        self._scroll.first_displayed = index
        rows_out: list[Text] = []

        pointer = index
        while len(rows_out) < height and pointer < len(view):
            block, _ = self._wrap(view[pointer], height - len(rows_out), width, WrapDirection.FROM_HEAD)
            rows_out.extend(block.split("\n", allow_blank=True))
            pointer += 1

        if len(rows_out) < height and self.pending:
            block, _ = self._wrap(self.pending, height - len(rows_out), width, WrapDirection.FROM_HEAD)
            rows_out.extend(block.split("\n", allow_blank=True))

        return rows_out
