"""Textual widget that hosts a Viewer and paints its frames."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from rich.style import Style
from textual.binding import Binding, BindingType
from textual.message import Message
from textual.strip import Strip
from textual.widget import Widget

from logfilter.colors import Styles, search_match_style
from logfilter.models import FocusArea, Frame, ViewerConfig
from logfilter.viewer import Viewer

if TYPE_CHECKING:
    from textual import events


class LogViewer(Widget, can_focus=True):
    """Log pane plus status line, rendered with the Line API."""

    DEFAULT_CSS = """
    LogViewer {
        background: $surface;
        height: 1fr;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("up,k", "scroll_lines(-1)", "Up", show=False),
        Binding("down,j", "scroll_lines(1)", "Down", show=False),
        Binding("pageup", "page_up", "Page Up", show=False),
        Binding("pagedown", "page_down", "Page Down", show=False),
        Binding("ctrl+u", "half_page_up", "Half page up", show=False),
        Binding("ctrl+d", "half_page_down", "Half page down", show=False),
        Binding("home", "jump_to_start", "Top", show=False),
        Binding("g", "goto_top_or_prefix", "Top (gg)", show=False),
        Binding("end,G", "jump_to_end", "Follow", show=False),
        Binding("w", "toggle_wrap", "Wrap"),
    ]

    class Ingest(Message):
        """A chunk of bytes read from the log source."""

        def __init__(self, chunk: bytes) -> None:
            super().__init__()
            self.chunk = chunk

    def __init__(self, config: ViewerConfig | None = None, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(**kwargs)
        styles = Styles(
            status=Style(bgcolor="#264f78", color="#ffffff"),
            highlight=search_match_style(),
        )
        self.viewer = Viewer(config, styles)
        self._status_bar = config.show_status_bar if config is not None else True
        self._frame: Frame | None = None
        self._g_pending: bool = False

    def refresh_frame(self) -> None:
        """Drop the cached frame and repaint."""
        self._frame = None
        self.refresh()

    def _current_frame(self) -> Frame:
        if self._frame is None:
            self.viewer.set_dimensions(self.size.width, self.size.height)
            self._frame = self.viewer.view()
        return self._frame

    def render_line(self, y: int) -> Strip:
        width = self.size.width
        rows = self._current_frame().rows
        if y >= len(rows):
            return Strip.blank(width, self.rich_style)
        strip = Strip(list(rows[y].render(self.app.console)))
        return strip.crop(0, width).extend_cell_length(width).apply_style(self.rich_style)

    def on_resize(self, _event: events.Resize) -> None:
        self.refresh_frame()

    def on_log_viewer_ingest(self, message: Ingest) -> None:
        self.viewer.ingest(message.chunk)
        self.refresh_frame()

    # --- Search (driven by the app's input field) ---

    def begin_search(self) -> None:
        # The search input takes the status row while it is open.
        self.viewer.show_status_bar(show=False)
        self.viewer.begin_search()
        self.refresh_frame()

    def set_query(self, query: str) -> bool:
        accepted = self.viewer.set_query(query)
        self.refresh_frame()
        return accepted

    def end_search(self, *, restore: bool) -> None:
        if restore:
            self.viewer.cancel_search()
        else:
            self.viewer.commit_search()
        self.viewer.show_status_bar(show=self._status_bar)
        self.refresh_frame()

    def set_focus_area(self, focus: FocusArea) -> None:
        self.viewer.set_focus(focus)
        self.refresh_frame()

    # --- Mouse ---

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.action_scroll_lines(1)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.action_scroll_lines(-1)

    # --- Actions ---

    def action_scroll_lines(self, delta: int) -> None:
        self.viewer.scroll_by(delta)
        self.refresh_frame()

    def action_page_up(self) -> None:
        self.viewer.page_up()
        self.refresh_frame()

    def action_page_down(self) -> None:
        self.viewer.page_down()
        self.refresh_frame()

    def action_half_page_up(self) -> None:
        self.viewer.half_page_up()
        self.refresh_frame()

    def action_half_page_down(self) -> None:
        self.viewer.half_page_down()
        self.refresh_frame()

    def action_jump_to_start(self) -> None:
        self.viewer.jump_to_start()
        self.refresh_frame()

    def action_jump_to_end(self) -> None:
        self.viewer.jump_to_end()
        self.refresh_frame()

    def action_toggle_wrap(self) -> None:
        self.viewer.toggle_wrap_mode()
        self.refresh_frame()

    def action_goto_top_or_prefix(self) -> None:
        """Handle 'g' key: second 'g' goes to top (gg)."""
        if self._g_pending:
            self._g_pending = False
            self.action_jump_to_start()
        else:
            self._g_pending = True
            self.set_timer(0.5, self._clear_g_pending)

    def _clear_g_pending(self) -> None:
        self._g_pending = False
