"""Textual application for logfilter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.worker import Worker, WorkerState, get_current_worker

from logfilter.models import AppConfig, FocusArea
from logfilter.reader import ChunkProducer
from logfilter.widgets.help_screen import HelpScreen
from logfilter.widgets.log_viewer import LogViewer
from logfilter.widgets.search_input import SearchInput

if TYPE_CHECKING:
    from pathlib import Path

    from textual.widgets import Input

logger = logging.getLogger(__name__)


class LogFilterApp(App[None]):
    """Live log viewer TUI application."""

    ENABLE_COMMAND_PALETTE = False

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q,escape", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False),
        Binding("slash", "search", "Search"),
        Binding("question_mark,h", "show_help", "Help"),
    ]

    def __init__(
        self,
        config: AppConfig | None = None,
        source: str = "",
        file_path: Path | None = None,
        *,
        pipe_fd: int | None = None,
    ) -> None:
        super().__init__()
        self._config = config or AppConfig()
        self._source = source
        self._producer: ChunkProducer | None = None
        if file_path is not None:
            self._producer = ChunkProducer(file_path, interval=self._config.poll_interval)
        elif pipe_fd is not None:
            self._producer = ChunkProducer(fd=pipe_fd, interval=self._config.poll_interval)
        self.theme = self._config.theme
        self.title = f"logfilter {source}".strip()

    def compose(self) -> ComposeResult:
        yield LogViewer(self._config.viewer, id="log-view")
        yield SearchInput(placeholder="regular expression", id="search-input")

    def on_mount(self) -> None:
        self.query_one("#log-view", LogViewer).focus()
        if self._producer is not None:
            self.run_worker(self._produce(self._producer), name="producer", exclusive=True, exit_on_error=False)

    def on_unmount(self) -> None:
        if self._producer is not None:
            self._producer.stop()

    async def _produce(self, producer: ChunkProducer) -> None:
        """Forward each chunk to the viewer's message queue."""
        log_view = self.query_one("#log-view", LogViewer)
        worker = get_current_worker()
        async for chunk in producer.chunks():
            if worker.is_cancelled:
                break
            log_view.post_message(LogViewer.Ingest(chunk))
        if not producer.stopped:
            self.notify(f"End of input from {self._source or 'stdin'}")

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.name != "producer" or event.state != WorkerState.ERROR:
            return
        error = event.worker.error
        logger.error("reading %s failed: %s", self._source, error)
        self.exit(return_code=1, message=f"Error reading {self._source}: {error}")

    # --- Search ---

    def action_search(self) -> None:
        log_view = self.query_one("#log-view", LogViewer)
        log_view.begin_search()
        self.query_one("#search-input", SearchInput).open()

    def on_input_changed(self, event: Input.Changed) -> None:
        log_view = self.query_one("#log-view", LogViewer)
        if not log_view.set_query(event.value):
            logger.debug("pattern %r does not compile yet", event.value)

    def on_input_submitted(self, _event: Input.Submitted) -> None:
        self._close_search(restore=False)

    def on_search_input_dismissed(self, event: SearchInput.Dismissed) -> None:
        self._close_search(restore=event.restore)

    def _close_search(self, *, restore: bool) -> None:
        search_input = self.query_one("#search-input", SearchInput)
        log_view = self.query_one("#log-view", LogViewer)
        search_input.close()
        log_view.end_search(restore=restore)
        log_view.focus()

    # --- Help ---

    def action_show_help(self) -> None:
        log_view = self.query_one("#log-view", LogViewer)
        log_view.set_focus_area(FocusArea.HELP)
        self.push_screen(HelpScreen(), callback=lambda _: log_view.set_focus_area(FocusArea.LOG))
