"""Tests for the Textual application."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from logfilter.app import LogFilterApp
from logfilter.models import AppConfig, FocusArea
from logfilter.scroll import Pinned, Tailing
from logfilter.widgets.help_screen import HelpScreen
from logfilter.widgets.log_viewer import LogViewer
from logfilter.widgets.search_input import SearchInput

if TYPE_CHECKING:
    from pathlib import Path


def _make_app(path: Path) -> LogFilterApp:
    return LogFilterApp(AppConfig(poll_interval=0.01), source=str(path), file_path=path)


class TestLogFilterApp:
    @pytest.mark.asyncio
    async def test_file_is_ingested(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            assert log_view.viewer.lines == sample_log_file.read_text().splitlines()

    @pytest.mark.asyncio
    async def test_search_filters_lines(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            await pilot.press("slash")
            assert log_view.viewer.focus == FocusArea.SEARCH
            await pilot.press(*"error")
            await pilot.press("enter")
            assert log_view.viewer.query == "error"
            assert len(log_view.viewer.filtered) == 2
            assert log_view.viewer.focus == FocusArea.LOG

    @pytest.mark.asyncio
    async def test_navigation_keys(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            await pilot.press("home")
            assert log_view.viewer.scroll_state == Pinned(0)
            await pilot.press("end")
            assert log_view.viewer.scroll_state == Tailing()
            await pilot.press("w")
            assert log_view.viewer.hard_wrap is True


class TestSearchKeys:
    @pytest.mark.asyncio
    async def test_escape_restores_previous_query(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            search_input = app.query_one("#search-input", SearchInput)
            await pilot.press("slash", *"error", "enter")

            await pilot.press("slash")
            assert log_view.viewer.query == ""
            assert log_view.viewer.render(80, 5).status is None
            await pilot.press(*"retry", "escape")
            await pilot.pause()

            assert log_view.viewer.query == "error"
            assert len(log_view.viewer.filtered) == 2
            assert log_view.viewer.focus == FocusArea.LOG
            assert not search_input.has_class("-active")
            assert log_view.viewer.render(80, 5).status is not None

    @pytest.mark.asyncio
    async def test_backspace_on_empty_leaves_search(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            search_input = app.query_one("#search-input", SearchInput)
            await pilot.press("slash", *"error", "enter")

            await pilot.press("slash", "backspace")
            await pilot.pause()

            assert log_view.viewer.query == ""
            assert log_view.viewer.is_filtering is False
            assert log_view.viewer.focus == FocusArea.LOG
            assert not search_input.has_class("-active")
            assert log_view.has_focus


class TestLogKeys:
    @pytest.mark.asyncio
    async def test_gg_jumps_to_start(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            await pilot.press("g")
            assert log_view.viewer.scroll_state == Tailing()
            await pilot.press("g")
            assert log_view.viewer.scroll_state == Pinned(0)

    @pytest.mark.asyncio
    async def test_single_g_expires(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            await pilot.press("g")
            await pilot.pause(0.7)
            await pilot.press("g")
            assert log_view.viewer.scroll_state == Tailing()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["question_mark", "h"])
    async def test_help_screen_opens_and_closes(self, sample_log_file: Path, key: str) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            await pilot.press(key)
            assert isinstance(app.screen, HelpScreen)
            assert log_view.viewer.focus == FocusArea.HELP

            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, HelpScreen)
            assert log_view.viewer.focus == FocusArea.LOG

    @pytest.mark.asyncio
    async def test_mouse_wheel_scrolls_one_line(self, sample_log_file: Path) -> None:
        app = _make_app(sample_log_file)
        async with app.run_test(size=(80, 24)) as pilot:
            await pilot.pause(0.2)
            log_view = app.query_one("#log-view", LogViewer)
            await pilot.press("home")

            event = Mock()
            log_view.on_mouse_scroll_down(event)
            assert log_view.viewer.scroll_state == Pinned(1)
            event.stop.assert_called_once()

            log_view.on_mouse_scroll_up(Mock())
            assert log_view.viewer.scroll_state == Pinned(0)
