"""Scroll position state machine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tailing:
    """Follow the newest content as it arrives."""


@dataclass(frozen=True)
class Pinned:
    """Keep the given logical line at the top of the viewport."""

    index: int


type ScrollState = Tailing | Pinned


def clamp(lower: int, upper: int, value: int) -> int:
    """Clamp value into [lower, upper]; lower wins when the range is empty."""
    return max(lower, min(upper, value))


class ScrollController:
    """Tracks whether the view is tailing or pinned, against the active view length."""

    def __init__(self, *, start_at_head: bool = False) -> None:
        self.state: ScrollState = Pinned(0) if start_at_head else Tailing()
        # Oldest line painted by the last render; anchors the jump out of tailing.
        self.first_displayed: int = 0

    @property
    def is_tailing(self) -> bool:
        return isinstance(self.state, Tailing)

    def scroll_by(self, delta: int, count: int) -> ScrollState:
        """Move by `delta` lines, pinning first if currently tailing."""
        match self.state:
            case Pinned(index):
                start = index
            case _:
                start = max(0, self.first_displayed)
        self.state = Pinned(clamp(0, count - 1, start + delta))
        return self.state

    def scroll_to(self, index: int, count: int) -> ScrollState:
        """Pin at `index`, or resume tailing when `index` is negative."""
        self.state = Tailing() if index < 0 else Pinned(clamp(0, count - 1, index))
        return self.state

    def clamp(self, count: int) -> ScrollState:
        """Re-clamp a pinned position after the active view changed length."""
        if isinstance(self.state, Pinned):
            index = clamp(0, count - 1, self.state.index)
            if index != self.state.index:
                self.state = Pinned(index)
        return self.state
