"""Pydantic models and value types for logfilter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel
from rich.text import Text


class FocusArea(StrEnum):
    """Which part of the viewer receives keyboard input."""

    LOG = "log"
    SEARCH = "search"
    HELP = "help"


class WrapDirection(StrEnum):
    """Which end of a long line survives when it is clipped."""

    FROM_TAIL = "from_tail"
    FROM_HEAD = "from_head"


class ViewerConfig(BaseModel):
    """Construction-time options for a viewer."""

    show_status_bar: bool = True
    start_at_head: bool = False
    hard_wrap: bool = False
    case_sensitive: bool = True


class AppConfig(BaseModel):
    """Application configuration persisted to disk."""

    viewer: ViewerConfig = ViewerConfig()
    poll_interval: float = 0.032
    theme: str = "textual-dark"


@dataclass(frozen=True)
class Frame:
    """One rendered frame: log pane rows plus an optional status row."""

    pane: list[Text] = field(default_factory=list)
    status: Text | None = None

    @property
    def rows(self) -> list[Text]:
        if self.status is None:
            return list(self.pane)
        return [*self.pane, self.status]

    @property
    def plain(self) -> str:
        return "\n".join(row.plain for row in self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.pane and self.status is None
