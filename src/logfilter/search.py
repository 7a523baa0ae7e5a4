"""Search engine: compiles a query and highlights matching lines."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from logfilter.colors import line_text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.style import Style
    from rich.text import Text

logger = logging.getLogger(__name__)


class SearchEngine:
    """Holds the active query pattern and renders per-line matches."""

    def __init__(self, highlight: Style, *, case_sensitive: bool = True) -> None:
        self._highlight = highlight
        self._flags = 0 if case_sensitive else re.IGNORECASE
        self._query: re.Pattern[str] | None = None

    @property
    def active(self) -> bool:
        return self._query is not None

    @property
    def pattern(self) -> str | None:
        """Source of the active compiled query, or None when unfiltered."""
        return self._query.pattern if self._query is not None else None

    def set_query(self, pattern: str) -> bool:
        """Compile and install a query. Returns True when the active query changed.

        An empty pattern clears the query. A pattern that does not compile
        leaves the previous query active.
        """
        if not pattern:
            changed = self._query is not None
            self._query = None
            return changed

        try:
            compiled = re.compile(pattern, self._flags)
        except re.error as e:
            logger.debug("ignoring invalid pattern %r: %s", pattern, e)
            return False

        changed = self._query is None or self._query.pattern != compiled.pattern
        self._query = compiled
        return changed

    def match_line(self, line: str) -> Text | None:
        """Return a highlighted copy of the line, or None if it does not match.

        Colour codes in the line are kept as styles and never matched against.
        """
        if self._query is None:
            return None

        text = line_text(line)
        matches = list(self._query.finditer(text.plain))
        if not matches:
            return None
        for m in matches:
            if m.end() > m.start():
                text.stylize(self._highlight, m.start(), m.end())
        return text

    def recompute_all(self, lines: Iterable[str]) -> list[Text]:
        """Match every line, keeping order and dropping non-matches."""
        results: list[Text] = []
        for line in lines:
            if (rendered := self.match_line(line)) is not None:
                results.append(rendered)
        return results
