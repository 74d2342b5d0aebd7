"""Selector configuration.

One frozen value replaces the per-variant copies of the picker: the filter
charset, box geometry, and the static labels drawn around the list.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, replace
from typing import Sequence

from ..ansi import display_width, sanitize_terminal_text

BASE_FILTER_CHARS = string.ascii_letters + string.digits + "-_"
DEFAULT_MIN_WIDTH = 60
DEFAULT_CHROME_PADDING = 14
MIN_BOX_WIDTH = 20


@dataclass(frozen=True)
class SelectorConfig:
    """Static behavior of one selector session."""

    title: str = "Select an option:"
    filter_label: str = "Filter: "
    no_matches_text: str = "No matches found."
    min_width: int = DEFAULT_MIN_WIDTH
    chrome_padding: int = DEFAULT_CHROME_PADDING
    allow_space: bool = False
    extra_filter_chars: str = ""

    def with_options(self, **changes: object) -> SelectorConfig:
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    @property
    def filter_charset(self) -> frozenset[str]:
        chars = set(BASE_FILTER_CHARS)
        chars.update(ch for ch in self.extra_filter_chars if ch.isascii() and ch.isprintable())
        if self.allow_space:
            chars.add(" ")
        return frozenset(chars)

    def accepts_filter_char(self, key: str) -> bool:
        """Return whether ``key`` is a single character allowed in the filter."""
        return len(key) == 1 and key in self.filter_charset

    def box_width(self, options: Sequence[str]) -> int:
        """Inner box width: longest option plus chrome, floored at ``min_width``."""
        longest = max((display_width(sanitize_terminal_text(option)) for option in options), default=0)
        return max(longest + self.chrome_padding, self.min_width, MIN_BOX_WIDTH)


BRANCH_SELECTOR_CONFIG = SelectorConfig(
    title="Select a branch:",
    extra_filter_chars="/.",
)
