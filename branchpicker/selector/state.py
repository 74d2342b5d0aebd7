"""Filter, cursor, and outcome state for one selector session.

The filtered view is always derived from the full option list and the
current query; nothing mutates it directly. Once an outcome is fixed every
mutator becomes a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..errors import EmptyInputError

SELECTION = "selection"
CANCELLATION = "cancellation"


def filter_options(options: Sequence[str], query: str) -> list[str]:
    """Return options containing ``query`` case-insensitively, in list order."""
    if not query:
        return list(options)
    folded = query.lower()
    return [option for option in options if folded in option.lower()]


@dataclass(frozen=True)
class SessionOutcome:
    """Terminal result of a session: a confirmed option or a cancellation."""

    kind: str
    value: str | None = None

    @classmethod
    def selection(cls, value: str) -> SessionOutcome:
        return cls(SELECTION, value)

    @classmethod
    def cancellation(cls) -> SessionOutcome:
        return cls(CANCELLATION)

    @property
    def is_selection(self) -> bool:
        return self.kind == SELECTION

    @property
    def is_cancellation(self) -> bool:
        return self.kind == CANCELLATION


@dataclass
class SelectorState:
    options: tuple[str, ...]
    query: str = ""
    matches: list[str] = field(default_factory=list)
    selected: int | None = None
    outcome: SessionOutcome | None = None

    @classmethod
    def create(cls, options: Iterable[str]) -> SelectorState:
        """Build initial state; an empty option list raises ``EmptyInputError``."""
        frozen = tuple(options)
        if not frozen:
            raise EmptyInputError()
        state = cls(options=frozen)
        state._refilter()
        return state

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def current(self) -> str | None:
        """Option under the cursor, or ``None`` when nothing is selectable."""
        if self.selected is None or not (0 <= self.selected < len(self.matches)):
            return None
        return self.matches[self.selected]

    def _refilter(self) -> None:
        self.matches = filter_options(self.options, self.query)
        self.selected = 0 if self.matches else None

    def set_query(self, query: str) -> bool:
        """Replace the filter text, recomputing matches and resetting the cursor."""
        if self.finished or query == self.query:
            return False
        self.query = query
        self._refilter()
        return True

    def append_char(self, ch: str) -> bool:
        return self.set_query(self.query + ch)

    def backspace(self) -> bool:
        if not self.query:
            return False
        return self.set_query(self.query[:-1])

    def move(self, direction: int) -> bool:
        """Move the cursor by ``direction`` rows, wrapping at both ends."""
        if self.finished or not self.matches or self.selected is None:
            return False
        count = len(self.matches)
        previous = self.selected
        self.selected = (self.selected + direction + count) % count
        return self.selected != previous

    def confirm(self) -> bool:
        """Fix the outcome to the option under the cursor, if there is one."""
        if self.finished:
            return False
        value = self.current
        if value is None:
            return False
        self.outcome = SessionOutcome.selection(value)
        return True

    def cancel(self) -> bool:
        if self.finished:
            return False
        self.outcome = SessionOutcome.cancellation()
        return True
