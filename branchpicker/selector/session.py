"""Blocking selector session on the controlling terminal.

The session owns its key handler and attaches it only while input is
captured. ``run`` always detaches the handler and restores the terminal
before it returns or propagates an exception, so a completion action that
runs afterwards starts with a normal terminal.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable, Iterable

from ..input import EOF, KeyReader
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .config import SelectorConfig
from .keys import handle_selector_key
from .render import render_selector_frame
from .state import SelectorState, SessionOutcome

logger = logging.getLogger(__name__)

KeyHandler = Callable[[str], bool]


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


class SelectorSession:
    """One interactive filter/navigate/select session.

    ``terminal`` and ``key_reader`` default to the process stdin/stdout and are
    injectable so the session can be driven without a real tty.
    """

    def __init__(
        self,
        options: Iterable[str],
        config: SelectorConfig | None = None,
        *,
        theme: UITheme = DEFAULT_THEME,
        terminal: TerminalController | None = None,
        key_reader: KeyReader | None = None,
        terminal_size: Callable[[], tuple[int, int]] = _terminal_size,
    ) -> None:
        self.state = SelectorState.create(options)
        self.config = config or SelectorConfig()
        self.theme = theme
        self._terminal = terminal
        self._key_reader = key_reader
        self._terminal_size = terminal_size
        self._handler: KeyHandler | None = None

    @property
    def attached(self) -> bool:
        return self._handler is not None

    @property
    def terminal(self) -> TerminalController:
        if self._terminal is None:
            self._terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        return self._terminal

    @property
    def key_reader(self) -> KeyReader:
        if self._key_reader is None:
            self._key_reader = KeyReader(sys.stdin.fileno())
        return self._key_reader

    def attach(self) -> None:
        """Start delivering key tokens to this session's handler."""
        self._handler = self.handle_key

    def detach(self) -> None:
        """Stop delivering key tokens; later ``dispatch`` calls are ignored."""
        self._handler = None

    def dispatch(self, key: str) -> bool:
        """Route ``key`` to the attached handler; return whether it finished the session."""
        handler = self._handler
        if handler is None:
            return self.state.finished
        return handler(key)

    def handle_key(self, key: str) -> bool:
        redraw, finished = handle_selector_key(key, self.state, self.config)
        if finished:
            self.detach()
            return True
        if redraw:
            self.redraw()
        return False

    def render(self) -> str:
        columns, lines = self._terminal_size()
        return render_selector_frame(
            self.state,
            self.config,
            self.theme,
            term_columns=columns,
            term_lines=lines,
        )

    def redraw(self) -> None:
        """Draw the current frame; does nothing once an outcome is fixed."""
        if self.state.finished:
            return
        self.terminal.write(self.render())

    def cancel(self) -> None:
        self.state.cancel()
        self.detach()

    def run(
        self,
        *,
        terminal: TerminalController | None = None,
        key_reader: KeyReader | None = None,
    ) -> SessionOutcome:
        """Block until the user confirms an option or cancels."""
        if terminal is not None:
            self._terminal = terminal
        if key_reader is not None:
            self._key_reader = key_reader
        terminal = self.terminal
        reader = self.key_reader
        self.attach()
        try:
            with terminal.raw_mode():
                self.redraw()
                while not self.state.finished:
                    key = reader.read_key()
                    if key == EOF:
                        logger.debug("input closed; cancelling selector session")
                        self.cancel()
                        break
                    self.dispatch(key)
        except KeyboardInterrupt:
            self.cancel()
        finally:
            self.detach()

        outcome = self.state.outcome
        assert outcome is not None
        logger.info("selector session finished: %s %r", outcome.kind, outcome.value)
        return outcome


def run_selector(
    options: Iterable[str],
    config: SelectorConfig | None = None,
    *,
    on_select: Callable[[str], None] | None = None,
    **session_kwargs,
) -> SessionOutcome:
    """Run a session and hand a confirmed option to ``on_select``.

    ``on_select`` runs only after the terminal has been restored and is never
    called for a cancellation.
    """
    outcome = SelectorSession(options, config, **session_kwargs).run()
    if outcome.is_selection and on_select is not None:
        assert outcome.value is not None
        on_select(outcome.value)
    return outcome
