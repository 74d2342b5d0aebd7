"""Key dispatch for the selector state machine."""

from __future__ import annotations

from .config import SelectorConfig
from .state import SelectorState

INTERRUPT_KEYS = frozenset({"CTRL_C"})


def handle_selector_key(key: str, state: SelectorState, config: SelectorConfig) -> tuple[bool, bool]:
    """Apply one key token to ``state``.

    Returns ``(redraw, finished)``. Keys arriving after the outcome is fixed
    are ignored and never request a redraw. Every other key, including the
    ones that change nothing, asks for a redraw unless it finished the session.
    """
    if state.finished:
        return False, True

    if key in INTERRUPT_KEYS:
        state.cancel()
        return False, True

    if key == "ENTER":
        if state.confirm():
            return False, True
        return True, False

    if key == "UP":
        state.move(-1)
    elif key == "DOWN":
        state.move(1)
    elif key == "BACKSPACE":
        state.backspace()
    elif config.accepts_filter_char(key):
        state.append_char(key)
    return True, False
