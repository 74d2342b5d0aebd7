"""Interactive filter/navigate/select component.

``SelectorSession.run`` blocks on the terminal and returns a
``SessionOutcome``; state, key dispatch, and rendering are importable
separately so they can be exercised without a tty.
"""

from .config import BRANCH_SELECTOR_CONFIG, SelectorConfig
from .keys import handle_selector_key
from .render import build_selector_lines, render_selector_frame
from .session import SelectorSession, run_selector
from .state import SelectorState, SessionOutcome, filter_options

__all__ = [
    "BRANCH_SELECTOR_CONFIG",
    "SelectorConfig",
    "SelectorSession",
    "SelectorState",
    "SessionOutcome",
    "build_selector_lines",
    "filter_options",
    "handle_selector_key",
    "render_selector_frame",
    "run_selector",
]
