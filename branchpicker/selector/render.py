"""Box-layout rendering for the selector.

Frames are pure functions of state, config, theme, and terminal size, so
drawing the same state twice produces identical output. The caller writes
each frame in one payload that starts with cursor-home and clear-to-end.
"""

from __future__ import annotations

from ..ansi import clip_text, display_width, fit_text, sanitize_terminal_text
from ..ui_theme import UITheme, styled
from .config import SelectorConfig
from .state import SelectorState

FRAME_PREFIX = "\033[H\033[J"
CHROME_ROWS = 5
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "


def visible_window(total: int, selected: int | None, rows: int) -> tuple[int, int]:
    """Return ``[start, end)`` of list rows to draw, keeping ``selected`` visible."""
    rows = max(1, rows)
    if total <= rows:
        return 0, total
    cursor = selected or 0
    start = max(0, min(cursor - rows + 1, total - rows))
    return start, start + rows


def _bordered(content: str, theme: UITheme) -> str:
    edge = styled(theme.border, "│", theme)
    return f"{edge}{content}{edge}"


def build_selector_lines(
    state: SelectorState,
    config: SelectorConfig,
    theme: UITheme,
    *,
    term_columns: int,
    term_lines: int,
) -> list[str]:
    """Build every row of the selector box for the current state."""
    inner = min(config.box_width(state.options), max(1, term_columns - 2))
    # One column of left padding inside each border.
    text_width = max(0, inner - 1)

    lines: list[str] = [styled(theme.border, "╭" + "─" * inner + "╮", theme)]
    lines.append(_bordered(" " + styled(theme.title, fit_text(config.title, text_width), theme), theme))

    label = clip_text(config.filter_label, text_width)
    query_width = max(0, text_width - display_width(label))
    lines.append(
        _bordered(
            " "
            + styled(theme.filter_label, label, theme)
            + styled(theme.filter_query, fit_text(state.query, query_width), theme),
            theme,
        )
    )
    lines.append(styled(theme.border, "├" + "─" * inner + "┤", theme))

    if not state.matches:
        message = styled(theme.no_matches, fit_text(config.no_matches_text, text_width), theme)
        lines.append(_bordered(" " + message, theme))
    else:
        start, end = visible_window(len(state.matches), state.selected, term_lines - CHROME_ROWS)
        for idx in range(start, end):
            option = sanitize_terminal_text(state.matches[idx])
            if idx == state.selected:
                row = styled(theme.option_selected, fit_text(SELECTED_MARKER + option, text_width), theme)
            else:
                row = styled(theme.option, fit_text(UNSELECTED_MARKER + option, text_width), theme)
            lines.append(_bordered(" " + row, theme))

    lines.append(styled(theme.border, "╰" + "─" * inner + "╯", theme))
    return lines


def render_selector_frame(
    state: SelectorState,
    config: SelectorConfig,
    theme: UITheme,
    *,
    term_columns: int,
    term_lines: int,
) -> str:
    """Compose a full-screen frame for ``state`` as one string."""
    lines = build_selector_lines(
        state,
        config,
        theme,
        term_columns=term_columns,
        term_lines=term_lines,
    )
    return FRAME_PREFIX + "\r\n".join(lines)
