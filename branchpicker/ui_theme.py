"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the selector box and the status messages
printed by the branch switch that follows a selection.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    border: str
    title: str
    filter_label: str
    filter_query: str
    option: str
    option_selected: str
    no_matches: str
    message_error: str
    message_warning: str
    message_prompt: str
    message_info: str
    message_success: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[96m",
    title="\033[1;97m",
    filter_label="\033[90m",
    filter_query="\033[97m",
    option="",
    option_selected="\033[1;92m",
    no_matches="\033[91m",
    message_error="\033[91m",
    message_warning="\033[91m",
    message_prompt="\033[93m",
    message_info="\033[94m",
    message_success="\033[92m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[38;5;39m",
    title="\033[1;38;5;45m",
    filter_label="\033[2;38;5;110m",
    filter_query="\033[1;38;5;153m",
    option="\033[38;5;252m",
    option_selected="\033[1;38;5;45m",
    no_matches="\033[38;5;215m",
    message_error="\033[38;5;203m",
    message_warning="\033[38;5;215m",
    message_prompt="\033[38;5;153m",
    message_info="\033[38;5;117m",
    message_success="\033[38;5;84m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    border="",
    title="",
    filter_label="",
    filter_query="",
    option="",
    option_selected="\033[7m",
    no_matches="",
    message_error="",
    message_warning="",
    message_prompt="",
    message_info="",
    message_success="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def styled(style: str, text: str, theme: UITheme) -> str:
    """Wrap ``text`` in ``style`` and the theme reset, if the style is set."""
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "styled",
]
