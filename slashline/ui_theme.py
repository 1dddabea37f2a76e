"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the prompt, the cursor overlay and the
quick-search list. Rendering code only reads semantic fields from ``UITheme``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    prompt: str
    search_prompt: str
    search_query: str
    search_hint: str
    search_indicator: str
    search_selected: str
    search_match: str
    search_footer: str
    info: str
    transcript_user: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    prompt="\033[1;38;5;252m",
    search_prompt="\033[1;38;5;81m",
    search_query="\033[38;5;117m",
    search_hint="\033[2;38;5;250m",
    search_indicator="\033[38;5;46m",
    search_selected="\033[38;5;46m",
    search_match="\033[48;5;61m",
    search_footer="\033[2;38;5;250m",
    info="\033[38;5;229m",
    transcript_user="\033[1;38;5;110m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    prompt="\033[1;38;5;45m",
    search_prompt="\033[1;38;5;39m",
    search_query="\033[38;5;153m",
    search_hint="\033[2;38;5;110m",
    search_indicator="\033[38;5;84m",
    search_selected="\033[38;5;45m",
    search_match="\033[48;5;24m",
    search_footer="\033[2;38;5;110m",
    info="\033[38;5;215m",
    transcript_user="\033[1;38;5;117m",
)

PLAIN_THEME = UITheme(
    name="plain",
    # Plain mode keeps inverse video: the cursor overlay would vanish without it.
    reverse="\033[7m",
    reset="\033[0m",
    prompt="",
    search_prompt="",
    search_query="",
    search_hint="",
    search_indicator="",
    search_selected="",
    search_match="\033[4m",
    search_footer="",
    info="",
    transcript_user="",
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


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
