"""Light/dark styling shared by the Plotly figure and the hover overlay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ThemeMode(str, Enum):
    """UI theme mode."""

    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class ThemeStyle:
    """Colours for one theme.

    background/foreground style the figure paper and fonts; the tooltip
    colours style the floating overlay, which sits outside the figure.
    """

    template: str
    background: str
    foreground: str
    tooltip_background: str
    tooltip_foreground: str


THEME_STYLES: dict[ThemeMode, ThemeStyle] = {
    ThemeMode.LIGHT: ThemeStyle(
        template="plotly_white",
        background="#ffffff",
        foreground="#000000",
        tooltip_background="#ffffff",
        tooltip_foreground="#000000",
    ),
    ThemeMode.DARK: ThemeStyle(
        template="plotly_dark",
        background="#000000",
        foreground="#ffffff",
        tooltip_background="#2b2b2b",
        tooltip_foreground="#ffffff",
    ),
}


def resolve_theme(theme: Union[str, ThemeMode, None]) -> ThemeMode:
    """ThemeMode for a config or CLI value; anything unrecognised is LIGHT."""
    if isinstance(theme, ThemeMode):
        return theme
    if str(theme).lower() in ("dark", "plotly_dark"):
        return ThemeMode.DARK
    return ThemeMode.LIGHT


def theme_style(theme: Union[str, ThemeMode, None]) -> ThemeStyle:
    return THEME_STYLES[resolve_theme(theme)]
