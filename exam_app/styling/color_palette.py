"""Color palette for the exam window supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#000000", dark="#F5F5F5")
    TEXT_MUTED = ThemeColors(light="#666666", dark="#AAAAAA")
    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_MUTED = ThemeColors(light="#E8E8E8", dark="#3A3A3A")
    BORDER_PRIMARY = ThemeColors(light="#CCCCCC", dark="#555555")

    PRIMARY = ThemeColors(light="#1F9AA5", dark="#16808A")
    PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#FFFFFF")

    # Question palette and evaluation states
    ANSWERED = ThemeColors(light="#BFE3E6", dark="#24545A")
    SUCCESS = ThemeColors(light="#2E9E5B", dark="#3DBE72")
    DANGER = ThemeColors(light="#D64545", dark="#F06262")
    WARNING = ThemeColors(light="#E0A100", dark="#FACC15")
