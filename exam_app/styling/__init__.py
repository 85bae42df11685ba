"""Styling module for the exam window."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
