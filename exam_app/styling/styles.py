"""Centralized Qt stylesheets for the exam window."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BACKGROUND_MUTED.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.PRIMARY.get(theme)};
                color: {ColorPalette.PRIMARY_TEXT.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QSpinBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
        """

    @staticmethod
    def get_clock_style(warning: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.DANGER if warning else ColorPalette.PRIMARY
        return f"font-family: monospace; font-size: 18pt; font-weight: bold; color: {color.get(theme)};"

    @staticmethod
    def get_palette_button_style(answered: bool, current: bool, theme: Theme = Theme.LIGHT) -> str:
        if current:
            background = ColorPalette.PRIMARY.get(theme)
            text = ColorPalette.PRIMARY_TEXT.get(theme)
        elif answered:
            background = ColorPalette.ANSWERED.get(theme)
            text = ColorPalette.TEXT_PRIMARY.get(theme)
        else:
            background = ColorPalette.BACKGROUND_MUTED.get(theme)
            text = ColorPalette.TEXT_MUTED.get(theme)
        return f"background-color: {background}; color: {text}; min-width: 32px; min-height: 32px;"

    @staticmethod
    def get_status_style(status: str, theme: Theme = Theme.LIGHT) -> str:
        colors = {
            "correct": ColorPalette.SUCCESS,
            "wrong": ColorPalette.DANGER,
            "pending": ColorPalette.WARNING,
        }
        color = colors.get(status, ColorPalette.TEXT_MUTED)
        return f"color: {color.get(theme)}; font-weight: bold;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
