"""Qt UI components for the exam application."""

from .dialog_helpers import (
    confirm_abandon,
    confirm_resume,
    confirm_submit,
    show_error,
    show_info,
    show_warning,
)
from .exam_main_window import ExamMainWindow

__all__ = [
    "ExamMainWindow",
    "confirm_abandon",
    "confirm_resume",
    "confirm_submit",
    "show_error",
    "show_info",
    "show_warning",
]
