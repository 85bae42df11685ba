"""Helper functions for common dialog patterns in the exam window."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def confirm_submit(parent: QWidget, answered: int, total: int) -> bool:
    """Ask before submitting, mentioning unanswered questions.

    Returns:
        True if user confirmed, False otherwise
    """
    message = f"You have answered {answered} out of {total} questions."
    unanswered = total - answered
    if unanswered > 0:
        message += f"\n{unanswered} questions are still unanswered."
    message += "\n\nSubmit the exam now?"
    reply = QMessageBox.question(
        parent,
        "Submit Exam",
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_abandon(parent: QWidget) -> bool:
    """Ask before discarding the running exam."""
    reply = QMessageBox.question(
        parent,
        "Leave Exam",
        "Leaving now discards the current exam. Continue?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_resume(parent: QWidget) -> bool:
    reply = QMessageBox.question(
        parent,
        "Resume Exam",
        "An unfinished exam was found. Resume it?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.Yes
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
