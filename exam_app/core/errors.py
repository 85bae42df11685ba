"""Exceptions raised by the exam engine."""

from __future__ import annotations


class ExamError(Exception):
    """Base class for all exam engine errors."""


class InvalidConfigError(ExamError, ValueError):
    """Raised when an exam cannot be started with the requested settings."""


class OutOfRangeError(ExamError, IndexError):
    """Raised when a question or option index falls outside its bounds."""


class IncompleteEvaluationError(ExamError):
    """Raised when results are requested before every attempted question is marked."""

    def __init__(self, pending_count: int) -> None:
        super().__init__(
            f"Cannot calculate yet: {pending_count} attempted question(s) still need a correct option."
        )
        self.pending_count = pending_count


class ExamStateError(ExamError, RuntimeError):
    """Raised when an operation is not valid in the current stage of the exam flow."""
