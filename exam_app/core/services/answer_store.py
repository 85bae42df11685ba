"""Per-question selections and navigation bounds for a session's question list."""

from __future__ import annotations

from dataclasses import replace

from exam_app.core.errors import OutOfRangeError
from exam_app.core.models import ExamQuestion, ExamSession


def check_question_index(questions: tuple[ExamQuestion, ...], index: int) -> None:
    if not 0 <= index < len(questions):
        raise OutOfRangeError(f"Question index {index} out of range (0-{len(questions) - 1})")


def check_option_index(question: ExamQuestion, option_index: int | None) -> None:
    if option_index is None:
        return
    if not 0 <= option_index < len(question.options):
        raise OutOfRangeError(
            f"Option index {option_index} out of range for question {question.id}"
        )


def with_selection(
    questions: tuple[ExamQuestion, ...],
    question_index: int,
    option_index: int | None,
) -> tuple[ExamQuestion, ...]:
    """Return a copy of ``questions`` with only the addressed selection replaced.

    ``option_index=None`` clears the selection.
    """
    check_question_index(questions, question_index)
    target = questions[question_index]
    check_option_index(target, option_index)
    updated = replace(target, selected_option=option_index)
    return questions[:question_index] + (updated,) + questions[question_index + 1:]


def count_answered(session: ExamSession) -> int:
    return sum(1 for question in session.questions if question.selected_option is not None)


def count_remaining(session: ExamSession) -> int:
    return len(session.questions) - count_answered(session)


def next_index(session: ExamSession) -> int:
    """Index of the following question, staying on the last one."""
    return min(session.current_index + 1, len(session.questions) - 1)


def previous_index(session: ExamSession) -> int:
    """Index of the preceding question, staying on the first one."""
    return max(session.current_index - 1, 0)
