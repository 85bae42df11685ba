"""Post-submission pass in which the user marks the correct option per question."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from exam_app.core.errors import IncompleteEvaluationError
from exam_app.core.models import ExamQuestion, ExamResult, QuestionStatus
from exam_app.core.services.answer_store import check_option_index, check_question_index
from exam_app.core.services.scoring import calculate_result, count_statuses, question_status


def mark_correct(
    questions: tuple[ExamQuestion, ...],
    question_index: int,
    option_index: int | None,
) -> tuple[ExamQuestion, ...]:
    """Set (or with ``None`` remove) the correct option on one question."""
    check_question_index(questions, question_index)
    target = questions[question_index]
    check_option_index(target, option_index)
    updated = replace(target, correct_option=option_index)
    return questions[:question_index] + (updated,) + questions[question_index + 1:]


def pending_count(questions: tuple[ExamQuestion, ...]) -> int:
    return count_statuses(questions)[QuestionStatus.PENDING_EVALUATION]


def can_finalize(questions: tuple[ExamQuestion, ...]) -> bool:
    """True once every attempted question has a correct option; skipped ones never block."""
    return all(
        question.selected_option is None or question.correct_option is not None
        for question in questions
    )


def evaluated_count(questions: tuple[ExamQuestion, ...]) -> int:
    """Questions needing no further input: skipped ones plus those already marked."""
    return sum(1 for question in questions if question_status(question) is not QuestionStatus.PENDING_EVALUATION)


def evaluation_progress(questions: tuple[ExamQuestion, ...]) -> float:
    if not questions:
        return 100.0
    return evaluated_count(questions) / len(questions) * 100


def finalize(
    questions: tuple[ExamQuestion, ...],
    time_taken_seconds: int,
    now: datetime | None = None,
) -> ExamResult:
    if not can_finalize(questions):
        raise IncompleteEvaluationError(pending_count(questions))
    return calculate_result(
        questions,
        time_taken_seconds=time_taken_seconds,
        result_id=uuid4().hex,
        date=now or datetime.now(timezone.utc),
    )
