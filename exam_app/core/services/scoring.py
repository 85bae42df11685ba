"""Scoring for fully evaluated question lists under the fixed marking scheme."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Iterable

from exam_app.constants.exam_constants import CORRECT_ANSWER_MARKS, WRONG_ANSWER_PENALTY
from exam_app.core.errors import IncompleteEvaluationError
from exam_app.core.models import ExamQuestion, ExamResult, QuestionStatus


def question_status(question: ExamQuestion) -> QuestionStatus:
    if question.selected_option is None:
        return QuestionStatus.SKIPPED
    if question.correct_option is None:
        return QuestionStatus.PENDING_EVALUATION
    if question.selected_option == question.correct_option:
        return QuestionStatus.CORRECT
    return QuestionStatus.WRONG


def count_statuses(questions: Iterable[ExamQuestion]) -> Counter[QuestionStatus]:
    return Counter(question_status(question) for question in questions)


def calculate_result(
    questions: Iterable[ExamQuestion],
    time_taken_seconds: int,
    result_id: str,
    date: datetime,
) -> ExamResult:
    """Build the result record. Order of ``questions`` does not matter."""
    statuses = count_statuses(questions)
    pending = statuses[QuestionStatus.PENDING_EVALUATION]
    if pending:
        raise IncompleteEvaluationError(pending)

    correct = statuses[QuestionStatus.CORRECT]
    wrong = statuses[QuestionStatus.WRONG]
    skipped = statuses[QuestionStatus.SKIPPED]
    attempted = correct + wrong
    total = attempted + skipped
    accuracy = (correct / attempted) * 100 if attempted > 0 else 0.0

    return ExamResult(
        id=result_id,
        date=date,
        total_questions=total,
        attempted=attempted,
        correct=correct,
        wrong=wrong,
        skipped=skipped,
        score=correct * CORRECT_ANSWER_MARKS - wrong * WRONG_ANSWER_PENALTY,
        max_score=total * CORRECT_ANSWER_MARKS,
        accuracy=accuracy,
        time_taken_seconds=time_taken_seconds,
    )


def score_percentage(result: ExamResult) -> float:
    """Score as a percentage of the maximum marks; negative scores give negative percentages."""
    if result.max_score == 0:
        return 0.0
    return (result.score / result.max_score) * 100


def seconds_per_question(result: ExamResult) -> float:
    if result.total_questions == 0:
        return 0.0
    return result.time_taken_seconds / result.total_questions
