from __future__ import annotations

from datetime import timezone
import random

import pytest

from exam_app.core.errors import IncompleteEvaluationError
from exam_app.core.models import QuestionStatus
from exam_app.core.services.scoring import (
    calculate_result,
    count_statuses,
    question_status,
    score_percentage,
    seconds_per_question,
)

from conftest import START, answered, make_questions


def _score(questions, time_taken_seconds=0):
    return calculate_result(questions, time_taken_seconds, result_id="r1", date=START)


def test_question_status_classification():
    base = make_questions(1)[0]
    assert question_status(base) is QuestionStatus.SKIPPED
    assert question_status(answered(base, 1, None)) is QuestionStatus.PENDING_EVALUATION
    assert question_status(answered(base, 1, 1)) is QuestionStatus.CORRECT
    assert question_status(answered(base, 1, 2)) is QuestionStatus.WRONG
    # A correct option on an unattempted question does not change anything.
    assert question_status(answered(base, None, 2)) is QuestionStatus.SKIPPED


def test_mixed_result():
    q = make_questions(4)
    questions = (
        answered(q[0], 0, 0),
        answered(q[1], 1, 1),
        answered(q[2], 2, 3),
        answered(q[3], None, None),
    )
    result = _score(questions, time_taken_seconds=125)

    assert result.total_questions == 4
    assert result.attempted == 3
    assert result.correct == 2
    assert result.wrong == 1
    assert result.skipped == 1
    assert result.score == 7
    assert result.max_score == 16
    assert result.accuracy == pytest.approx(200 / 3)
    assert result.time_taken_seconds == 125
    assert result.id == "r1"
    assert result.date == START


def test_all_skipped_result():
    result = _score(make_questions(3))
    assert result.attempted == 0
    assert result.skipped == 3
    assert result.score == 0
    assert result.max_score == 12
    assert result.accuracy == 0.0


def test_score_can_be_negative():
    questions = tuple(answered(q, 0, 1) for q in make_questions(3))
    result = _score(questions)
    assert result.score == -3
    assert result.accuracy == 0.0
    assert score_percentage(result) == pytest.approx(-25.0)


def test_pending_question_blocks_scoring():
    q = make_questions(2)
    with pytest.raises(IncompleteEvaluationError) as excinfo:
        _score((answered(q[0], 1, None), answered(q[1], 1, 1)))
    assert excinfo.value.pending_count == 1


def test_result_does_not_depend_on_question_order():
    q = make_questions(8)
    questions = [
        answered(q[0], 0, 0),
        answered(q[1], 1, 2),
        answered(q[2], None, None),
        answered(q[3], 3, 3),
        answered(q[4], 2, 0),
        answered(q[5], None, 1),
        answered(q[6], 1, 1),
        answered(q[7], 0, 3),
    ]
    expected = _score(tuple(questions))
    shuffled = list(questions)
    random.Random(7).shuffle(shuffled)
    assert _score(tuple(shuffled)) == expected


def test_counts_add_up():
    q = make_questions(6)
    questions = (
        answered(q[0], 0, 0),
        answered(q[1], 1, 0),
        answered(q[2], None, None),
        answered(q[3], 2, 2),
        answered(q[4], 3, 1),
        answered(q[5], None, None),
    )
    result = _score(questions)
    assert result.correct + result.wrong + result.skipped == result.total_questions
    assert result.attempted == result.correct + result.wrong
    assert result.max_score == 4 * result.total_questions
    assert -result.attempted <= result.score <= result.max_score


def test_count_statuses():
    q = make_questions(3)
    counts = count_statuses((answered(q[0], 0, None), answered(q[1], 0, 0), q[2]))
    assert counts[QuestionStatus.PENDING_EVALUATION] == 1
    assert counts[QuestionStatus.CORRECT] == 1
    assert counts[QuestionStatus.SKIPPED] == 1
    assert counts[QuestionStatus.WRONG] == 0


def test_percentage_helpers_handle_empty_results():
    result = _score(())
    assert result.max_score == 0
    assert score_percentage(result) == 0.0
    assert seconds_per_question(result) == 0.0


def test_seconds_per_question():
    result = _score(make_questions(4), time_taken_seconds=100)
    assert seconds_per_question(result) == 25.0
    assert result.date.tzinfo is timezone.utc
