from __future__ import annotations

from exam_app.core.models import ExamMode
from exam_app.core.services.answer_store import count_answered, count_remaining, next_index, previous_index
from exam_app.core.services.exam_session import navigate, select_answer, start_session

from conftest import START, make_questions


def test_counts_follow_selections():
    session = start_session(make_questions(5), ExamMode.STOPWATCH, now=START)
    assert count_answered(session) == 0
    assert count_remaining(session) == 5

    session = select_answer(select_answer(session, 0, 1), 3, 0)
    assert count_answered(session) == 2
    assert count_remaining(session) == 3


def test_cleared_selection_counts_as_unanswered():
    session = start_session(make_questions(2), ExamMode.STOPWATCH, now=START)
    session = select_answer(select_answer(session, 0, 1), 0, None)
    assert count_answered(session) == 0


def test_next_and_previous_stay_in_bounds():
    session = start_session(make_questions(3), ExamMode.STOPWATCH, now=START)
    assert previous_index(session) == 0
    assert next_index(session) == 1

    last = navigate(session, 2)
    assert next_index(last) == 2
    assert previous_index(last) == 1
