from __future__ import annotations

from datetime import timedelta

import pytest

from exam_app.core.errors import InvalidConfigError, OutOfRangeError
from exam_app.core.models import ExamMode
from exam_app.core.services.exam_session import navigate, select_answer, start_session, submit

from conftest import START, answered, make_questions


def test_start_timer_session():
    session = start_session(make_questions(3), ExamMode.TIMER, 600, now=START)
    assert session.current_index == 0
    assert session.start_instant == START
    assert session.time_limit_seconds == 600
    assert session.mode is ExamMode.TIMER
    assert not session.is_submitted
    assert session.elapsed_seconds == 0


def test_start_stopwatch_ignores_time_limit():
    session = start_session(make_questions(3), ExamMode.STOPWATCH, 600, now=START)
    assert session.time_limit_seconds is None
    assert session.mode is ExamMode.STOPWATCH


@pytest.mark.parametrize("limit", [None, 0, -5])
def test_timer_requires_positive_limit(limit):
    with pytest.raises(InvalidConfigError):
        start_session(make_questions(3), ExamMode.TIMER, limit, now=START)


def test_empty_question_set_rejected():
    with pytest.raises(InvalidConfigError):
        start_session((), ExamMode.STOPWATCH, now=START)


def test_start_discards_previous_answers_and_markings():
    questions = tuple(answered(q, 1, 2) for q in make_questions(2))
    session = start_session(questions, ExamMode.STOPWATCH, now=START)
    assert all(q.selected_option is None and q.correct_option is None for q in session.questions)


def test_select_answer_only_touches_addressed_question():
    session = start_session(make_questions(3), ExamMode.STOPWATCH, now=START)
    session = select_answer(session, 0, 2)
    updated = select_answer(session, 1, 3)
    assert [q.selected_option for q in updated.questions] == [2, 3, None]
    assert [q.selected_option for q in session.questions] == [2, None, None]


def test_select_none_clears_selection():
    session = start_session(make_questions(2), ExamMode.STOPWATCH, now=START)
    session = select_answer(session, 1, 0)
    session = select_answer(session, 1, None)
    assert session.questions[1].selected_option is None


@pytest.mark.parametrize("question_index, option_index", [(5, 0), (-1, 0), (0, 4), (0, -1)])
def test_select_answer_bounds(question_index, option_index):
    session = start_session(make_questions(2), ExamMode.STOPWATCH, now=START)
    with pytest.raises(OutOfRangeError):
        select_answer(session, question_index, option_index)


def test_navigate_sets_index():
    session = start_session(make_questions(3), ExamMode.STOPWATCH, now=START)
    assert navigate(session, 2).current_index == 2


@pytest.mark.parametrize("target", [-1, 3, 100])
def test_navigate_out_of_range(target):
    session = start_session(make_questions(3), ExamMode.STOPWATCH, now=START)
    with pytest.raises(OutOfRangeError):
        navigate(session, target)


def test_submit_is_idempotent():
    session = start_session(make_questions(3), ExamMode.TIMER, 60, now=START)
    once = submit(session)
    assert once.is_submitted
    assert submit(once) == once


def test_mutations_after_submit_are_noops():
    session = start_session(make_questions(3), ExamMode.STOPWATCH, now=START)
    session = submit(select_answer(session, 0, 1))
    assert select_answer(session, 0, 3) == session
    assert select_answer(session, 2, None) == session
    assert navigate(session, 2) == session
    # Closed sessions ignore the request before any bounds check.
    assert navigate(session, 99) == session


def test_start_instant_is_captured_at_start():
    later = START + timedelta(minutes=5)
    session = start_session(make_questions(1), ExamMode.STOPWATCH, now=later)
    assert session.start_instant == later
