from __future__ import annotations

from dataclasses import replace

import pytest

from exam_app.core.errors import ExamStateError, IncompleteEvaluationError, InvalidConfigError
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import ExamMode, ExamQuestion, SessionState, TimerSignal
from exam_app.core.services.exam_session import start_session
from exam_app.core.storage import ExamStorage

from conftest import BrokenStore, make_questions


def test_new_manager_starts_in_setup(manager):
    assert manager.get_state() is SessionState.SETUP
    assert manager.get_session() is None
    assert manager.tick() is None
    assert not manager.needs_ticks()
    with pytest.raises(ExamStateError):
        manager.select_answer(0, 1)


def test_start_requires_questions(storage, clock):
    empty = ExamManager(storage=storage, clock=clock)
    with pytest.raises(InvalidConfigError):
        empty.start_exam(ExamMode.STOPWATCH)
    assert empty.get_state() is SessionState.SETUP


def test_start_persists_session(manager, storage):
    session = manager.start_exam(ExamMode.TIMER, 600)
    assert manager.get_state() is SessionState.IN_PROGRESS
    assert manager.needs_ticks()
    assert storage.load_session() == session


def test_cannot_start_or_edit_while_active(manager):
    manager.start_exam(ExamMode.STOPWATCH)
    with pytest.raises(ExamStateError):
        manager.start_exam(ExamMode.STOPWATCH)
    with pytest.raises(ExamStateError):
        manager.load_questions(make_questions(2))
    with pytest.raises(ExamStateError):
        manager.delete_question(0)


def test_answers_and_navigation(manager, storage):
    manager.start_exam(ExamMode.STOPWATCH)
    assert manager.select_answer(0, 2)
    assert manager.next_question()
    assert manager.select_current(1)
    assert manager.get_session().current_index == 1
    assert manager.count_answered() == 2
    assert manager.count_remaining() == 2

    assert manager.clear_selection()
    assert manager.count_answered() == 1
    assert manager.previous_question()
    assert manager.previous_question()
    assert manager.get_session().current_index == 0

    assert manager.navigate(3)
    assert manager.next_question()
    assert manager.get_session().current_index == 3
    assert storage.load_session() == manager.get_session()


def test_timer_expiry_submits_once(manager, clock, storage):
    manager.start_exam(ExamMode.TIMER, 10)
    manager.select_answer(0, 1)

    clock.advance(9.5)
    assert manager.tick().signal is TimerSignal.RUNNING
    assert manager.get_state() is SessionState.IN_PROGRESS

    clock.advance(0.5)
    outcome = manager.tick()
    assert outcome.signal is TimerSignal.EXPIRED
    assert outcome.session.elapsed_seconds == 10
    assert manager.get_state() is SessionState.SUBMITTED
    assert manager.get_session().is_submitted
    assert storage.load_session().is_submitted

    clock.advance(5)
    assert manager.tick().signal is TimerSignal.STOPPED
    assert manager.get_session().elapsed_seconds == 10


def test_mutations_rejected_after_submit(manager):
    manager.start_exam(ExamMode.STOPWATCH)
    manager.select_answer(0, 1)
    manager.submit()

    assert manager.select_answer(0, 3) is False
    assert manager.select_current(2) is False
    assert manager.navigate(2) is False
    assert manager.get_session().questions[0].selected_option == 1
    assert manager.get_session().current_index == 0


def test_submit_is_idempotent(manager, clock):
    manager.start_exam(ExamMode.STOPWATCH)
    clock.advance(30)
    manager.tick()
    first = manager.submit()
    clock.advance(30)
    assert manager.submit() == first
    assert manager.get_session().elapsed_seconds == 30


def test_evaluation_requires_submission(manager):
    manager.start_exam(ExamMode.STOPWATCH)
    with pytest.raises(ExamStateError):
        manager.get_evaluation_questions()
    with pytest.raises(ExamStateError):
        manager.finalize()


def test_full_flow_records_result(manager, clock, storage):
    manager.start_exam(ExamMode.STOPWATCH)
    manager.select_answer(0, 0)
    manager.select_answer(1, 1)
    manager.select_answer(2, 2)
    clock.advance(95)
    manager.tick()
    manager.submit()

    assert not manager.can_finalize()
    with pytest.raises(IncompleteEvaluationError):
        manager.finalize()

    manager.mark_correct(0, 0)
    manager.mark_correct(1, 1)
    manager.mark_correct(2, 3)
    assert manager.get_state() is SessionState.EVALUATING
    assert manager.can_finalize()

    result = manager.finalize()
    assert (result.correct, result.wrong, result.skipped) == (2, 1, 1)
    assert result.score == 7
    assert result.time_taken_seconds == 95
    assert result.date == clock.now

    assert manager.get_state() is SessionState.COMPLETED
    assert manager.get_session() is None
    assert manager.get_last_result() == result
    assert manager.get_results_history() == [result]
    assert storage.load_session() is None


def test_abandon_clears_session(manager, storage):
    manager.start_exam(ExamMode.TIMER, 60)
    manager.abandon()
    assert manager.get_state() is SessionState.ABANDONED
    assert manager.get_session() is None
    assert storage.load_session() is None
    assert manager.get_results_history() == []
    manager.start_exam(ExamMode.STOPWATCH)
    assert manager.get_state() is SessionState.IN_PROGRESS


def test_resume_in_progress_session(manager, storage, clock):
    manager.start_exam(ExamMode.TIMER, 600)
    manager.select_answer(2, 3)
    manager.navigate(2)

    clock.advance(42)
    restarted = ExamManager(storage=storage, clock=clock)
    assert restarted.has_saved_session()
    session = restarted.resume_saved_session()

    assert restarted.get_state() is SessionState.IN_PROGRESS
    assert session.current_index == 2
    assert session.questions[2].selected_option == 3
    assert session.elapsed_seconds == 42
    assert len(restarted.get_questions()) == 4


def test_resume_after_time_ran_out(manager, storage, clock):
    manager.start_exam(ExamMode.TIMER, 60)
    clock.advance(300)

    restarted = ExamManager(storage=storage, clock=clock)
    session = restarted.resume_saved_session()
    assert session.is_submitted
    assert session.elapsed_seconds == 60
    assert restarted.get_state() is SessionState.SUBMITTED


def test_resume_keeps_evaluation_markings(manager, storage, clock):
    manager.start_exam(ExamMode.STOPWATCH)
    manager.select_answer(0, 1)
    manager.select_answer(1, 1)
    manager.submit()
    manager.mark_correct(0, 1)

    restarted = ExamManager(storage=storage, clock=clock)
    restarted.resume_saved_session()
    assert restarted.get_state() is SessionState.SUBMITTED
    assert restarted.get_evaluation_questions()[0].correct_option == 1
    assert not restarted.can_finalize()
    restarted.mark_correct(1, 0)
    assert restarted.finalize().score == 3


def test_resume_without_saved_session(storage, clock):
    fresh = ExamManager(storage=storage, clock=clock)
    assert not fresh.has_saved_session()
    assert fresh.resume_saved_session() is None
    assert fresh.get_state() is SessionState.SETUP


def test_import_questions_text(storage, clock):
    fresh = ExamManager(storage=storage, clock=clock)
    count = fresh.import_questions_text("Q: One?\nA: a\nB: b\nC: c\nD: d\n")
    assert count == 1
    assert fresh.has_questions()


def test_resume_session_saved_with_no_time_left(storage, clock):
    session = start_session(make_questions(3), ExamMode.TIMER, 10, now=clock.now)
    storage.save_session(replace(session, elapsed_seconds=10))

    restarted = ExamManager(storage=storage, clock=clock)
    resumed = restarted.resume_saved_session()
    assert resumed.is_submitted
    assert resumed.elapsed_seconds == 10
    assert restarted.get_state() is SessionState.SUBMITTED
    assert storage.load_session().is_submitted

    clock.advance(3)
    assert restarted.tick().signal is TimerSignal.STOPPED
    assert restarted.get_state() is SessionState.SUBMITTED


def test_resume_rejects_questions_the_bank_cannot_hold(storage, clock):
    two_options = (ExamQuestion(id=1, text="Yes or no?", options=("yes", "no")),)
    storage.save_session(start_session(two_options, ExamMode.STOPWATCH, now=clock.now))

    restarted = ExamManager(storage=storage, clock=clock)
    with pytest.raises(ExamStateError):
        restarted.resume_saved_session()
    assert restarted.get_state() is SessionState.SETUP
    assert restarted.get_session() is None


def test_failed_writes_do_not_block_the_exam(clock):
    broken = ExamManager(storage=ExamStorage(BrokenStore()), clock=clock)
    broken.load_questions(make_questions(2))

    broken.start_exam(ExamMode.TIMER, 60)
    assert broken.select_answer(0, 1)
    assert broken.next_question()
    clock.advance(20)
    assert broken.tick().signal is TimerSignal.RUNNING
    broken.submit()
    assert broken.get_state() is SessionState.SUBMITTED

    broken.mark_correct(0, 1)
    result = broken.finalize()
    assert result.score == 4
    assert result.time_taken_seconds == 20
    assert broken.get_state() is SessionState.COMPLETED
    assert broken.get_last_result() == result
    assert broken.get_results_history() == []
