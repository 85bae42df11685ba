"""Business logic for the exam flow shared between the Qt UI and the API."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
import logging
from threading import Lock
from typing import Callable, Sequence

from exam_app.core.errors import ExamStateError
from exam_app.core.models import (
    ClockSettings,
    CountdownSettings,
    ExamMode,
    ExamQuestion,
    ExamResult,
    ExamSession,
    SessionState,
    TickOutcome,
    TimerSignal,
)
from exam_app.core.question_importer import parse_questions_text
from exam_app.core.services import exam_session, self_evaluation
from exam_app.core.services.answer_store import count_answered, count_remaining, next_index, previous_index
from exam_app.core.services.question_bank import QuestionBank
from exam_app.core.services.timer_engine import remaining_seconds
from exam_app.core.storage import ExamStorage, MemoryStore

logger = logging.getLogger(__name__)

_ACTIVE_STATES = (SessionState.IN_PROGRESS, SessionState.SUBMITTED, SessionState.EVALUATING)


class ExamManager:
    """Facade over the question bank, the current session and persistence.

    Holds the only mutable reference to the current session. Every operation
    runs under one lock so clock ticks from a background thread and user
    actions never interleave, and a submit is seen by every later call.
    """

    def __init__(
        self,
        storage: ExamStorage | None = None,
        clock: Callable[[], datetime] = exam_session.utc_now,
    ) -> None:
        self._lock = Lock()
        self._storage = storage or ExamStorage(MemoryStore())
        self._clock = clock

        self._bank = QuestionBank()
        self._state = SessionState.SETUP
        self._session: ExamSession | None = None
        self._evaluation: tuple[ExamQuestion, ...] = ()
        self._last_result: ExamResult | None = None

    # --- Question bank ---

    def load_questions(self, questions: Sequence[ExamQuestion]) -> None:
        with self._lock:
            self._ensure_not_active("replace the questions")
            self._bank.load_questions(questions)
            logger.info("Loaded %d question(s)", self._bank.get_question_count())

    def import_questions_text(self, text: str) -> int:
        """Parse the plain-text question format and load the result."""
        questions = parse_questions_text(text)
        self.load_questions(questions)
        return len(questions)

    def get_questions(self) -> tuple[ExamQuestion, ...]:
        with self._lock:
            return self._bank.get_questions()

    def has_questions(self) -> bool:
        with self._lock:
            return self._bank.has_questions()

    def add_question(self, question: ExamQuestion) -> ExamQuestion:
        with self._lock:
            self._ensure_not_active("edit the questions")
            return self._bank.add_question(question)

    def update_question(self, index: int, question: ExamQuestion) -> None:
        with self._lock:
            self._ensure_not_active("edit the questions")
            self._bank.update_question(index, question)

    def delete_question(self, index: int) -> None:
        with self._lock:
            self._ensure_not_active("edit the questions")
            self._bank.delete_question(index)

    # --- Session lifecycle ---

    def get_state(self) -> SessionState:
        with self._lock:
            return self._state

    def needs_ticks(self) -> bool:
        with self._lock:
            return self._state in _ACTIVE_STATES

    def get_session(self) -> ExamSession | None:
        with self._lock:
            return self._session

    def start_exam(self, mode: ExamMode, time_limit_seconds: int | None = None) -> ExamSession:
        with self._lock:
            self._ensure_not_active("start a new exam")
            session = exam_session.start_session(
                self._bank.get_questions(),
                mode,
                time_limit_seconds,
                now=self._clock(),
            )
            self._session = session
            self._evaluation = ()
            self._last_result = None
            self._state = SessionState.IN_PROGRESS
            self._storage.save_session(session)
            logger.info(
                "Exam started: %d question(s), %s mode",
                len(session.questions),
                session.mode.value,
            )
            return session

    def has_saved_session(self) -> bool:
        return self._storage.load_session() is not None

    def resume_saved_session(self) -> ExamSession | None:
        """Restore the session left in storage by a previous run, if any."""
        with self._lock:
            self._ensure_not_active("resume a saved exam")
            saved = self._storage.load_session()
            if saved is None:
                return None
            try:
                self._bank.load_questions(saved.questions)
            except ValueError as exc:
                raise ExamStateError(f"The saved exam cannot be restored: {exc}") from exc
            self._session = saved
            self._last_result = None
            if saved.is_submitted:
                self._enter_submitted(saved)
            elif remaining_seconds(saved) == 0:
                # Saved after the last tick used up the time but before the submit.
                logger.info("Saved exam has no time left; submitting")
                self._enter_submitted(exam_session.submit(saved))
            else:
                self._state = SessionState.IN_PROGRESS
                # Time may have run out while the app was closed.
                self._apply_tick(self._clock())
            logger.info("Resumed saved exam in state %s", self._state.name)
            return self._session

    def select_answer(self, question_index: int, option_index: int | None) -> bool:
        """Select (or clear with None) an option. Returns False once the session is closed."""
        with self._lock:
            session = self._require_session()
            updated = exam_session.select_answer(session, question_index, option_index)
            return self._store_mutation(session, updated)

    def select_current(self, option_index: int | None) -> bool:
        with self._lock:
            session = self._require_session()
            updated = exam_session.select_answer(session, session.current_index, option_index)
            return self._store_mutation(session, updated)

    def clear_selection(self, question_index: int | None = None) -> bool:
        with self._lock:
            session = self._require_session()
            target = session.current_index if question_index is None else question_index
            updated = exam_session.select_answer(session, target, None)
            return self._store_mutation(session, updated)

    def navigate(self, target_index: int) -> bool:
        with self._lock:
            session = self._require_session()
            updated = exam_session.navigate(session, target_index)
            return self._store_mutation(session, updated)

    def next_question(self) -> bool:
        with self._lock:
            session = self._require_session()
            updated = exam_session.navigate(session, next_index(session))
            return self._store_mutation(session, updated)

    def previous_question(self) -> bool:
        with self._lock:
            session = self._require_session()
            updated = exam_session.navigate(session, previous_index(session))
            return self._store_mutation(session, updated)

    def count_answered(self) -> int:
        with self._lock:
            return count_answered(self._require_session())

    def count_remaining(self) -> int:
        with self._lock:
            return count_remaining(self._require_session())

    def tick(self, now: datetime | None = None) -> TickOutcome | None:
        """Advance the clock; an expired timer submits the session."""
        with self._lock:
            if self._session is None or self._state not in _ACTIVE_STATES:
                return None
            return self._apply_tick(now or self._clock())

    def submit(self) -> ExamSession:
        """Submit the current session. Submitting twice is a no-op."""
        with self._lock:
            session = self._require_session()
            if session.is_submitted:
                return session
            self._enter_submitted(exam_session.submit(session))
            logger.info("Exam submitted after %ss", session.elapsed_seconds)
            return self._session

    def abandon(self) -> None:
        """Discard the current session, as when the user navigates home."""
        with self._lock:
            if self._session is not None:
                logger.info("Exam abandoned in state %s", self._state.name)
            self._session = None
            self._evaluation = ()
            self._state = SessionState.ABANDONED
            self._storage.clear_session()

    # --- Self-evaluation ---

    def get_evaluation_questions(self) -> tuple[ExamQuestion, ...]:
        with self._lock:
            self._ensure_evaluating()
            return self._evaluation

    def mark_correct(self, question_index: int, option_index: int | None) -> tuple[ExamQuestion, ...]:
        with self._lock:
            self._ensure_evaluating()
            self._evaluation = self_evaluation.mark_correct(self._evaluation, question_index, option_index)
            self._state = SessionState.EVALUATING
            self._session = replace(self._require_session(), questions=self._evaluation)
            self._storage.save_session(self._session)
            return self._evaluation

    def can_finalize(self) -> bool:
        with self._lock:
            self._ensure_evaluating()
            return self_evaluation.can_finalize(self._evaluation)

    def finalize(self) -> ExamResult:
        """Score the evaluated questions, record the result and drop the session."""
        with self._lock:
            self._ensure_evaluating()
            session = self._require_session()
            result = self_evaluation.finalize(
                self._evaluation,
                time_taken_seconds=session.elapsed_seconds,
                now=self._clock(),
            )
            self._storage.append_result(result)
            self._storage.clear_session()
            self._session = None
            self._evaluation = ()
            self._last_result = result
            self._state = SessionState.COMPLETED
            logger.info("Exam completed: score %d/%d", result.score, result.max_score)
            return result

    def get_last_result(self) -> ExamResult | None:
        with self._lock:
            return self._last_result

    def get_results_history(self) -> list[ExamResult]:
        return self._storage.load_results()

    # --- Preferences ---

    def get_clock_settings(self) -> ClockSettings:
        return self._storage.get_clock_settings()

    def save_clock_settings(self, settings: ClockSettings) -> bool:
        return self._storage.save_clock_settings(settings)

    def get_countdown_settings(self) -> CountdownSettings:
        return self._storage.get_countdown_settings()

    def save_countdown_settings(self, settings: CountdownSettings) -> bool:
        return self._storage.save_countdown_settings(settings)

    # --- Internal helpers (lock held) ---

    def _apply_tick(self, now: datetime) -> TickOutcome:
        outcome = exam_session.tick(self._session, now)
        if outcome.signal is TimerSignal.STOPPED:
            return outcome
        self._session = outcome.session
        if outcome.signal is TimerSignal.EXPIRED:
            logger.info("Time limit reached; submitting exam")
            self._enter_submitted(exam_session.submit(outcome.session))
        else:
            self._storage.save_session(outcome.session)
        return outcome

    def _enter_submitted(self, session: ExamSession) -> None:
        self._session = session
        self._evaluation = session.questions
        self._state = SessionState.SUBMITTED
        self._storage.save_session(session)

    def _store_mutation(self, before: ExamSession, after: ExamSession) -> bool:
        if after is before:
            if before.is_submitted:
                logger.debug("Mutation ignored: session already submitted")
            return not before.is_submitted
        self._session = after
        self._storage.save_session(after)
        return True

    def _require_session(self) -> ExamSession:
        if self._session is None:
            raise ExamStateError("No exam session is active.")
        return self._session

    def _ensure_not_active(self, action: str) -> None:
        if self._state in _ACTIVE_STATES:
            raise ExamStateError(f"Cannot {action} while an exam is in progress.")

    def _ensure_evaluating(self) -> None:
        if self._state not in (SessionState.SUBMITTED, SessionState.EVALUATING):
            raise ExamStateError("The exam has not been submitted yet.")
