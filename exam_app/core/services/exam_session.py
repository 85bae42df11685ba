"""Pure state transitions for a single exam session.

Every function returns a new ``ExamSession``. Once a session is submitted,
selection and navigation return it unchanged.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
import logging
from typing import Sequence

from exam_app.core.errors import InvalidConfigError
from exam_app.core.models import ExamMode, ExamQuestion, ExamSession, TickOutcome
from exam_app.core.services.answer_store import check_question_index, with_selection
from exam_app.core.services.timer_engine import compute_tick

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_session(
    questions: Sequence[ExamQuestion],
    mode: ExamMode,
    time_limit_seconds: int | None = None,
    now: datetime | None = None,
) -> ExamSession:
    """Create a fresh session; selections and markings on ``questions`` are discarded."""
    if not questions:
        raise InvalidConfigError("An exam needs at least one question.")
    if mode is ExamMode.TIMER:
        if time_limit_seconds is None or time_limit_seconds <= 0:
            raise InvalidConfigError("Timer mode requires a positive time limit.")
        limit: int | None = int(time_limit_seconds)
    else:
        limit = None

    fresh = tuple(replace(q, selected_option=None, correct_option=None) for q in questions)
    return ExamSession(
        questions=fresh,
        start_instant=now or utc_now(),
        current_index=0,
        time_limit_seconds=limit,
        is_submitted=False,
        elapsed_seconds=0,
    )


def select_answer(session: ExamSession, question_index: int, option_index: int | None) -> ExamSession:
    """Set or clear (``option_index=None``) the selection on one question."""
    if session.is_submitted:
        logger.debug("Ignoring selection on question %s: session closed", question_index)
        return session
    questions = with_selection(session.questions, question_index, option_index)
    return replace(session, questions=questions)


def navigate(session: ExamSession, target_index: int) -> ExamSession:
    if session.is_submitted:
        logger.debug("Ignoring navigation to %s: session closed", target_index)
        return session
    check_question_index(session.questions, target_index)
    return replace(session, current_index=target_index)


def tick(session: ExamSession, now: datetime | None = None) -> TickOutcome:
    """Advance the session clock. An ``EXPIRED`` signal must be answered with ``submit``."""
    return compute_tick(session, now or utc_now())


def submit(session: ExamSession) -> ExamSession:
    if session.is_submitted:
        return session
    return replace(session, is_submitted=True)
