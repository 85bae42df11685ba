"""Clock computations for countdown and stopwatch sessions.

All values are derived from ``now - start_instant``. Nothing is accumulated
between ticks, so a suspended process or a skipped tick only delays the next
observation; it never skews the reported time.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
import math

from exam_app.constants.exam_constants import TIME_WARNING_WINDOW_SECONDS
from exam_app.core.models import ExamSession, TickOutcome, TimerSignal


def elapsed_since(start_instant: datetime, now: datetime) -> int:
    """Whole seconds between ``start_instant`` and ``now``, never negative."""
    seconds = (now - start_instant).total_seconds()
    return max(0, math.floor(seconds))


def remaining_seconds(session: ExamSession) -> int | None:
    """Seconds left on the countdown, or None in stopwatch mode."""
    if session.time_limit_seconds is None:
        return None
    return max(0, session.time_limit_seconds - session.elapsed_seconds)


def display_seconds(session: ExamSession) -> int:
    """Value shown on the exam clock: remaining time for timers, elapsed for stopwatches."""
    remaining = remaining_seconds(session)
    return session.elapsed_seconds if remaining is None else remaining


def is_time_warning(session: ExamSession) -> bool:
    remaining = remaining_seconds(session)
    return remaining is not None and 0 < remaining < TIME_WARNING_WINDOW_SECONDS


def compute_tick(session: ExamSession, now: datetime) -> TickOutcome:
    """Recompute elapsed time for ``session`` at ``now``.

    Elapsed never decreases and never exceeds the time limit. ``EXPIRED`` is
    reported only by the tick on which the remaining time first reaches zero.
    """
    if session.is_submitted:
        return TickOutcome(session=session, signal=TimerSignal.STOPPED)

    elapsed = max(session.elapsed_seconds, elapsed_since(session.start_instant, now))
    limit = session.time_limit_seconds
    if limit is None:
        return TickOutcome(session=replace(session, elapsed_seconds=elapsed), signal=TimerSignal.RUNNING)

    elapsed = min(elapsed, limit)
    crossed = session.elapsed_seconds < limit <= elapsed
    signal = TimerSignal.EXPIRED if crossed else TimerSignal.RUNNING
    return TickOutcome(session=replace(session, elapsed_seconds=elapsed), signal=signal)
