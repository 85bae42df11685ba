"""Domain models for the exam application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto


class ExamMode(str, Enum):
    """How the exam clock behaves."""

    TIMER = "timer"
    STOPWATCH = "stopwatch"


class SessionState(Enum):
    """Lifecycle stage of the exam flow."""

    SETUP = auto()
    IN_PROGRESS = auto()
    SUBMITTED = auto()
    EVALUATING = auto()
    COMPLETED = auto()
    ABANDONED = auto()


class TimerSignal(Enum):
    """Outcome of a single clock tick."""

    RUNNING = auto()
    EXPIRED = auto()
    STOPPED = auto()  # the session was already submitted


class QuestionStatus(str, Enum):
    """Self-evaluation status of one question."""

    SKIPPED = "skipped"
    PENDING_EVALUATION = "pending"
    CORRECT = "correct"
    WRONG = "wrong"


@dataclass(frozen=True, slots=True)
class ExamQuestion:
    """Multiple-choice question together with the user's selection and marking."""

    id: int
    text: str
    options: tuple[str, ...]
    selected_option: int | None = None
    correct_option: int | None = None


@dataclass(frozen=True, slots=True)
class ExamSession:
    """One attempt at a question set, including timing and answer state."""

    questions: tuple[ExamQuestion, ...]
    start_instant: datetime
    current_index: int = 0
    time_limit_seconds: int | None = None  # None means stopwatch mode
    is_submitted: bool = False
    elapsed_seconds: int = 0

    @property
    def mode(self) -> ExamMode:
        return ExamMode.STOPWATCH if self.time_limit_seconds is None else ExamMode.TIMER

    @property
    def current_question(self) -> ExamQuestion:
        return self.questions[self.current_index]


@dataclass(frozen=True, slots=True)
class TickOutcome:
    """Session after a tick plus the signal the tick produced."""

    session: ExamSession
    signal: TimerSignal


@dataclass(frozen=True, slots=True)
class ExamResult:
    """Final scoring record produced once per completed session."""

    id: str
    date: datetime
    total_questions: int
    attempted: int
    correct: int
    wrong: int
    skipped: int
    score: int
    max_score: int
    accuracy: float
    time_taken_seconds: int


@dataclass(frozen=True, slots=True)
class ClockSettings:
    """Display preferences for the clock views."""

    design: str = "flip"
    theme: str = "pure-black"
    time_format: str = "24h"
    show_seconds: bool = True


@dataclass(frozen=True, slots=True)
class CustomExam:
    """User-defined exam date shown on the countdown page."""

    id: str
    name: str
    date: str  # YYYY-MM-DD
    time: str | None = None  # HH:MM


@dataclass(frozen=True, slots=True)
class CountdownSettings:
    """Preferences for the exam-day countdown."""

    selected_exam_id: str | None = None
    custom_exams: tuple[CustomExam, ...] = ()
    clock_settings: ClockSettings = field(default_factory=ClockSettings)


@dataclass(frozen=True, slots=True)
class CountdownRemaining:
    """Whole days, hours, minutes and seconds until a target instant."""

    days: int
    hours: int
    minutes: int
    seconds: int
    is_expired: bool
