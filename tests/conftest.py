from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import ExamQuestion
from exam_app.core.storage import ExamStorage, MemoryStore

START = datetime(2025, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def make_questions(count: int) -> tuple[ExamQuestion, ...]:
    return tuple(
        ExamQuestion(id=i + 1, text=f"Question {i + 1}?", options=("w", "x", "y", "z"))
        for i in range(count)
    )


def answered(question: ExamQuestion, selected: int | None, correct: int | None) -> ExamQuestion:
    return ExamQuestion(
        id=question.id,
        text=question.text,
        options=question.options,
        selected_option=selected,
        correct_option=correct,
    )


class FakeClock:
    """Manually advanced clock for deterministic timing."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def storage(store: MemoryStore) -> ExamStorage:
    return ExamStorage(store)


@pytest.fixture
def manager(storage: ExamStorage, clock: FakeClock) -> ExamManager:
    exam_manager = ExamManager(storage=storage, clock=clock)
    exam_manager.load_questions(make_questions(4))
    return exam_manager


class BrokenStore:
    """Store whose every operation fails like a full or read-only disk."""

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("disk full")

    def delete(self, key):
        raise OSError("read-only")
