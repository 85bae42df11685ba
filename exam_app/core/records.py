"""Pydantic schemas used for persistence and the HTTP API.

The domain works with frozen dataclasses; these records are the serialized
shape of the same data and validate it on the way back in.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from exam_app.core.models import (
    ClockSettings,
    CountdownSettings,
    CustomExam,
    ExamQuestion,
    ExamResult,
    ExamSession,
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class QuestionRecord(BaseModel):
    id: int
    text: str
    options: list[str] = Field(min_length=1)
    selected_option: int | None = None
    correct_option: int | None = None

    @model_validator(mode="after")
    def _check_indices(self) -> "QuestionRecord":
        for name in ("selected_option", "correct_option"):
            value = getattr(self, name)
            if value is not None and not 0 <= value < len(self.options):
                raise ValueError(f"{name} {value} is not a valid option index")
        return self

    @classmethod
    def from_domain(cls, question: ExamQuestion) -> "QuestionRecord":
        return cls(
            id=question.id,
            text=question.text,
            options=list(question.options),
            selected_option=question.selected_option,
            correct_option=question.correct_option,
        )

    def to_domain(self) -> ExamQuestion:
        return ExamQuestion(
            id=self.id,
            text=self.text,
            options=tuple(self.options),
            selected_option=self.selected_option,
            correct_option=self.correct_option,
        )


class SessionRecord(BaseModel):
    questions: list[QuestionRecord] = Field(min_length=1)
    current_index: int = Field(ge=0)
    start_instant: datetime
    time_limit_seconds: int | None = Field(default=None, gt=0)
    is_submitted: bool = False
    elapsed_seconds: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_consistency(self) -> "SessionRecord":
        if self.current_index >= len(self.questions):
            raise ValueError("current_index points past the last question")
        if self.time_limit_seconds is not None and self.elapsed_seconds > self.time_limit_seconds:
            raise ValueError("elapsed_seconds exceeds the time limit")
        return self

    @classmethod
    def from_domain(cls, session: ExamSession) -> "SessionRecord":
        return cls(
            questions=[QuestionRecord.from_domain(q) for q in session.questions],
            current_index=session.current_index,
            start_instant=session.start_instant,
            time_limit_seconds=session.time_limit_seconds,
            is_submitted=session.is_submitted,
            elapsed_seconds=session.elapsed_seconds,
        )

    def to_domain(self) -> ExamSession:
        return ExamSession(
            questions=tuple(q.to_domain() for q in self.questions),
            start_instant=_as_utc(self.start_instant),
            current_index=self.current_index,
            time_limit_seconds=self.time_limit_seconds,
            is_submitted=self.is_submitted,
            elapsed_seconds=self.elapsed_seconds,
        )


class ResultRecord(BaseModel):
    id: str
    date: datetime
    total_questions: int = Field(ge=0)
    attempted: int = Field(ge=0)
    correct: int = Field(ge=0)
    wrong: int = Field(ge=0)
    skipped: int = Field(ge=0)
    score: int
    max_score: int = Field(ge=0)
    accuracy: float = Field(ge=0, le=100)
    time_taken_seconds: int = Field(ge=0)

    @classmethod
    def from_domain(cls, result: ExamResult) -> "ResultRecord":
        return cls(
            id=result.id,
            date=result.date,
            total_questions=result.total_questions,
            attempted=result.attempted,
            correct=result.correct,
            wrong=result.wrong,
            skipped=result.skipped,
            score=result.score,
            max_score=result.max_score,
            accuracy=result.accuracy,
            time_taken_seconds=result.time_taken_seconds,
        )

    def to_domain(self) -> ExamResult:
        return ExamResult(
            id=self.id,
            date=_as_utc(self.date),
            total_questions=self.total_questions,
            attempted=self.attempted,
            correct=self.correct,
            wrong=self.wrong,
            skipped=self.skipped,
            score=self.score,
            max_score=self.max_score,
            accuracy=self.accuracy,
            time_taken_seconds=self.time_taken_seconds,
        )


class ClockSettingsRecord(BaseModel):
    design: Literal["flip", "minimal", "bold"] = "flip"
    theme: Literal["pure-black", "dark-gray", "soft-white"] = "pure-black"
    time_format: Literal["12h", "24h"] = "24h"
    show_seconds: bool = True

    @classmethod
    def from_domain(cls, settings: ClockSettings) -> "ClockSettingsRecord":
        return cls(
            design=settings.design,
            theme=settings.theme,
            time_format=settings.time_format,
            show_seconds=settings.show_seconds,
        )

    def to_domain(self) -> ClockSettings:
        return ClockSettings(
            design=self.design,
            theme=self.theme,
            time_format=self.time_format,
            show_seconds=self.show_seconds,
        )


class CustomExamRecord(BaseModel):
    id: str
    name: str
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        datetime.strptime(value, "%Y-%m-%d")
        return value

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str | None) -> str | None:
        if value is not None:
            datetime.strptime(value, "%H:%M")
        return value


class CountdownSettingsRecord(BaseModel):
    selected_exam_id: str | None = None
    custom_exams: list[CustomExamRecord] = Field(default_factory=list)
    clock_settings: ClockSettingsRecord = Field(default_factory=ClockSettingsRecord)

    @classmethod
    def from_domain(cls, settings: CountdownSettings) -> "CountdownSettingsRecord":
        return cls(
            selected_exam_id=settings.selected_exam_id,
            custom_exams=[
                CustomExamRecord(id=e.id, name=e.name, date=e.date, time=e.time)
                for e in settings.custom_exams
            ],
            clock_settings=ClockSettingsRecord.from_domain(settings.clock_settings),
        )

    def to_domain(self) -> CountdownSettings:
        return CountdownSettings(
            selected_exam_id=self.selected_exam_id,
            custom_exams=tuple(
                CustomExam(id=e.id, name=e.name, date=e.date, time=e.time) for e in self.custom_exams
            ),
            clock_settings=self.clock_settings.to_domain(),
        )
