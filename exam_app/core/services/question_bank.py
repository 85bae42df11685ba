"""Service for managing the editable set of exam questions."""

from __future__ import annotations

from typing import Sequence

from exam_app.constants.exam_constants import OPTIONS_PER_QUESTION
from exam_app.core.errors import OutOfRangeError
from exam_app.core.models import ExamQuestion


class QuestionBank:
    """Ordered question list fed to new exam sessions. Ids always run 1..n."""

    def __init__(self) -> None:
        self._questions: list[ExamQuestion] = []

    def load_questions(self, questions: Sequence[ExamQuestion]) -> None:
        """Replace the current question set."""
        if not questions:
            raise ValueError("Question set must contain at least one question.")
        prepared = [self._prepare_question(q) for q in questions]
        self._questions = self._renumber(prepared)

    def get_questions(self) -> tuple[ExamQuestion, ...]:
        return tuple(self._questions)

    def has_questions(self) -> bool:
        return bool(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def add_question(self, question: ExamQuestion) -> ExamQuestion:
        prepared = self._prepare_question(question)
        self._questions.append(prepared)
        self._questions = self._renumber(self._questions)
        return self._questions[-1]

    def update_question(self, index: int, question: ExamQuestion) -> None:
        self._check_index(index)
        prepared = self._prepare_question(question)
        self._questions[index] = ExamQuestion(
            id=self._questions[index].id,
            text=prepared.text,
            options=prepared.options,
        )

    def delete_question(self, index: int) -> None:
        self._check_index(index)
        if len(self._questions) <= 1:
            raise ValueError("Cannot delete the last remaining question.")
        self._questions.pop(index)
        self._questions = self._renumber(self._questions)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._questions):
            raise OutOfRangeError(f"Question index {index} out of range")

    @staticmethod
    def _renumber(questions: list[ExamQuestion]) -> list[ExamQuestion]:
        return [
            ExamQuestion(id=position, text=q.text, options=q.options)
            for position, q in enumerate(questions, start=1)
        ]

    @staticmethod
    def _prepare_question(question: ExamQuestion) -> ExamQuestion:
        """Validate and normalize a question; selections and markings are dropped."""
        cleaned_text = question.text.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")
        if len(question.options) != OPTIONS_PER_QUESTION:
            raise ValueError(f"Each question must have exactly {OPTIONS_PER_QUESTION} options.")
        options = tuple(option.strip() for option in question.options)
        if any(not option for option in options):
            raise ValueError("Option text cannot be empty.")
        return ExamQuestion(id=question.id, text=cleaned_text, options=options)
